import uuid

import pytest

from walletsvc.domain import Account, Client, DomainError, Transaction


def test_create_account():
    client = Client("John Doe", "john@example.com")
    account = Account(client)
    assert account.client.id == client.id
    assert account.balance == 0


def test_create_account_with_no_client():
    with pytest.raises(DomainError):
        Account(None)


def test_credit_account():
    account = Account(Client("John Doe", "john@example.com"))
    account.credit(100)
    assert account.balance == 100.0


def test_debit_account():
    account = Account(Client("John Doe", "john@example.com"))
    account.credit(100)
    account.debit(50)
    assert account.balance == 50.0


def test_create_new_client():
    client = Client("John Doe", "john@example.com")
    assert client.name == "John Doe"
    assert client.email == "john@example.com"
    assert str(uuid.UUID(client.id)) == client.id


def test_create_new_client_when_args_are_invalid():
    with pytest.raises(DomainError):
        Client("", "")


def test_create_client_without_email():
    with pytest.raises(DomainError, match="email is required"):
        Client("John Doe", "")


def test_update_client():
    client = Client("John Doe", "john@example.com")
    client.update("John Doe Update", "john@example.com")
    assert client.name == "John Doe Update"
    assert client.email == "john@example.com"


def test_update_client_with_invalid_args():
    client = Client("John Doe", "john@example.com")
    with pytest.raises(DomainError, match="name is required"):
        client.update("", "john@example.com")


def test_add_account_to_client():
    client = Client("John Doe", "john@example.com")
    account = Account(client)
    client.add_account(account)
    assert len(client.accounts) == 1
    assert account.client.id == client.id


def test_add_foreign_account_to_client():
    client = Client("John Doe", "john@example.com")
    other = Client("Jane Doe", "jane@example.com")
    with pytest.raises(DomainError, match="account does not belong to this client"):
        client.add_account(Account(other))
    assert client.accounts == []


def _funded_pair():
    account1 = Account(Client("John Doe", "john@example.com"))
    account2 = Account(Client("Jane Doe", "jane@example.com"))
    account1.credit(1000)
    account2.credit(1000)
    return account1, account2


def test_create_transaction():
    account1, account2 = _funded_pair()
    transaction = Transaction(account1, account2, 100)
    assert transaction.amount == 100
    assert account1.balance == 900.0
    assert account2.balance == 1100.0


def test_create_transaction_with_insufficient_balance():
    account1, account2 = _funded_pair()
    with pytest.raises(DomainError, match="insufficient funds"):
        Transaction(account1, account2, 2000)
    assert account1.balance == 1000.0
    assert account2.balance == 1000.0


@pytest.mark.parametrize("amount", [0, -5])
def test_create_transaction_with_non_positive_amount(amount):
    account1, account2 = _funded_pair()
    with pytest.raises(DomainError, match="amount must be greater than zero"):
        Transaction(account1, account2, amount)
    assert account1.balance == 1000.0
    assert account2.balance == 1000.0
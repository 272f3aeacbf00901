"""SQL storage for clients, accounts and transactions."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from .domain import Account, Client, Transaction


class RecordNotFoundError(LookupError):
    """Raised when a looked-up row does not exist."""


_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS clients ("
    "id VARCHAR(255), name VARCHAR(255), email VARCHAR(255), created_at TIMESTAMP)",
    "CREATE TABLE IF NOT EXISTS accounts ("
    "id VARCHAR(255), client_id VARCHAR(255), balance REAL, created_at TIMESTAMP)",
    "CREATE TABLE IF NOT EXISTS transactions ("
    "id VARCHAR(255), account_id_from VARCHAR(255), account_id_to VARCHAR(255), "
    "amount REAL, created_at TIMESTAMP)",
)


def create_schema(connection: Any) -> None:
    """Create the clients, accounts and transactions tables if missing."""
    cursor = connection.cursor()
    try:
        for statement in _SCHEMA:
            cursor.execute(statement)
    finally:
        cursor.close()
    connection.commit()


def _to_db_time(value: datetime) -> str:
    return value.isoformat()


def _from_db_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value))


class _Repository:
    def __init__(self, connection: Any, *, autocommit: bool = True) -> None:
        self._connection = connection
        self._autocommit = autocommit

    def _write(self, sql: str, params: tuple[Any, ...]) -> None:
        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, params)
        finally:
            cursor.close()
        if self._autocommit:
            self._connection.commit()

    def _fetch_one(self, sql: str, params: tuple[Any, ...]) -> Any:
        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, params)
            return cursor.fetchone()
        finally:
            cursor.close()


class AccountDB(_Repository):
    """Accounts table, joined with clients on lookup."""

    def find_by_id(self, account_id: str) -> Account:
        row = self._fetch_one(
            "SELECT a.id, a.client_id, a.balance, a.created_at, c.id, c.name, c.email "
            "FROM accounts a INNER JOIN clients c ON c.id = a.client_id WHERE a.id = ?",
            (account_id,),
        )
        if row is None:
            raise RecordNotFoundError(f"account not found: {account_id}")
        acc_id, _client_id, balance, created_at, client_id, name, email = row
        client = Client(name=name, email=email, id=client_id)
        return Account(
            client=client,
            id=acc_id,
            balance=float(balance),
            created_at=_from_db_time(created_at),
        )

    def save(self, account: Account) -> None:
        self._write(
            "INSERT INTO accounts (id, client_id, balance, created_at) VALUES (?, ?, ?, ?)",
            (account.id, account.client.id, account.balance, _to_db_time(account.created_at)),
        )

    def update_balance(self, account: Account) -> None:
        self._write(
            "UPDATE accounts SET balance = ? WHERE id = ?",
            (account.balance, account.id),
        )


class ClientDB(_Repository):
    """Clients table."""

    def get(self, client_id: str) -> Client:
        row = self._fetch_one(
            "SELECT id, name, email, created_at FROM clients WHERE id = ?",
            (client_id,),
        )
        if row is None:
            raise RecordNotFoundError(f"client not found: {client_id}")
        found_id, name, email, created_at = row
        return Client(name=name, email=email, id=found_id, created_at=_from_db_time(created_at))

    def save(self, client: Client) -> None:
        self._write(
            "INSERT INTO clients (id, name, email, created_at) VALUES (?, ?, ?, ?)",
            (client.id, client.name, client.email, _to_db_time(client.created_at)),
        )


class TransactionDB(_Repository):
    """Transactions table."""

    def create(self, transaction: Transaction) -> None:
        self._write(
            "INSERT INTO transactions (id, account_id_from, account_id_to, amount, created_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (
                transaction.id,
                transaction.account_from.id,
                transaction.account_to.id,
                transaction.amount,
                _to_db_time(transaction.created_at),
            ),
        )
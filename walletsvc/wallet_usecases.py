"""Wallet use cases: creating clients, accounts and transfers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from .domain import Account, Client, Transaction
from .events import EventDispatcher
from .messages import Event

ACCOUNT_REPOSITORY = "AccountDB"
TRANSACTION_REPOSITORY = "TransactionDB"


class AccountGateway(Protocol):
    """Storage for accounts."""

    def save(self, account: Account) -> None:
        """Store a new account."""

    def find_by_id(self, account_id: str) -> Account:
        """Return the account with ``account_id``; raise if there is none."""

    def update_balance(self, account: Account) -> None:
        """Store the current balance of ``account``."""


class ClientGateway(Protocol):
    """Storage for clients."""

    def get(self, client_id: str) -> Client:
        """Return the client with ``client_id``; raise if there is none."""

    def save(self, client: Client) -> None:
        """Store a new client."""


class TransactionGateway(Protocol):
    """Storage for transactions."""

    def create(self, transaction: Transaction) -> None:
        """Store a new transaction."""


@dataclass(frozen=True)
class CreateAccountInput:
    client_id: str


@dataclass(frozen=True)
class CreateAccountOutput:
    id: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {"id": self.id}


class CreateAccountUseCase:
    """Opens a new, empty account for an existing client."""

    def __init__(self, account_gateway: AccountGateway, client_gateway: ClientGateway) -> None:
        self._accounts = account_gateway
        self._clients = client_gateway

    def execute(self, input_dto: CreateAccountInput) -> CreateAccountOutput:
        client = self._clients.get(input_dto.client_id)
        account = Account(client)
        self._accounts.save(account)
        return CreateAccountOutput(id=account.id)


@dataclass(frozen=True)
class CreateClientInput:
    name: str
    email: str


@dataclass(frozen=True)
class CreateClientOutput:
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class CreateClientUseCase:
    """Registers a new client."""

    def __init__(self, client_gateway: ClientGateway) -> None:
        self._clients = client_gateway

    def execute(self, input_dto: CreateClientInput) -> CreateClientOutput:
        client = Client(input_dto.name, input_dto.email)
        self._clients.save(client)
        return CreateClientOutput(
            id=client.id,
            name=client.name,
            email=client.email,
            created_at=client.created_at,
            updated_at=client.updated_at,
        )


@dataclass(frozen=True)
class CreateTransactionInput:
    account_id_from: str
    account_id_to: str
    amount: float


@dataclass(frozen=True)
class CreateTransactionOutput:
    id: str
    account_id_from: str
    account_id_to: str
    amount: float

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {
            "id": self.id,
            "account_id_from": self.account_id_from,
            "account_id_to": self.account_id_to,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class BalanceUpdatedOutput:
    account_id_from: str
    account_id_to: str
    balance_account_from: float
    balance_account_to: float

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {
            "account_id_from": self.account_id_from,
            "account_id_to": self.account_id_to,
            "balance_account_id_from": self.balance_account_from,
            "balance_account_id_to": self.balance_account_to,
        }


class CreateTransactionUseCase:
    """Moves money between two accounts and announces the result."""

    def __init__(
        self,
        unit_of_work: Any,
        event_dispatcher: EventDispatcher,
        transaction_created: Event,
        balance_updated: Event,
    ) -> None:
        self._unit_of_work = unit_of_work
        self._dispatcher = event_dispatcher
        self._transaction_created = transaction_created
        self._balance_updated = balance_updated

    def execute(self, input_dto: CreateTransactionInput) -> CreateTransactionOutput:
        def work(_unit: Any) -> tuple[CreateTransactionOutput, BalanceUpdatedOutput]:
            accounts: AccountGateway = self._unit_of_work.get_repository(ACCOUNT_REPOSITORY)
            transactions: TransactionGateway = self._unit_of_work.get_repository(
                TRANSACTION_REPOSITORY
            )
            account_from = accounts.find_by_id(input_dto.account_id_from)
            account_to = accounts.find_by_id(input_dto.account_id_to)
            transaction = Transaction(account_from, account_to, input_dto.amount)
            accounts.update_balance(account_from)
            accounts.update_balance(account_to)
            transactions.create(transaction)
            return (
                CreateTransactionOutput(
                    id=transaction.id,
                    account_id_from=input_dto.account_id_from,
                    account_id_to=input_dto.account_id_to,
                    amount=input_dto.amount,
                ),
                BalanceUpdatedOutput(
                    account_id_from=input_dto.account_id_from,
                    account_id_to=input_dto.account_id_to,
                    balance_account_from=account_from.balance,
                    balance_account_to=account_to.balance,
                ),
            )

        output, balance_output = self._unit_of_work.do(work)

        self._transaction_created.payload = output
        self._dispatcher.dispatch(self._transaction_created)

        self._balance_updated.payload = balance_output
        self._dispatcher.dispatch(self._balance_updated)

        return output
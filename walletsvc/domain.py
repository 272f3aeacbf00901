"""Wallet entities: clients, their accounts and transfers between accounts."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime


class DomainError(ValueError):
    """Raised when an entity would be left in an invalid state."""


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(eq=False)
class Client:
    """A wallet owner. Name and e-mail are required."""

    name: str
    email: str
    id: str = field(default_factory=_new_id)
    accounts: list[Account] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise DomainError when a required field is empty."""
        if not self.name:
            raise DomainError("name is required")
        if not self.email:
            raise DomainError("email is required")

    def update(self, name: str, email: str) -> None:
        """Change name and e-mail, then validate the result."""
        self.name = name
        self.email = email
        self.updated_at = datetime.now()
        self.validate()

    def add_account(self, account: Account) -> None:
        """Attach an account that belongs to this client."""
        if account.client.id != self.id:
            raise DomainError("account does not belong to this client")
        self.accounts.append(account)


@dataclass(eq=False)
class Account:
    """A client's account holding a balance."""

    client: Client
    id: str = field(default_factory=_new_id)
    balance: float = 0.0
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        if self.client is None:
            raise DomainError("client is required")

    def credit(self, amount: float) -> None:
        """Add ``amount`` to the balance."""
        self.balance += amount
        self.updated_at = datetime.now()

    def debit(self, amount: float) -> None:
        """Subtract ``amount`` from the balance."""
        self.balance -= amount
        self.updated_at = datetime.now()


@dataclass(eq=False)
class Transaction:
    """A transfer between two accounts, applied as soon as it is created."""

    account_from: Account
    account_to: Account
    amount: float
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        self.validate()
        self.commit()

    def validate(self) -> None:
        """Raise DomainError when the transfer cannot take place."""
        if self.amount <= 0:
            raise DomainError("amount must be greater than zero")
        if self.account_from.balance < self.amount:
            raise DomainError("insufficient funds")

    def commit(self) -> None:
        """Move the amount from the source account to the target account."""
        self.account_from.debit(self.amount)
        self.account_to.credit(self.amount)
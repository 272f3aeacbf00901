"""Account balances as kept by the balance service."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Balance:
    """The latest known balance of one account. It is never negative."""

    account_id: str
    amount: float
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("amount cannot be negative")

    def update_balance(self, amount: float) -> None:
        """Replace the amount; negative amounts are rejected."""
        if amount < 0:
            raise ValueError("amount cannot be negative")
        self.amount = amount
        self.updated_at = datetime.now()


class BalanceRepository(Protocol):
    """Storage for balances."""

    def get_by_account_id(self, account_id: str) -> Balance | None:
        """Return the balance of ``account_id``, or None if there is none."""

    def create(self, balance: Balance) -> None:
        """Store a new balance."""

    def update(self, balance: Balance) -> None:
        """Store the new amount of an existing balance."""
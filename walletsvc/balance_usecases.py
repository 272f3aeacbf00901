"""Balance service use cases: reading and refreshing account balances."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import Any, Mapping

from .balance import Balance, BalanceRepository


class BalanceNotFoundError(LookupError):
    """Raised when no balance is stored for an account."""

    def __init__(self, message: str = "balance not found") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class GetBalanceByAccountInput:
    account_id: str


@dataclass(frozen=True)
class GetBalanceByAccountOutput:
    id: str
    amount: float

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {"id": self.id, "amount": self.amount}


class GetBalanceByAccountUseCase:
    """Looks up the stored balance of one account."""

    def __init__(self, balance_repository: BalanceRepository) -> None:
        self._balances = balance_repository

    def execute(self, input_dto: GetBalanceByAccountInput) -> GetBalanceByAccountOutput:
        balance = self._balances.get_by_account_id(input_dto.account_id)
        if balance is None:
            raise BalanceNotFoundError()
        return GetBalanceByAccountOutput(id=balance.id, amount=balance.amount)


@dataclass(frozen=True)
class UpdateAccountsBalanceInput:
    account_id_from: str
    account_id_to: str
    balance_account_from: float
    balance_account_to: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdateAccountsBalanceInput:
        """Build from the JSON form; keys match case-insensitively, missing ones are empty."""
        lowered = {str(key).lower(): value for key, value in data.items()}
        return cls(
            account_id_from=lowered.get("account_id_from", ""),
            account_id_to=lowered.get("account_id_to", ""),
            balance_account_from=float(lowered.get("balance_account_id_from", 0.0)),
            balance_account_to=float(lowered.get("balance_account_id_to", 0.0)),
        )


class UpdateAccountsBalanceUseCase:
    """Stores the new balances of both accounts of a transfer."""

    def __init__(self, balance_repository: BalanceRepository) -> None:
        self._balances = balance_repository

    def execute(self, input_dto: UpdateAccountsBalanceInput) -> None:
        self._create_or_update(input_dto.account_id_from, input_dto.balance_account_from)
        self._create_or_update(input_dto.account_id_to, input_dto.balance_account_to)

    def _create_or_update(self, account_id: str, amount: float) -> None:
        existing = self._balances.get_by_account_id(account_id)
        if existing is None:
            self._balances.create(Balance(account_id=account_id, amount=amount))
            return
        # A negative amount leaves the stored balance as it was.
        with contextlib.suppress(ValueError):
            existing.update_balance(amount)
        self._balances.update(existing)
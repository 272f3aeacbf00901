"""SQL storage for account balances."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .balance import Balance

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS balances ("
    "id VARCHAR(36) NOT NULL PRIMARY KEY, "
    "account_id VARCHAR(36) NOT NULL, "
    "amount DECIMAL(10, 2) NOT NULL, "
    "created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP, "
    "updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP)"
)


def create_schema(connection: Any) -> None:
    """Create the balances table if missing."""
    cursor = connection.cursor()
    try:
        cursor.execute(_SCHEMA)
    finally:
        cursor.close()
    connection.commit()


def _from_db_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


class BalanceRepositoryDB:
    """Balances table."""

    def __init__(self, connection: Any, *, autocommit: bool = True) -> None:
        self._connection = connection
        self._autocommit = autocommit

    def get_by_account_id(self, account_id: str) -> Balance | None:
        """Return the stored balance, or None when it is missing or unreadable."""
        cursor = self._connection.cursor()
        try:
            cursor.execute(
                "SELECT id, account_id, amount, created_at, updated_at "
                "FROM balances WHERE account_id = ?",
                (account_id,),
            )
            row = cursor.fetchone()
            if row is None:
                return None
            balance_id, found_account_id, amount, created_at, updated_at = row
            return Balance(
                account_id=found_account_id,
                amount=float(amount),
                id=balance_id,
                created_at=_from_db_time(created_at),
                updated_at=_from_db_time(updated_at),
            )
        except Exception:  # any failure to read a row counts as "no balance"
            return None
        finally:
            cursor.close()

    def create(self, balance: Balance) -> None:
        self._write(
            "INSERT INTO balances (id, account_id, amount, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (
                balance.id,
                balance.account_id,
                balance.amount,
                balance.created_at.isoformat(),
                balance.updated_at.isoformat(),
            ),
        )

    def update(self, balance: Balance) -> None:
        self._write(
            "UPDATE balances SET amount = ?, updated_at = ? WHERE id = ?",
            (balance.amount, balance.updated_at.isoformat(), balance.id),
        )

    def _write(self, sql: str, params: tuple[Any, ...]) -> None:
        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, params)
        finally:
            cursor.close()
        if self._autocommit:
            self._connection.commit()
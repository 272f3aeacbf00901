"""Named events that carry a payload between services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class Event:
    """An event with a name and an arbitrary payload."""

    name: str
    payload: Any = None

    def date_time(self) -> datetime:
        """Return the moment the event is looked at."""
        return datetime.now()

    def to_dict(self) -> dict[str, Any]:
        """Return the event as the JSON-ready mapping sent on the wire."""
        payload = self.payload
        to_dict = getattr(payload, "to_dict", None)
        if callable(to_dict):
            payload = to_dict()
        return {"Name": self.name, "Payload": payload}


@dataclass
class TransactionCreated(Event):
    """Raised after a transfer between two accounts is stored."""

    name: str = "TransactionCreated"


@dataclass
class BalanceUpdated(Event):
    """Raised after the balances of two accounts change."""

    name: str = "BalanceUpdated"
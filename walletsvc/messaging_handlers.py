"""Event handlers that bridge the event dispatcher and the message bus."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from .balance_usecases import UpdateAccountsBalanceInput, UpdateAccountsBalanceUseCase
from .kafka import Producer

logger = logging.getLogger(__name__)

TRANSACTIONS_TOPIC = "transactions"
BALANCES_TOPIC = "balances"


class TransactionCreatedKafkaHandler:
    """Publishes TransactionCreated events on the transactions topic."""

    def __init__(self, producer: Producer) -> None:
        self._producer = producer

    def handle(self, event: Any) -> None:
        self._producer.publish(event, None, TRANSACTIONS_TOPIC)
        logger.info("TransactionCreatedKafkaHandler: %s", event.payload)


class BalanceUpdatedKafkaHandler:
    """Publishes BalanceUpdated events on the balances topic."""

    def __init__(self, producer: Producer) -> None:
        self._producer = producer

    def handle(self, event: Any) -> None:
        self._producer.publish(event, None, BALANCES_TOPIC)
        logger.info("BalanceUpdatedKafkaHandler called")


def _decode_input(raw: Any) -> UpdateAccountsBalanceInput:
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8")
    document = json.loads(raw)
    if not isinstance(document, Mapping):
        raise ValueError("event is not a JSON object")
    lowered = {str(key).lower(): value for key, value in document.items()}
    payload = lowered.get("payload")
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValueError("event payload is not a JSON object")
    return UpdateAccountsBalanceInput.from_dict(payload)


class BalanceUpdatedConsumerHandler:
    """Applies BalanceUpdated messages read from the bus to stored balances.

    The event payload is the raw JSON record as published by
    BalanceUpdatedKafkaHandler. A record that cannot be decoded is logged and
    handled as an empty update; failures of the update are logged, not raised.
    """

    def __init__(self, update_accounts_balance: UpdateAccountsBalanceUseCase) -> None:
        self._update_accounts_balance = update_accounts_balance

    def handle(self, event: Any) -> None:
        try:
            input_dto = _decode_input(event.payload)
        except (ValueError, TypeError) as err:
            logger.error("Error unmarshalling event: %s", err)
            input_dto = UpdateAccountsBalanceInput.from_dict({})
        logger.info("BalanceUpdatedConsumerHandler called: %s", input_dto)
        try:
            self._update_accounts_balance.execute(input_dto)
        except Exception as err:  # the update outcome is not reported back to the bus
            logger.error("Error updating balances: %s", err)
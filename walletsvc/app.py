"""Wiring of the wallet service and its command-line entry point."""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sqlite3
import sys
import threading
from typing import Any, TextIO

from .events import EventDispatcher
from .kafka import Producer
from .messages import BalanceUpdated, TransactionCreated
from .messaging_handlers import BalanceUpdatedKafkaHandler, TransactionCreatedKafkaHandler
from .unit_of_work import UnitOfWork
from .wallet_db import AccountDB, ClientDB, TransactionDB, create_schema
from .wallet_usecases import (
    ACCOUNT_REPOSITORY,
    TRANSACTION_REPOSITORY,
    CreateAccountUseCase,
    CreateClientUseCase,
    CreateTransactionUseCase,
)
from .web import Route, WebAccountHandler, WebClientHandler, WebServer, WebTransactionHandler


class JsonLinesClient:
    """A producer client that appends each record to a text stream as one JSON line."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def produce(self, topic: str, value: bytes, key: bytes | None) -> None:
        record: dict[str, Any] = {
            "topic": topic,
            "key": None if key is None else bytes(key).decode("utf-8", errors="replace"),
            "value": bytes(value).decode("utf-8"),
        }
        line = json.dumps(record) + "\n"
        with self._lock:
            self._stream.write(line)
            self._stream.flush()


def create_wallet_server(connection: Any, producer: Producer, address: str = ":8080") -> WebServer:
    """Build the wallet web server on ``connection``, publishing events through ``producer``."""
    dispatcher = EventDispatcher()
    dispatcher.register(TransactionCreated().name, TransactionCreatedKafkaHandler(producer))
    dispatcher.register(BalanceUpdated().name, BalanceUpdatedKafkaHandler(producer))

    client_db = ClientDB(connection)
    account_db = AccountDB(connection)

    unit_of_work = UnitOfWork(connection)
    unit_of_work.register(ACCOUNT_REPOSITORY, lambda conn: AccountDB(conn, autocommit=False))
    unit_of_work.register(
        TRANSACTION_REPOSITORY, lambda conn: TransactionDB(conn, autocommit=False)
    )

    create_client = CreateClientUseCase(client_db)
    create_account = CreateAccountUseCase(account_db, client_db)
    create_transaction = CreateTransactionUseCase(
        unit_of_work, dispatcher, TransactionCreated(), BalanceUpdated()
    )

    # One connection is shared by every request, so requests are served one at a time.
    server = WebServer(address, threaded=False)
    server.add_handler(Route("/clients", WebClientHandler(create_client).create_client))
    server.add_handler(Route("/accounts", WebAccountHandler(create_account).create_account))
    server.add_handler(
        Route("/transactions", WebTransactionHandler(create_transaction).create_transaction)
    )
    return server


def main(argv: list[str] | None = None) -> int:
    """Run the wallet HTTP service."""
    parser = argparse.ArgumentParser(prog="walletsvc", description="Run the wallet HTTP service.")
    parser.add_argument("--database", default="wallet.db", help="SQLite database file")
    parser.add_argument("--address", default=":8080", help="listen address, [host]:port")
    parser.add_argument(
        "--events",
        default="-",
        help="file receiving published events as JSON lines; '-' for standard output",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    connection = sqlite3.connect(args.database, check_same_thread=False)
    try:
        create_schema(connection)
        with contextlib.ExitStack() as stack:
            if args.events == "-":
                stream: TextIO = sys.stdout
            else:
                stream = stack.enter_context(open(args.events, "a", encoding="utf-8"))
            producer = Producer(JsonLinesClient(stream))
            create_wallet_server(connection, producer, args.address).start()
    finally:
        connection.close()
    return 0
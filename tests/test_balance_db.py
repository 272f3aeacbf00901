import sqlite3
from datetime import datetime, timedelta

import pytest

from walletsvc.balance import Balance
from walletsvc.balance_db import BalanceRepositoryDB, create_schema

ACCOUNT_ID = "123e4567-e89b-12d3-a456-426614174000"


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()


def _insert(connection, balance):
    connection.execute(
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


def test_get_by_account_id(connection):
    balance = Balance(account_id=ACCOUNT_ID, amount=100.0)
    _insert(connection, balance)
    found = BalanceRepositoryDB(connection).get_by_account_id(ACCOUNT_ID)
    assert found.id == balance.id
    assert found.account_id == balance.account_id
    assert found.amount == balance.amount
    assert abs(found.created_at - balance.created_at) <= timedelta(seconds=1)
    assert abs(found.updated_at - balance.updated_at) <= timedelta(seconds=1)


def test_get_by_account_id_missing_returns_none(connection):
    assert BalanceRepositoryDB(connection).get_by_account_id("unknown") is None


def test_get_by_account_id_reads_default_timestamps(connection):
    connection.execute(
        "INSERT INTO balances (id, account_id, amount) VALUES (?, ?, ?)",
        ("b-1", ACCOUNT_ID, 5.0),
    )
    found = BalanceRepositoryDB(connection).get_by_account_id(ACCOUNT_ID)
    assert found.amount == 5.0
    assert isinstance(found.created_at, datetime)


def test_create(connection):
    balance = Balance(account_id=ACCOUNT_ID, amount=100.0)
    BalanceRepositoryDB(connection).create(balance)
    row = connection.execute(
        "SELECT id, account_id, amount FROM balances WHERE id = ?", (balance.id,)
    ).fetchone()
    assert row == (balance.id, ACCOUNT_ID, 100.0)


def test_update(connection):
    balance = Balance(account_id=ACCOUNT_ID, amount=100.0)
    _insert(connection, balance)
    balance.update_balance(300)
    BalanceRepositoryDB(connection).update(balance)
    amount = connection.execute(
        "SELECT amount FROM balances WHERE id = ?", (balance.id,)
    ).fetchone()[0]
    assert amount == balance.amount
    assert amount == 300


def test_create_then_get_round_trip(connection):
    repo = BalanceRepositoryDB(connection)
    balance = Balance(account_id=ACCOUNT_ID, amount=42.5)
    repo.create(balance)
    found = repo.get_by_account_id(ACCOUNT_ID)
    assert (found.id, found.amount, found.created_at) == (
        balance.id,
        balance.amount,
        balance.created_at,
    )
import sqlite3

import pytest

from walletsvc.unit_of_work import UnitOfWork, UnitOfWorkError


class NotesRepository:
    def __init__(self, connection):
        self.connection = connection

    def add(self, text):
        self.connection.execute("INSERT INTO notes (text) VALUES (?)", (text,))


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE notes (text TEXT)")
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def uow(connection):
    unit = UnitOfWork(connection)
    unit.register("Notes", NotesRepository)
    return unit


def stored_notes(connection):
    return [row[0] for row in connection.execute("SELECT text FROM notes")]


class FailingConnection:
    def __init__(self, fail_rollback=False):
        self.fail_rollback = fail_rollback
        self.rollbacks = 0

    def commit(self):
        raise RuntimeError("commit failed")

    def rollback(self):
        self.rollbacks += 1
        if self.fail_rollback:
            raise RuntimeError("rollback failed")


def test_do_commits_and_returns_result(uow, connection):
    def work(unit):
        unit.get_repository("Notes").add("hello")
        return "done"

    assert uow.do(work) == "done"
    assert stored_notes(connection) == ["hello"]


def test_do_rolls_back_when_function_raises(uow, connection):
    def work(unit):
        unit.get_repository("Notes").add("hello")
        raise ValueError("broken")

    with pytest.raises(ValueError, match="broken"):
        uow.do(work)
    assert stored_notes(connection) == []


def test_unit_can_be_reused_after_rollback(uow, connection):
    def failing(unit):
        raise ValueError("broken")

    with pytest.raises(ValueError):
        uow.do(failing)
    uow.do(lambda unit: unit.get_repository("Notes").add("second"))
    assert stored_notes(connection) == ["second"]


def test_nested_do_is_rejected(uow):
    def work(unit):
        unit.do(lambda inner: None)

    with pytest.raises(UnitOfWorkError, match="transaction already started"):
        uow.do(work)


def test_get_repository_starts_a_transaction(uow):
    uow.get_repository("Notes")
    with pytest.raises(UnitOfWorkError, match="transaction already started"):
        uow.do(lambda unit: None)


def test_factory_receives_connection(uow, connection):
    repository = uow.get_repository("Notes")
    assert repository.connection is connection


def test_rollback_without_transaction_fails(uow):
    with pytest.raises(UnitOfWorkError, match="no transaction to rollback"):
        uow.rollback()


def test_unregistered_repository_is_rejected(uow):
    uow.unregister("Notes")
    with pytest.raises(UnitOfWorkError):
        uow.get_repository("Notes")


def test_failed_commit_rolls_back_and_reraises():
    conn = FailingConnection()
    unit = UnitOfWork(conn)
    with pytest.raises(RuntimeError, match="commit failed"):
        unit.do(lambda u: None)
    assert conn.rollbacks == 1


def test_failed_commit_and_rollback_reports_both():
    unit = UnitOfWork(FailingConnection(fail_rollback=True))
    with pytest.raises(UnitOfWorkError) as info:
        unit.do(lambda u: None)
    assert str(info.value) == "original error: commit failed, rollback error: rollback failed"
"""Groups repository work into a single database transaction."""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar

T = TypeVar("T")


class UnitOfWorkError(Exception):
    """Raised when the transaction cannot be started, committed or rolled back."""


class Connection(Protocol):
    """The part of a DB-API connection the unit of work relies on."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


RepositoryFactory = Callable[[Any], Any]


class UnitOfWork:
    """Hands out repositories bound to one connection and commits them together."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._factories: dict[str, RepositoryFactory] = {}
        self._active = False

    def register(self, name: str, factory: RepositoryFactory) -> None:
        """Make ``factory`` available under ``name``; it receives the connection."""
        self._factories[name] = factory

    def unregister(self, name: str) -> None:
        """Forget the factory registered under ``name``."""
        self._factories.pop(name, None)

    def get_repository(self, name: str) -> Any:
        """Build the repository ``name``, starting a transaction if none is open."""
        try:
            factory = self._factories[name]
        except KeyError:
            raise UnitOfWorkError(f"repository not registered: {name}") from None
        self._active = True
        return factory(self._connection)

    def do(self, fn: Callable[[UnitOfWork], T]) -> T:
        """Run ``fn`` inside a new transaction and return what it returns.

        The transaction is committed when ``fn`` succeeds and rolled back when
        it raises; the exception is then re-raised.
        """
        if self._active:
            raise UnitOfWorkError("transaction already started")
        self._active = True
        try:
            result = fn(self)
        except Exception as err:
            try:
                self.rollback()
            except Exception as rollback_err:
                raise UnitOfWorkError(
                    f"original error: {err}, rollback error: {rollback_err}"
                ) from err
            raise
        self.commit_or_rollback()
        return result

    def rollback(self) -> None:
        """Undo the open transaction."""
        if not self._active:
            raise UnitOfWorkError("no transaction to rollback")
        self._connection.rollback()
        self._active = False

    def commit_or_rollback(self) -> None:
        """Commit the open transaction, rolling it back if the commit fails."""
        if not self._active:
            raise UnitOfWorkError("no transaction to commit")
        try:
            self._connection.commit()
        except Exception as err:
            try:
                self.rollback()
            except Exception as rollback_err:
                raise UnitOfWorkError(
                    f"original error: {err}, rollback error: {rollback_err}"
                ) from err
            raise
        self._active = False
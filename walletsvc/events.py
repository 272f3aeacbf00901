"""In-process event dispatching with concurrent handler execution."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol


class HandlerAlreadyRegisteredError(Exception):
    """Raised when the same handler is registered twice for one event."""

    def __init__(self, message: str = "handler already registered") -> None:
        super().__init__(message)


class HandlerNotRegisteredError(Exception):
    """Raised when removing a handler that was never registered."""

    def __init__(self, message: str = "handler not registered") -> None:
        super().__init__(message)


class EventHandler(Protocol):
    """Anything able to react to a dispatched event."""

    def handle(self, event: Any) -> None:
        """React to ``event``."""


class EventDispatcher:
    """Maps event names to handlers and runs them when an event is dispatched.

    Handlers are compared by identity, so two equal-looking handler objects
    are still distinct registrations.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def __len__(self) -> int:
        return len(self._handlers)

    def handlers_for(self, event_name: str) -> tuple[EventHandler, ...]:
        """Return the handlers registered for ``event_name``, in order."""
        return tuple(self._handlers.get(event_name, ()))

    def register(self, event_name: str, handler: EventHandler) -> None:
        """Add ``handler`` for ``event_name``."""
        if self.has(event_name, handler):
            raise HandlerAlreadyRegisteredError()
        self._handlers.setdefault(event_name, []).append(handler)

    def has(self, event_name: str, handler: EventHandler) -> bool:
        """Tell whether ``handler`` is registered for ``event_name``."""
        return any(h is handler for h in self._handlers.get(event_name, ()))

    def remove(self, event_name: str, handler: EventHandler) -> None:
        """Remove ``handler`` from ``event_name``."""
        handlers = self._handlers.get(event_name, [])
        for position, registered in enumerate(handlers):
            if registered is handler:
                del handlers[position]
                return
        raise HandlerNotRegisteredError()

    def clear(self) -> None:
        """Forget every registration."""
        self._handlers = {}

    def dispatch(self, event: Any) -> None:
        """Run every handler for ``event.name`` concurrently and wait for all.

        The first exception raised by a handler is re-raised once all
        handlers have finished.
        """
        handlers = self.handlers_for(event.name)
        if not handlers:
            return
        with ThreadPoolExecutor(max_workers=len(handlers)) as pool:
            futures = [pool.submit(handler.handle, event) for handler in handlers]
        for future in futures:
            future.result()
"""Publishing and consuming JSON messages on named topics."""

from __future__ import annotations

import base64
import dataclasses
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterator, Protocol


@dataclass(frozen=True)
class Message:
    """One record on a topic."""

    topic: str
    value: bytes
    key: bytes | None = None


class ProducerClient(Protocol):
    """A transport able to send one record to a topic."""

    def produce(self, topic: str, value: bytes, key: bytes | None) -> None: ...


class ConsumerClient(Protocol):
    """A transport able to subscribe to topics and read records.

    ``read_message`` returns None once the client is closed.
    """

    def subscribe(self, topics: list[str]) -> None: ...

    def read_message(self) -> Message | None: ...


def _jsonable(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"cannot encode {type(obj).__name__} as JSON")


class Producer:
    """Encodes values as JSON and hands them to a producer client."""

    def __init__(self, client: ProducerClient) -> None:
        self._client = client

    def publish(self, msg: Any, key: bytes | None, topic: str) -> Message:
        """Send ``msg`` as JSON to ``topic`` and return the record that was sent."""
        value = json.dumps(msg, default=_jsonable, separators=(",", ":")).encode("utf-8")
        message = Message(topic=topic, value=value, key=key)
        self._client.produce(message.topic, message.value, message.key)
        return message


class Consumer:
    """Reads records from a set of topics."""

    def __init__(self, client: ConsumerClient, topics: list[str]) -> None:
        self._client = client
        self.topics = list(topics)

    def consume(self) -> Iterator[Message]:
        """Subscribe and yield records; read errors are skipped."""
        self._client.subscribe(self.topics)
        while True:
            try:
                message = self._client.read_message()
            except Exception:
                continue
            if message is None:
                return
            yield message
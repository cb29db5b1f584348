"""MessageSerializer — JSON wire format of Waku messages (relay REST API)."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from .exceptions import MessagingSerializationError
from .message import WakuMessage


class MessageSerializer:
    """Serialize/deserialize WakuMessage to/from JSON bytes.

    Keys are camelCase (``contentTopic``). ``ephemeral`` is never written;
    when present in incoming data it is accepted.
    """

    def to_dict(self, message: WakuMessage) -> dict[str, Any]:
        """Return the wire representation of *message* as a dict."""
        return message.model_dump(mode="json", by_alias=True)

    def serialize(self, message: WakuMessage) -> bytes:
        """Encode a message to JSON bytes."""
        try:
            return json.dumps(self.to_dict(message)).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise MessagingSerializationError(str(e)) from e

    def serialize_many(self, messages: list[WakuMessage]) -> bytes:
        """Encode a list of messages to a JSON array."""
        try:
            return json.dumps([self.to_dict(m) for m in messages]).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise MessagingSerializationError(str(e)) from e

    def from_dict(self, data: Any) -> WakuMessage:
        """Validate a decoded JSON object into a message."""
        try:
            return WakuMessage.model_validate(data)
        except ValidationError as e:
            raise MessagingSerializationError(str(e)) from e

    def deserialize(self, raw: bytes | str) -> WakuMessage:
        """Decode JSON bytes to a WakuMessage."""
        return self.from_dict(self._loads(raw))

    def deserialize_many(self, raw: bytes | str) -> list[WakuMessage]:
        """Decode a JSON array of messages."""
        data = self._loads(raw)
        if not isinstance(data, list):
            raise MessagingSerializationError(
                f"expected a JSON array, got {type(data).__name__}"
            )
        return [self.from_dict(item) for item in data]

    @staticmethod
    def _loads(raw: bytes | str) -> Any:
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MessagingSerializationError(str(e)) from e

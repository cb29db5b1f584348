"""WakuMessage — the envelope carried over the Waku relay.

Follows `14/WAKU2-MESSAGE
<https://github.com/vacp2p/rfc-index/blob/main/waku/standards/core/14/message.md>`_.
"""

from __future__ import annotations

import base64
import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .clock import now_nanos
from .config import resolve_config
from .exceptions import (
    Base64DecodeError,
    DeserializationError,
    SignatureVerificationError,
)
from .signing import PublicKeyLike, unpack_signed_body, verify_signed_body
from .topic import create_content_topic

if TYPE_CHECKING:
    from .clock import Clock
    from .config import WakuConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Upper bound of the unsigned 128-bit timestamp.
MAX_TIMESTAMP = 2**128 - 1


@lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


class WakuMessage(BaseModel):
    """Immutable Waku message.

    Fields:
        payload: The message payload as a base64 encoded string.
        content_topic: Content topic used for content-based filtering.
        version: Payload encryption version. Always 0 for messages built
            here, encryption happens above this layer.
        timestamp: Creation time in nanoseconds since the Unix epoch.
        ephemeral: Whether the message is excluded from STORE archival.
            Never serialized; on the wire it is a publish option
            (see https://github.com/waku-org/nwaku/issues/2643).

    Whether the payload carries a signature prefix is agreed between the
    sender and the receiver; pass ``signed=True`` only for such topics.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    payload: str
    content_topic: str
    version: int = Field(default=0, ge=0, le=255)
    timestamp: int = Field(default=0, ge=0, le=MAX_TIMESTAMP)
    ephemeral: bool = Field(default=False, exclude=True)

    @staticmethod
    def create_content_topic(topic: str, config: WakuConfig | None = None) -> str:
        """Return ``/{app-name}/{version}/{topic}/{encoding}`` for *topic*."""
        return create_content_topic(topic, config)

    @classmethod
    def new(
        cls,
        payload: bytes | bytearray | memoryview | str,
        topic: str,
        *,
        config: WakuConfig | None = None,
        clock: Clock | None = None,
    ) -> WakuMessage:
        """Create an ephemeral message with the current timestamp.

        Args:
            payload: Raw payload bytes (str is UTF-8 encoded); base64 encoded
                internally.
            topic: Topic name within the content topic; the rest is filled
                in from *config*, e.g. ``/dria/0/<topic>/proto``.
            config: Naming constants; defaults to ``DEFAULT_CONFIG``.
            clock: Nanosecond time source; defaults to ``now_nanos``.
        """
        cfg = resolve_config(config)
        raw = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
        message = cls(
            payload=base64.b64encode(raw).decode("ascii"),
            content_topic=create_content_topic(topic, cfg),
            version=cfg.enc_version,
            timestamp=(clock or now_nanos)(),
            ephemeral=cfg.ephemeral,
        )
        logger.debug(
            "Built message on %s (%d payload bytes)", message.content_topic, len(raw)
        )
        return message

    def decode_payload(self) -> bytes:
        """Decode the base64 payload into bytes.

        Raises:
            Base64DecodeError: If the payload is not valid standard base64.
        """
        try:
            return base64.b64decode(self.payload, validate=True)
        except ValueError as exc:  # binascii.Error or non-ASCII input
            raise Base64DecodeError(f"payload is not valid base64: {exc}") from exc

    def parse_payload(self, target: type[T] | Any = dict, *, signed: bool = False) -> T:
        """Decode the payload and parse it as JSON into *target*.

        Args:
            target: Any type pydantic can validate (a model, ``dict``,
                ``list[int]``, a dataclass, ...).
            signed: Skip the 130-character signature prefix first. The
                signature is not checked; call ``is_signed`` for that.

        Raises:
            Base64DecodeError: If the payload is not valid base64.
            MalformedPayloadError: If *signed* and the payload is shorter
                than the signature prefix.
            DeserializationError: If the body is not JSON of the target shape.
        """
        payload = self.decode_payload()
        body = unpack_signed_body(payload)[2] if signed else payload
        try:
            return _adapter(target).validate_json(body)
        except ValidationError as exc:
            raise DeserializationError(
                f"payload on {self.content_topic} does not match {target!r}: {exc}"
            ) from exc

    def is_signed(self, public_key: PublicKeyLike) -> bool:
        """Check the payload's signature prefix against *public_key*.

        Only the 64-byte r||s part is verified over the SHA-256 digest of
        the body; the recovery id is ignored. A mismatch returns False.

        Raises:
            Base64DecodeError: If the payload is not valid base64.
            MalformedPayloadError: If the payload is shorter than the prefix.
            HexDecodeError: If the signature prefix is not hex.
            SignatureParseError: If the signature is structurally invalid.
            InvalidPublicKeyError: If *public_key* cannot be loaded.
        """
        return verify_signed_body(self.decode_payload(), public_key)

    def signed_by(self, public_key: PublicKeyLike, target: type[T] | Any = dict) -> T:
        """Verify the signature, then parse the signed body into *target*.

        Raises:
            SignatureVerificationError: If the signature does not verify.
            PayloadError, SignatureError: As for ``is_signed`` and
                ``parse_payload``.
        """
        if not self.is_signed(public_key):
            logger.warning("Rejected message on %s: bad signature", self.content_topic)
            raise SignatureVerificationError(
                f"signature does not match on {self.content_topic}",
                content_topic=self.content_topic,
            )
        return self.parse_payload(target, signed=True)

    def __str__(self) -> str:
        try:
            text = self.decode_payload().decode("utf-8")
        except (Base64DecodeError, UnicodeDecodeError):
            text = self.payload
        return f"WakuMessage {self.content_topic} at {self.timestamp}\n{text}"

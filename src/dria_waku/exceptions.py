"""Exceptions for dria-waku."""

from __future__ import annotations


class WakuError(Exception):
    """Root exception for the dria-waku package."""


class WakuConfigError(WakuError):
    """Raised when a WakuConfig is constructed with invalid values."""


class InvalidContentTopicError(WakuError):
    """Raised when a content topic does not match ``/app/version/topic/encoding``."""

    def __init__(self, content_topic: str, reason: str) -> None:
        self.content_topic = content_topic
        self.reason = reason
        super().__init__(f"Invalid content topic {content_topic!r}: {reason}")


class PayloadError(WakuError):
    """Base class for errors raised while reading a message payload."""


class Base64DecodeError(PayloadError):
    """Raised when the payload is not valid standard base64."""


class MalformedPayloadError(PayloadError):
    """Raised when the decoded payload is too short for the requested interpretation."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Payload has {actual} bytes, expected at least {expected} bytes"
        )


class DeserializationError(PayloadError):
    """Raised when the payload body is not valid JSON of the expected shape."""


class SignatureError(WakuError):
    """Base class for all signature-related errors."""


class HexDecodeError(SignatureError):
    """Raised when the hex-encoded signature prefix is malformed."""


class SignatureParseError(SignatureError):
    """Raised when signature bytes do not form a valid secp256k1 signature."""


class InvalidPrivateKeyError(SignatureError):
    """Raised when a private key cannot be loaded as a secp256k1 scalar."""


class InvalidPublicKeyError(SignatureError):
    """Raised when a public key cannot be loaded as a secp256k1 point."""


class SignatureVerificationError(SignatureError):
    """Raised by strict helpers when a well-formed signature does not verify.

    ``WakuMessage.is_signed`` reports a mismatch as ``False`` instead.
    """

    def __init__(self, message: str, content_topic: str | None = None) -> None:
        self.content_topic = content_topic
        super().__init__(message)


class MessagingSerializationError(WakuError):
    """Raised when wire serialization or deserialization of a message fails."""

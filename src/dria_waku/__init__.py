"""Signed Waku message envelopes for the Dria network."""

from __future__ import annotations

from .clock import now_nanos
from .config import DEFAULT_CONFIG, WakuConfig
from .exceptions import (
    Base64DecodeError,
    DeserializationError,
    HexDecodeError,
    InvalidContentTopicError,
    InvalidPrivateKeyError,
    InvalidPublicKeyError,
    MalformedPayloadError,
    MessagingSerializationError,
    PayloadError,
    SignatureError,
    SignatureParseError,
    SignatureVerificationError,
    WakuConfigError,
    WakuError,
)
from .memory import InMemoryConsumer, InMemoryPublisher, InMemoryWakuBus
from .message import WakuMessage
from .ports import IWakuConsumer, IWakuPublisher
from .serialization import MessageSerializer
from .signing import (
    SIGNATURE_SIZE,
    RecoverableSignature,
    generate_private_key,
    load_private_key,
    load_public_key,
    pack_signed_body,
    public_key_bytes,
    recover_public_key,
    sha256hash,
    sign_and_pack,
    sign_body,
    unpack_signed_body,
    verify_signed_body,
)
from .topic import ContentTopic, create_content_topic

__all__ = [
    "DEFAULT_CONFIG",
    "SIGNATURE_SIZE",
    "Base64DecodeError",
    "ContentTopic",
    "DeserializationError",
    "HexDecodeError",
    "IWakuConsumer",
    "IWakuPublisher",
    "InMemoryConsumer",
    "InMemoryPublisher",
    "InMemoryWakuBus",
    "InvalidContentTopicError",
    "InvalidPrivateKeyError",
    "InvalidPublicKeyError",
    "MalformedPayloadError",
    "MessageSerializer",
    "MessagingSerializationError",
    "PayloadError",
    "RecoverableSignature",
    "SignatureError",
    "SignatureParseError",
    "SignatureVerificationError",
    "WakuConfig",
    "WakuConfigError",
    "WakuError",
    "WakuMessage",
    "create_content_topic",
    "generate_private_key",
    "load_private_key",
    "load_public_key",
    "now_nanos",
    "pack_signed_body",
    "public_key_bytes",
    "recover_public_key",
    "sha256hash",
    "sign_and_pack",
    "sign_body",
    "unpack_signed_body",
    "verify_signed_body",
]

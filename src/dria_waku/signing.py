"""Signed-body codec: ``hex(signature) || hex(recovery_id) || body``.

A signed payload starts with the 65-byte recoverable signature (64-byte r||s
plus a 1-byte recovery id) as 130 hex characters, immediately followed by the
raw body. The signature covers the SHA-256 digest of the body.

Verification only uses the first 128 characters (r||s) and checks them against
a known public key; the recovery id is carried for compatibility but ignored.
Whether a payload is signed is agreed out of band, the format carries no tag.
"""

from __future__ import annotations

import binascii
import hashlib
import logging
from dataclasses import dataclass

import coincurve
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    encode_dss_signature,
)

from .exceptions import (
    HexDecodeError,
    InvalidPrivateKeyError,
    InvalidPublicKeyError,
    MalformedPayloadError,
    SignatureParseError,
)

# Order of the secp256k1 group (SEC 2, section 2.4.1).
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

logger = logging.getLogger(__name__)

CURVE = ec.SECP256K1()

# 65-byte RSV signature as hex characters.
SIGNATURE_SIZE = 130
# r||s only, without the recovery id.
SIGNATURE_HEX_SIZE = SIGNATURE_SIZE - 2

PublicKeyLike = ec.EllipticCurvePublicKey | bytes | str
PrivateKeyLike = ec.EllipticCurvePrivateKey | bytes | str

_ECDSA_PREHASHED = ec.ECDSA(Prehashed(hashes.SHA256()))


def sha256hash(data: bytes | str) -> bytes:
    """Return the 32-byte SHA-256 digest of *data* (str is UTF-8 encoded)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).digest()


@dataclass(frozen=True)
class RecoverableSignature:
    """64-byte r||s signature with its recovery id."""

    signature: bytes
    recovery_id: int

    def __post_init__(self) -> None:
        if len(self.signature) != 64:
            raise SignatureParseError(
                f"signature must be 64 bytes, got {len(self.signature)}"
            )
        if not 0 <= self.recovery_id <= 3:
            raise SignatureParseError(
                f"recovery id must be in 0..3, got {self.recovery_id}"
            )

    @classmethod
    def from_bytes(cls, data: bytes) -> RecoverableSignature:
        """Parse the 65-byte RSV form."""
        if len(data) != 65:
            raise SignatureParseError(f"expected 65 bytes, got {len(data)}")
        return cls(signature=bytes(data[:64]), recovery_id=data[64])

    @classmethod
    def from_hex(cls, value: str | bytes) -> RecoverableSignature:
        """Parse the 130-character hex form."""
        return cls.from_bytes(_unhex(value))

    def to_bytes(self) -> bytes:
        return self.signature + bytes([self.recovery_id])

    def to_hex(self) -> str:
        """Return the 130-character prefix used in signed payloads."""
        return self.signature.hex() + bytes([self.recovery_id]).hex()

    @property
    def r(self) -> int:
        return int.from_bytes(self.signature[:32], "big")

    @property
    def s(self) -> int:
        return int.from_bytes(self.signature[32:], "big")


def _unhex(value: str | bytes) -> bytes:
    if isinstance(value, str):
        try:
            value = value.encode("ascii")
        except UnicodeEncodeError as exc:
            raise HexDecodeError(f"signature is not hex: {exc}") from exc
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise HexDecodeError(f"signature is not hex: {exc}") from exc


def _to_bytes(body: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(body, str):
        return body.encode("utf-8")
    return bytes(body)


# ── Keys ─────────────────────────────────────────────────────────────


def generate_private_key() -> ec.EllipticCurvePrivateKey:
    """Generate a new random secp256k1 private key."""
    return ec.generate_private_key(CURVE)


def load_private_key(secret: PrivateKeyLike) -> ec.EllipticCurvePrivateKey:
    """Load a secp256k1 private key from a key object, 32 raw bytes or hex.

    Raises:
        InvalidPrivateKeyError: If the secret is not hex, not 32 bytes, or
            not a valid secp256k1 scalar.
    """
    if isinstance(secret, ec.EllipticCurvePrivateKey):
        if not isinstance(secret.curve, ec.SECP256K1):
            raise InvalidPrivateKeyError(
                f"expected a secp256k1 key, got {secret.curve.name}"
            )
        return secret
    if isinstance(secret, str):
        try:
            raw = bytes.fromhex(secret.removeprefix("0x"))
        except ValueError as exc:
            raise InvalidPrivateKeyError(f"private key is not hex: {exc}") from exc
    else:
        raw = bytes(secret)
    if len(raw) != 32:
        raise InvalidPrivateKeyError(f"private key must be 32 bytes, got {len(raw)}")
    scalar = int.from_bytes(raw, "big")
    if not 0 < scalar < N:
        raise InvalidPrivateKeyError("private key scalar out of range")
    return ec.derive_private_key(scalar, CURVE)


def load_public_key(value: PublicKeyLike) -> ec.EllipticCurvePublicKey:
    """Load a secp256k1 public key from a key object or SEC1 bytes/hex.

    Both compressed (33 bytes) and uncompressed (65 bytes) encodings are
    accepted.

    Raises:
        InvalidPublicKeyError: If the value is not a point on secp256k1.
    """
    if isinstance(value, ec.EllipticCurvePublicKey):
        if not isinstance(value.curve, ec.SECP256K1):
            raise InvalidPublicKeyError(
                f"expected a secp256k1 key, got {value.curve.name}"
            )
        return value
    if isinstance(value, str):
        try:
            value = bytes.fromhex(value.removeprefix("0x"))
        except ValueError as exc:
            raise InvalidPublicKeyError(f"public key is not hex: {exc}") from exc
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(CURVE, bytes(value))
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise InvalidPublicKeyError(f"invalid secp256k1 public key: {exc}") from exc


def public_key_bytes(
    key: ec.EllipticCurvePublicKey | ec.EllipticCurvePrivateKey,
    compressed: bool = True,
) -> bytes:
    """Return the SEC1 encoding of a public key (or a private key's public key)."""
    if isinstance(key, ec.EllipticCurvePrivateKey):
        key = key.public_key()
    fmt = (
        serialization.PublicFormat.CompressedPoint
        if compressed
        else serialization.PublicFormat.UncompressedPoint
    )
    return key.public_bytes(serialization.Encoding.X962, fmt)


# ── Packing ──────────────────────────────────────────────────────────


def pack_signed_body(
    signature: RecoverableSignature,
    body: bytes | bytearray | memoryview | str,
) -> bytes:
    """Prefix *body* with the hex signature and recovery id."""
    return signature.to_hex().encode("ascii") + _to_bytes(body)


def unpack_signed_body(data: bytes) -> tuple[bytes, bytes, bytes]:
    """Split a signed payload into (signature hex, recovery id hex, body).

    Raises:
        MalformedPayloadError: If *data* is shorter than the signature prefix.
    """
    if len(data) < SIGNATURE_SIZE:
        raise MalformedPayloadError(SIGNATURE_SIZE, len(data))
    return (
        data[:SIGNATURE_HEX_SIZE],
        data[SIGNATURE_HEX_SIZE:SIGNATURE_SIZE],
        data[SIGNATURE_SIZE:],
    )


def parse_standard_signature(raw: bytes) -> tuple[int, int]:
    """Parse a 64-byte compact signature into (r, s).

    Raises:
        SignatureParseError: If *raw* is not 64 bytes or r/s overflow the
            curve order.
    """
    if len(raw) != 64:
        raise SignatureParseError(f"signature must be 64 bytes, got {len(raw)}")
    r = int.from_bytes(raw[:32], "big")
    s = int.from_bytes(raw[32:], "big")
    if r >= N or s >= N:
        raise SignatureParseError("signature r or s overflows the curve order")
    return r, s


# ── Signing and verification ─────────────────────────────────────────


def verify_digest(
    public_key: PublicKeyLike, r: int, s: int, digest: bytes
) -> bool:
    """Verify (r, s) over a 32-byte *digest* with ECDSA on secp256k1."""
    key = load_public_key(public_key)
    if r == 0 or s == 0:
        return False
    try:
        key.verify(encode_dss_signature(r, s), digest, _ECDSA_PREHASHED)
    except InvalidSignature:
        return False
    return True


def verify_signed_body(data: bytes, public_key: PublicKeyLike) -> bool:
    """Verify the signature prefix of a signed payload against *public_key*.

    Returns False when the signature is well-formed but does not match.

    Raises:
        MalformedPayloadError: If *data* is shorter than the prefix.
        HexDecodeError: If the signature prefix is not hex.
        SignatureParseError: If the signature is not a valid r||s pair.
        InvalidPublicKeyError: If *public_key* cannot be loaded.
    """
    signature_hex, _recovery_hex, body = unpack_signed_body(data)
    r, s = parse_standard_signature(_unhex(signature_hex))
    verified = verify_digest(public_key, r, s, sha256hash(body))
    logger.debug("Signed body verification: %s", "ok" if verified else "mismatch")
    return verified


def recover_public_key(
    signature: RecoverableSignature, digest: bytes, compressed: bool = True
) -> bytes | None:
    """Recover the SEC1 public key that produced *signature* over *digest*.

    Returns None when libsecp256k1 cannot recover a key for the signature
    and recovery id.
    """
    try:
        key = coincurve.PublicKey.from_signature_and_message(
            signature.to_bytes(), digest, hasher=None
        )
    except ValueError:
        return None
    return key.format(compressed=compressed)


def sign_digest(private_key: PrivateKeyLike, digest: bytes) -> RecoverableSignature:
    """Sign a 32-byte digest, returning a low-s signature with its recovery id."""
    key = load_private_key(private_key)
    secret = key.private_numbers().private_value.to_bytes(32, "big")
    # libsecp256k1 always emits normalized (low-s) signatures.
    raw = coincurve.PrivateKey(secret).sign_recoverable(digest, hasher=None)
    return RecoverableSignature.from_bytes(raw)


def sign_body(
    private_key: PrivateKeyLike, body: bytes | bytearray | memoryview | str
) -> RecoverableSignature:
    """Sign the SHA-256 digest of *body*."""
    return sign_digest(private_key, sha256hash(_to_bytes(body)))


def sign_and_pack(
    private_key: PrivateKeyLike, body: bytes | bytearray | memoryview | str
) -> bytes:
    """Sign *body* and return the signed payload, ready for ``WakuMessage.new``."""
    raw = _to_bytes(body)
    return pack_signed_body(sign_body(private_key, raw), raw)

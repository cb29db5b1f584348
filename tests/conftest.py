"""Pytest fixtures for dria-waku tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the package is importable when running pytest without pip install -e .
_src = Path(__file__).resolve().parent.parent / "src"
if _src.is_dir() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from cryptography.hazmat.primitives.asymmetric import ec  # noqa: E402

from dria_waku.signing import generate_private_key  # noqa: E402


@pytest.fixture
def private_key() -> ec.EllipticCurvePrivateKey:
    return generate_private_key()


@pytest.fixture
def public_key(private_key: ec.EllipticCurvePrivateKey) -> ec.EllipticCurvePublicKey:
    return private_key.public_key()


@pytest.fixture
def other_public_key() -> ec.EllipticCurvePublicKey:
    return generate_private_key().public_key()

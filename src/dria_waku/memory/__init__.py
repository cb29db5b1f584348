"""In-memory Waku relay adapters for testing."""

from __future__ import annotations

from .bus import InMemoryWakuBus
from .consumer import InMemoryConsumer
from .publisher import InMemoryPublisher

__all__ = [
    "InMemoryConsumer",
    "InMemoryPublisher",
    "InMemoryWakuBus",
]

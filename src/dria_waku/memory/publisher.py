"""InMemoryPublisher — IWakuPublisher with assertion helpers for tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..ports import IWakuPublisher
from .bus import InMemoryWakuBus

if TYPE_CHECKING:
    from ..message import WakuMessage


class InMemoryPublisher(IWakuPublisher):
    """In-memory publisher that buffers messages for testing.

    Pass a shared InMemoryWakuBus to connect with InMemoryConsumer so that
    publish() triggers subscribed handlers. get_published() and
    assert_published() support test assertions.
    """

    def __init__(self, bus: InMemoryWakuBus | None = None) -> None:
        """If bus is None, a new bus is created (no consumer connection)."""
        self._bus = bus or InMemoryWakuBus()

    async def publish(self, message: WakuMessage, **kwargs: Any) -> None:
        """Publish to the in-memory bus (and trigger any subscribed handlers)."""
        await self._bus.publish(message, **kwargs)

    def get_published(self) -> list[tuple[WakuMessage, dict[str, Any]]]:
        """Return all (message, kwargs) published so far."""
        return self._bus.get_published()

    def assert_published(self, content_topic: str, count: int = 1) -> None:
        """Assert that exactly `count` messages were published on content_topic.

        Raises AssertionError if not met.
        """
        published = [m.content_topic for m, _ in self.get_published()]
        matching = [t for t in published if t == content_topic]
        assert len(matching) == count, (
            f"Expected {count} message(s) on {content_topic!r}, "
            f"got {len(matching)}. Published: {published}"
        )

    @property
    def bus(self) -> InMemoryWakuBus:
        """Return the bus (e.g. to pass to InMemoryConsumer)."""
        return self._bus

"""InMemoryConsumer — content-topic subscriptions on an InMemoryWakuBus."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..ports import IWakuConsumer
from ..topic import ContentTopic

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from .bus import InMemoryWakuBus

    Handler = Callable[..., Coroutine[Any, Any, None]]

logger = logging.getLogger(__name__)


class InMemoryConsumer(IWakuConsumer):
    """Subscribes async handlers to content topics on a shared bus.

    Content topics are validated before registration. Subscriptions made
    through this consumer are tracked and can be dropped with
    ``unsubscribe`` or ``close``.
    """

    def __init__(self, bus: InMemoryWakuBus) -> None:
        self._bus = bus
        self._subscriptions: list[tuple[str, Handler]] = []

    async def subscribe(
        self,
        content_topic: str | ContentTopic,
        handler: Handler,
        **kwargs: Any,  # noqa: ARG002
    ) -> None:
        """Attach *handler* to *content_topic*.

        Raises:
            InvalidContentTopicError: If *content_topic* is not a full
                ``/app/version/topic/encoding`` string.
        """
        topic = str(ContentTopic.parse(str(content_topic)))
        self._bus.register(topic, handler)
        self._subscriptions.append((topic, handler))
        logger.debug("Subscribed handler to %s", topic)

    def unsubscribe(
        self,
        content_topic: str | ContentTopic,
        handler: Handler | None = None,
    ) -> int:
        """Detach this consumer's handlers from *content_topic*.

        When *handler* is given only that handler is removed. Returns the
        number of handlers removed.
        """
        topic = str(content_topic)
        removed = 0
        for sub_topic, sub_handler in list(self._subscriptions):
            if sub_topic != topic:
                continue
            if handler is not None and sub_handler is not handler:
                continue
            self._bus.unregister(sub_topic, sub_handler)
            self._subscriptions.remove((sub_topic, sub_handler))
            removed += 1
        return removed

    def close(self) -> None:
        """Drop every subscription made through this consumer."""
        for topic, handler in self._subscriptions:
            self._bus.unregister(topic, handler)
        self._subscriptions.clear()

    @property
    def subscriptions(self) -> list[str]:
        """Content topics this consumer is subscribed to, in order."""
        return [topic for topic, _ in self._subscriptions]

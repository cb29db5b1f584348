"""In-memory Waku relay for testing — connects publisher and consumer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from ..message import WakuMessage

logger = logging.getLogger(__name__)


class InMemoryWakuBus:
    """Shared relay: publish records messages and
    synchronously invokes handlers registered for the content topic."""

    def __init__(self) -> None:
        self._messages: list[tuple[WakuMessage, dict[str, Any]]] = []
        self._handlers: dict[str, list[Callable[..., Coroutine[Any, Any, None]]]] = {}

    def register(
        self,
        content_topic: str,
        handler: Callable[..., Coroutine[Any, Any, None]],
    ) -> None:
        """Register a handler for the content topic."""
        self._handlers.setdefault(content_topic, []).append(handler)

    def unregister(
        self,
        content_topic: str,
        handler: Callable[..., Coroutine[Any, Any, None]],
    ) -> None:
        """Remove one registration of *handler* from the content topic."""
        handlers = self._handlers.get(content_topic, [])
        if handler in handlers:
            handlers.remove(handler)
        if not handlers:
            self._handlers.pop(content_topic, None)

    async def publish(self, message: WakuMessage, **kwargs: Any) -> None:
        """Record message and invoke all handlers for its content topic."""
        self._messages.append((message, kwargs))
        handlers = self._handlers.get(message.content_topic, [])
        logger.debug(
            "Relaying message on %s to %d handler(s)",
            message.content_topic,
            len(handlers),
        )
        for h in handlers:
            await h(message)

    def get_published(self) -> list[tuple[WakuMessage, dict[str, Any]]]:
        """Return all published (message, kwargs) in order."""
        return list(self._messages)

    def stored(self, content_topic: str | None = None) -> list[WakuMessage]:
        """Return the non-ephemeral messages, as a STORE node would keep them."""
        return [
            m
            for m, _ in self._messages
            if not m.ephemeral
            and (content_topic is None or m.content_topic == content_topic)
        ]

    def clear(self) -> None:
        """Clear published messages and handlers (for test teardown)."""
        self._messages.clear()
        self._handlers.clear()

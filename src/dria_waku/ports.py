from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from .message import WakuMessage


@runtime_checkable
class IWakuPublisher(Protocol):
    """
    Port for publishing messages to a Waku relay.

    The relay client lives outside this package; adapters implement this.
    """

    async def publish(self, message: WakuMessage, **kwargs: Any) -> None:
        """
        Publish *message* on its content topic.

        Args:
            message: The envelope to publish.
            **kwargs: Transport-specific options (pubsub topic, ...).
        """
        ...


@runtime_checkable
class IWakuConsumer(Protocol):
    """
    Port for receiving messages from a Waku relay.
    """

    async def subscribe(
        self,
        content_topic: str,
        handler: Callable[..., Coroutine[Any, Any, None]],
        **kwargs: Any,
    ) -> None:
        """
        Subscribe *handler* to *content_topic*.

        Args:
            content_topic: Full content topic, e.g. ``/dria/0/task/proto``.
            handler: Async callable invoked with each WakuMessage.
            **kwargs: Transport-specific options.
        """
        ...

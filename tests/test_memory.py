"""Tests for the in-memory Waku relay adapters."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from dria_waku.config import WakuConfig
from dria_waku.exceptions import InvalidContentTopicError
from dria_waku.memory import InMemoryConsumer, InMemoryPublisher, InMemoryWakuBus
from dria_waku.message import WakuMessage
from dria_waku.signing import sign_and_pack
from dria_waku.topic import ContentTopic


@pytest.mark.asyncio
async def test_publish_get_published() -> None:
    pub = InMemoryPublisher()
    await pub.publish(WakuMessage.new(b"a", "heartbeat"))
    await pub.publish(WakuMessage.new(b"b", "task"), pubsub_topic="/waku/2/rs/0/0")
    published = pub.get_published()
    assert len(published) == 2
    assert published[0][0].content_topic == "/dria/0/heartbeat/proto"
    assert published[1][1] == {"pubsub_topic": "/waku/2/rs/0/0"}


@pytest.mark.asyncio
async def test_assert_published() -> None:
    pub = InMemoryPublisher()
    await pub.publish(WakuMessage.new(b"a", "heartbeat"))
    pub.assert_published("/dria/0/heartbeat/proto", count=1)
    pub.assert_published("/dria/0/task/proto", count=0)


@pytest.mark.asyncio
async def test_assert_published_fails_wrong_count() -> None:
    pub = InMemoryPublisher()
    await pub.publish(WakuMessage.new(b"a", "heartbeat"))
    with pytest.raises(AssertionError):
        pub.assert_published("/dria/0/heartbeat/proto", count=2)
    with pytest.raises(AssertionError):
        pub.assert_published("/dria/0/task/proto", count=1)


@pytest.mark.asyncio
async def test_consumer_receives_on_publish() -> None:
    pub = InMemoryPublisher()
    consumer = InMemoryConsumer(pub.bus)
    received: list[WakuMessage] = []

    async def handler(message: WakuMessage) -> None:
        received.append(message)

    await consumer.subscribe("/dria/0/task/proto", handler)
    await pub.publish(WakuMessage.new(b'{"id": "1"}', "task"))
    await pub.publish(WakuMessage.new(b'{"id": "2"}', "other"))
    assert len(received) == 1
    assert received[0].parse_payload() == {"id": "1"}


@pytest.mark.asyncio
async def test_signed_exchange(
    private_key: ec.EllipticCurvePrivateKey, public_key: ec.EllipticCurvePublicKey
) -> None:
    pub = InMemoryPublisher()
    consumer = InMemoryConsumer(pub.bus)
    accepted: list[dict[str, object]] = []

    async def handler(message: WakuMessage) -> None:
        if message.is_signed(public_key):
            accepted.append(message.parse_payload(signed=True))

    await consumer.subscribe("/dria/0/task/proto", handler)
    await pub.publish(WakuMessage.new(sign_and_pack(private_key, b'{"a":1}'), "task"))
    forged = sign_and_pack(ec.generate_private_key(ec.SECP256K1()), b'{"a":2}')
    await pub.publish(WakuMessage.new(forged, "task"))
    assert accepted == [{"a": 1}]


@pytest.mark.asyncio
async def test_stored_excludes_ephemeral() -> None:
    bus = InMemoryWakuBus()
    durable = WakuConfig(ephemeral=False)
    await bus.publish(WakuMessage.new(b"a", "t"))
    await bus.publish(WakuMessage.new(b"b", "t", config=durable))
    await bus.publish(WakuMessage.new(b"c", "u", config=durable))
    assert [m.decode_payload() for m in bus.stored()] == [b"b", b"c"]
    assert [m.decode_payload() for m in bus.stored("/dria/0/t/proto")] == [b"b"]


@pytest.mark.asyncio
async def test_clear() -> None:
    pub = InMemoryPublisher()
    await pub.publish(WakuMessage.new(b"a", "t"))
    pub.bus.clear()
    assert pub.get_published() == []


@pytest.mark.asyncio
async def test_protocol_compliance() -> None:
    from dria_waku.ports import IWakuConsumer, IWakuPublisher

    pub = InMemoryPublisher()
    consumer = InMemoryConsumer(pub.bus)
    assert isinstance(pub, IWakuPublisher)
    assert isinstance(consumer, IWakuConsumer)


@pytest.mark.asyncio
async def test_subscribe_rejects_bare_topic_name() -> None:
    consumer = InMemoryConsumer(InMemoryWakuBus())

    async def handler(message: WakuMessage) -> None:  # noqa: ARG001
        pass

    with pytest.raises(InvalidContentTopicError):
        await consumer.subscribe("task", handler)
    assert consumer.subscriptions == []


@pytest.mark.asyncio
async def test_subscribe_accepts_content_topic_model() -> None:
    pub = InMemoryPublisher()
    consumer = InMemoryConsumer(pub.bus)
    received: list[WakuMessage] = []

    async def handler(message: WakuMessage) -> None:  # noqa: ARG001
        received.append(message)

    await consumer.subscribe(ContentTopic.for_topic("task"), handler)
    await pub.publish(WakuMessage.new(b"{}", "task"))
    assert consumer.subscriptions == ["/dria/0/task/proto"]
    assert len(received) == 1


@pytest.mark.asyncio
async def test_unsubscribe_stops_delivery() -> None:
    pub = InMemoryPublisher()
    consumer = InMemoryConsumer(pub.bus)
    first: list[WakuMessage] = []
    second: list[WakuMessage] = []

    async def on_first(message: WakuMessage) -> None:
        first.append(message)

    async def on_second(message: WakuMessage) -> None:
        second.append(message)

    await consumer.subscribe("/dria/0/task/proto", on_first)
    await consumer.subscribe("/dria/0/task/proto", on_second)
    assert consumer.unsubscribe("/dria/0/task/proto", on_first) == 1
    await pub.publish(WakuMessage.new(b"{}", "task"))
    assert first == []
    assert len(second) == 1

    assert consumer.unsubscribe("/dria/0/task/proto") == 1
    assert consumer.unsubscribe("/dria/0/task/proto") == 0
    await pub.publish(WakuMessage.new(b"{}", "task"))
    assert len(second) == 1


@pytest.mark.asyncio
async def test_close_keeps_other_consumers() -> None:
    bus = InMemoryWakuBus()
    closing = InMemoryConsumer(bus)
    staying = InMemoryConsumer(bus)
    received: list[str] = []

    async def closing_handler(message: WakuMessage) -> None:  # noqa: ARG001
        received.append("closing")

    async def staying_handler(message: WakuMessage) -> None:  # noqa: ARG001
        received.append("staying")

    await closing.subscribe("/dria/0/t/proto", closing_handler)
    await staying.subscribe("/dria/0/t/proto", staying_handler)
    closing.close()
    await bus.publish(WakuMessage.new(b"x", "t"))
    assert received == ["staying"]
    assert closing.subscriptions == []

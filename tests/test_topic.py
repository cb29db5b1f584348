"""Tests for content topic helpers."""

from __future__ import annotations

import pytest

from dria_waku.config import WakuConfig
from dria_waku.exceptions import InvalidContentTopicError
from dria_waku.message import WakuMessage
from dria_waku.topic import ContentTopic, create_content_topic


def test_create_content_topic() -> None:
    assert create_content_topic("test-topic") == "/dria/0/test-topic/proto"
    assert create_content_topic("x") == "/dria/0/x/proto"


def test_create_content_topic_on_message_class() -> None:
    assert WakuMessage.create_content_topic("test-topic") == "/dria/0/test-topic/proto"


def test_create_content_topic_custom_config() -> None:
    cfg = WakuConfig(app_name="waku", enc_version=2, encoding="rfc26")
    assert create_content_topic("default-waku", cfg) == "/waku/2/default-waku/rfc26"


def test_parse_roundtrip() -> None:
    parsed = ContentTopic.parse(create_content_topic("heartbeat"))
    assert parsed.app_name == "dria"
    assert parsed.version == 0
    assert parsed.topic == "heartbeat"
    assert parsed.encoding == "proto"
    assert str(parsed) == "/dria/0/heartbeat/proto"


def test_for_topic_matches_create() -> None:
    assert str(ContentTopic.for_topic("task")) == create_content_topic("task")


@pytest.mark.parametrize(
    ("value", "reason"),
    [
        ("dria/0/x/proto", "start"),
        ("/dria/0/x", "4 segments"),
        ("/dria/0/x/y/proto", "4 segments"),
        ("/dria//x/proto", "non-empty"),
        ("/dria/v0/x/proto", "decimal"),
    ],
)
def test_parse_invalid(value: str, reason: str) -> None:
    with pytest.raises(InvalidContentTopicError, match=reason) as exc_info:
        ContentTopic.parse(value)
    assert exc_info.value.content_topic == value

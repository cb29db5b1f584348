"""Content topics of the form ``/app-name/version/topic/encoding``.

See https://docs.waku.org/learn/concepts/content-topics.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .config import WakuConfig, resolve_config
from .exceptions import InvalidContentTopicError


def create_content_topic(topic: str, config: WakuConfig | None = None) -> str:
    """Build the full content topic for *topic*.

    ``create_content_topic("my-topic")`` returns ``/dria/0/my-topic/proto``.
    """
    cfg = resolve_config(config)
    return f"/{cfg.app_name}/{cfg.enc_version}/{topic}/{cfg.encoding}"


class ContentTopic(BaseModel):
    """Parsed content topic."""

    model_config = ConfigDict(frozen=True)

    app_name: str
    version: int
    topic: str
    encoding: str

    @classmethod
    def parse(cls, value: str) -> ContentTopic:
        """Parse a content topic string.

        Raises:
            InvalidContentTopicError: If *value* does not have exactly four
                non-empty segments after a leading ``/``, or the version
                segment is not a decimal number.
        """
        if not value.startswith("/"):
            raise InvalidContentTopicError(value, "must start with '/'")
        segments = value[1:].split("/")
        if len(segments) != 4:
            raise InvalidContentTopicError(
                value, f"expected 4 segments, got {len(segments)}"
            )
        if any(not segment for segment in segments):
            raise InvalidContentTopicError(value, "segments must be non-empty")
        app_name, version, topic, encoding = segments
        if not (version.isascii() and version.isdigit()):
            raise InvalidContentTopicError(value, "version must be a decimal number")
        return cls(
            app_name=app_name,
            version=int(version),
            topic=topic,
            encoding=encoding,
        )

    @classmethod
    def for_topic(cls, topic: str, config: WakuConfig | None = None) -> ContentTopic:
        """Build the content topic for *topic* under *config*."""
        cfg = resolve_config(config)
        return cls(
            app_name=cfg.app_name,
            version=cfg.enc_version,
            topic=topic,
            encoding=cfg.encoding,
        )

    def __str__(self) -> str:
        return f"/{self.app_name}/{self.version}/{self.topic}/{self.encoding}"

"""WakuConfig — fixed naming constants for envelopes and content topics."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import WakuConfigError


@dataclass(frozen=True)
class WakuConfig:
    """Envelope configuration.

    Attributes:
        app_name: First segment of every content topic.
        enc_version: Message version and second content topic segment.
            Encryption happens in the application layer, so this stays 0.
        encoding: Last content topic segment, ``proto`` as Waku recommends.
        ephemeral: Ephemeral flag set on newly built messages. Responses are
            only meaningful for a short time, so messages are not stored.
    """

    app_name: str = "dria"
    enc_version: int = 0
    encoding: str = "proto"
    ephemeral: bool = True

    def __post_init__(self) -> None:
        for name in ("app_name", "encoding"):
            value = getattr(self, name)
            if not value or "/" in value:
                raise WakuConfigError(
                    f"{name} must be non-empty and must not contain '/': {value!r}"
                )
        if not 0 <= self.enc_version <= 255:
            raise WakuConfigError(
                f"enc_version must fit in an unsigned byte: {self.enc_version}"
            )


DEFAULT_CONFIG = WakuConfig()


def resolve_config(config: WakuConfig | None) -> WakuConfig:
    """Return *config*, or the default configuration when it is None."""
    return config if config is not None else DEFAULT_CONFIG

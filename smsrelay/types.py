"""Core types for the SMS relay library."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class DeliveryStatus(str, Enum):
    """Status of a message delivery attempt."""

    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Non-raising outcome of a send, as returned by ``SmsGateway.deliver``."""

    status: DeliveryStatus
    error_code: str | None = None
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is DeliveryStatus.SENT

    @classmethod
    def ok(cls) -> DeliveryResult:
        return cls(status=DeliveryStatus.SENT)

    @classmethod
    def fail(
        cls,
        error_message: str,
        *,
        error_code: str | None = None,
    ) -> DeliveryResult:
        return cls(
            status=DeliveryStatus.FAILED,
            error_message=error_message,
            error_code=error_code,
        )


# ── Message ───────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    """An SMS to relay to one or more destination numbers.

    ``to`` keeps the caller's order. A single string is treated as one
    number; any other iterable is frozen into a tuple.
    """

    body: str
    to: tuple[str, ...] = ()
    from_number: str | None = None

    def __post_init__(self) -> None:
        numbers = (self.to,) if isinstance(self.to, str) else tuple(self.to)
        object.__setattr__(self, "to", numbers)


# ── Provider configuration ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ProviderAccount:
    """Stored settings for one SMS provider integration."""

    provider: str
    enabled: bool = True
    settings: Mapping[str, str | None] = field(default_factory=dict)
    base_url: str | None = None
    timeout: float | str | None = None

    def get(self, key: str) -> str | None:
        """Return a setting as stored, treating blank values as absent."""
        value = self.settings.get(key)
        if value is None:
            return None
        value = str(value)
        return value if value.strip() else None

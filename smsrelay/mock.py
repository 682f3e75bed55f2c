"""Mock SMS sender for testing.

Records every per-recipient send and can be told to fail for chosen
numbers. Useful for unit testing code that depends on SMS delivery
without hitting real providers.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .errors import ProviderError, SmsError
from .providers.base import require_recipient, send_each
from .types import OutboundMessage


@dataclass
class SentMessage:
    """Record of one recipient send through the MockSender."""

    message: OutboundMessage
    to: str


class MockSender:
    """Test sender that records sends and raises on configured numbers.

    Usage::

        sender = MockSender()
        sender.send(OutboundMessage(body="hi", to=["+100", "+200"]))
        assert [record.to for record in sender.sent] == ["+100", "+200"]

    Configure failures::

        sender = MockSender(fail_on={"+200"}, error=ProviderError("rejected"))
        sender.send(OutboundMessage(body="hi", to=["+100", "+200", "+300"]))
        # raises ProviderError; only "+100" is recorded

    The same ``error`` instance is raised for every failing number; its
    traceback is reset on each raise.
    """

    def __init__(
        self,
        *,
        fail_on: Iterable[str] = (),
        error: SmsError | None = None,
    ) -> None:
        self.fail_on = set(fail_on)
        self.error = error or ProviderError("Simulated failure", code="mock")
        self.sent: list[SentMessage] = []

    def send(self, message: OutboundMessage) -> None:
        send_each(message, self._send_to_number)

    def _send_to_number(self, message: OutboundMessage, to_number: str) -> None:
        require_recipient(to_number)
        if to_number in self.fail_on:
            raise self.error.with_traceback(None)
        self.sent.append(SentMessage(message=message, to=to_number))

    def reset(self) -> None:
        """Clear all recorded sends."""
        self.sent.clear()

"""SMS gateway — the main entry point for sending messages.

The gateway picks a sender by provider name and relays the message
through it. Senders raise on failure; :meth:`SmsGateway.deliver` turns
those errors into a :class:`~smsrelay.types.DeliveryResult` for callers
that prefer a value.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .errors import SmsError, UnknownProvider
from .providers import HubtelSender, MessagenetSender, SmsBroadcastSender, SmsGlobalSender
from .types import DeliveryResult, OutboundMessage

if TYPE_CHECKING:
    from .credentials import CredentialResolver
    from .providers.base import SmsSender

logger = logging.getLogger(__name__)

SENDER_CLASSES: dict[str, type] = {
    "Hubtel": HubtelSender,
    "Messagenet": MessagenetSender,
    "SmsBroadcast": SmsBroadcastSender,
    "SmsGlobal": SmsGlobalSender,
}


class SmsGateway:
    """Routes messages to the sender registered for a provider.

    Usage::

        from smsrelay import EnvCredentialResolver, OutboundMessage, SmsGateway

        with SmsGateway(EnvCredentialResolver()) as gateway:
            gateway.send(
                OutboundMessage(body="Your code is 123456", to=["+233200000000"]),
                provider="Hubtel",
            )
    """

    def __init__(
        self,
        resolver: CredentialResolver,
        senders: Mapping[str, SmsSender] | None = None,
    ) -> None:
        if senders is None:
            senders = {name: sender_cls(resolver) for name, sender_cls in SENDER_CLASSES.items()}
        self._senders = {name.casefold(): sender for name, sender in senders.items()}

    @property
    def providers(self) -> list[str]:
        return sorted(self._senders)

    def sender(self, provider: str) -> SmsSender:
        """Return the sender registered for ``provider``."""
        try:
            return self._senders[provider.casefold()]
        except KeyError:
            raise UnknownProvider(provider) from None

    def send(self, message: OutboundMessage, *, provider: str) -> None:
        """Send a message, raising the first ``SmsError`` encountered."""
        self.sender(provider).send(message)

    def deliver(self, message: OutboundMessage, *, provider: str) -> DeliveryResult:
        """Send a message and report the outcome instead of raising."""
        try:
            self.send(message, provider=provider)
        except SmsError as exc:
            logger.warning("SMS via %s failed: %s", provider, exc)
            return DeliveryResult.fail(str(exc), error_code=exc.code)
        return DeliveryResult.ok()

    async def send_async(self, message: OutboundMessage, *, provider: str) -> None:
        """Send a message asynchronously (runs sync send in a thread)."""
        await asyncio.to_thread(self.send, message, provider=provider)

    async def deliver_async(self, message: OutboundMessage, *, provider: str) -> DeliveryResult:
        return await asyncio.to_thread(self.deliver, message, provider=provider)

    def close(self) -> None:
        """Close every sender that holds a connection pool."""
        for sender in self._senders.values():
            close = getattr(sender, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> SmsGateway:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

"""
smsrelay — outbound SMS relay to third-party gateway APIs.

Owns everything from "I have a message and a provider name" to "the provider
accepted it, or here is why not." The consuming app keeps orchestration:
who to text, which provider to use, and where integration credentials live.

Quick start — Hubtel with credentials from the environment::

    from smsrelay import EnvCredentialResolver, HubtelSender, OutboundMessage

    # SMSRELAY_HUBTEL_ENABLED=1 SMSRELAY_HUBTEL_CLIENT_ID=... SMSRELAY_HUBTEL_CLIENT_SECRET=...
    with HubtelSender(EnvCredentialResolver()) as sender:
        sender.send(OutboundMessage(body="Hello!", to=["+233200000000"], from_number="MyShop"))

Quick start — SMSGlobal with in-memory credentials::

    from smsrelay import OutboundMessage, ProviderAccount, SmsGlobalSender, StaticCredentialResolver

    resolver = StaticCredentialResolver([
        ProviderAccount("SmsGlobal", settings={"api_key": "...", "api_secret": "...", "sender": "MyShop"}),
    ])
    SmsGlobalSender(resolver).send(OutboundMessage(body="Your code is 123456", to=["61400000000"]))

Routing by provider name, with a result instead of an exception::

    from smsrelay import SmsGateway

    with SmsGateway(resolver) as gateway:
        result = gateway.deliver(message, provider="SmsBroadcast")
        if not result.succeeded:
            print(result.error_code, result.error_message)

For testing::

    from smsrelay import MockSender

    sender = MockSender()
    sender.send(OutboundMessage(body="test", to=["+100"]))
    assert len(sender.sent) == 1

Module overview
---------------
- ``types``        — OutboundMessage, ProviderAccount, DeliveryResult
- ``errors``       — SmsError hierarchy
- ``credentials``  — CredentialResolver protocol, static and environment resolvers
- ``providers/``   — HubtelSender, MessagenetSender, SmsBroadcastSender, SmsGlobalSender
- ``gateway``      — SmsGateway routing by provider name
- ``mock``         — MockSender
- ``phone``        — digits-only number formatting

Senders never retry, queue or rate limit; a failure is raised to the caller
and sends to later recipients in the same message are not attempted.
"""

from .credentials import CredentialResolver, EnvCredentialResolver, StaticCredentialResolver
from .errors import (
    ConfigurationError,
    IntegrationDisabled,
    MissingCredential,
    MissingRecipient,
    MissingSender,
    ProviderError,
    SmsError,
    TransportError,
    TransportTimeout,
    UnknownProvider,
    ValidationError,
)
from .gateway import SmsGateway
from .mock import MockSender
from .phone import digits_only
from .providers import (
    HubtelSender,
    MessagenetSender,
    SmsBroadcastSender,
    SmsGlobalSender,
    SmsSender,
    build_mac_header,
    sign_request,
)
from .types import DeliveryResult, DeliveryStatus, OutboundMessage, ProviderAccount

__all__ = [
    # Gateway
    "SmsGateway",
    # Senders
    "SmsSender",
    "HubtelSender",
    "MessagenetSender",
    "SmsBroadcastSender",
    "SmsGlobalSender",
    "MockSender",
    "build_mac_header",
    "sign_request",
    # Credentials
    "CredentialResolver",
    "EnvCredentialResolver",
    "StaticCredentialResolver",
    # Types
    "DeliveryResult",
    "DeliveryStatus",
    "OutboundMessage",
    "ProviderAccount",
    # Errors
    "SmsError",
    "ConfigurationError",
    "IntegrationDisabled",
    "MissingCredential",
    "UnknownProvider",
    "ValidationError",
    "MissingRecipient",
    "MissingSender",
    "TransportError",
    "TransportTimeout",
    "ProviderError",
    # Phone
    "digits_only",
]

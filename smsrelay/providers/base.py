"""Sender protocol and the helpers every SMS sender is built from."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

import httpx

from smsrelay.credentials import CredentialResolver
from smsrelay.errors import (
    ConfigurationError,
    IntegrationDisabled,
    MissingCredential,
    MissingRecipient,
    TransportError,
    TransportTimeout,
)
from smsrelay.types import OutboundMessage, ProviderAccount

logger = logging.getLogger(__name__)


class SmsSender(Protocol):
    """Interface that all SMS senders must implement."""

    def send(self, message: OutboundMessage) -> None:
        """Relay ``message`` to every destination number, in order.

        Returns nothing on success and raises an ``SmsError`` subclass on
        the first failure.
        """
        ...


def send_each(message: OutboundMessage, send_one: Callable[[OutboundMessage, str], None]) -> None:
    """Call ``send_one`` for each destination, stopping at the first error."""
    if not message.to:
        raise MissingRecipient()
    for number in message.to:
        send_one(message, number)


def resolve_account(resolver: CredentialResolver, provider: str) -> ProviderAccount:
    account = resolver.resolve(provider)
    if not account.enabled:
        raise IntegrationDisabled(provider)
    return account


def require_setting(account: ProviderAccount, key: str, label: str) -> str:
    """Return a required account setting or raise ``MissingCredential``."""
    value = account.get(key)
    if not value:
        raise MissingCredential(account.provider, key, label)
    return value


def require_recipient(number: str) -> str:
    if not number or not number.strip():
        raise MissingRecipient()
    return number


def parse_timeout(value: float | int | str | None) -> float | None:
    """Convert a configured timeout to seconds.

    Accepts seconds as a number or numeric string, or clock notation
    ``H:MM`` / ``H:MM:SS`` (``"24:00"`` is 24 hours). ``None`` disables
    the timeout.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid SMS send timeout: {value!r}")
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = value.strip()
        try:
            if ":" in text:
                parts = [int(part) for part in text.split(":")]
                if len(parts) > 3:
                    raise ValueError(text)
                hours, minutes, secs = (parts + [0, 0])[:3]
                seconds = float(hours * 3600 + minutes * 60 + secs)
            else:
                seconds = float(text)
        except ValueError:
            raise ConfigurationError(f"Invalid SMS send timeout: {value!r}") from None
    if seconds <= 0:
        raise ConfigurationError(f"Invalid SMS send timeout: {value!r}")
    return seconds


def effective_base_url(account: ProviderAccount, default: str) -> str:
    return (account.base_url or default).rstrip("/")


def effective_timeout(account: ProviderAccount, default: float | str | None) -> float | None:
    return parse_timeout(account.timeout if account.timeout is not None else default)


def perform_request(
    provider: str,
    call: Callable[..., httpx.Response],
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    """Issue an HTTP call, mapping httpx request failures to SMS errors."""
    try:
        return call(url, **kwargs)
    except httpx.TimeoutException as exc:
        logger.error("%s SMS sending timeout: %s", provider, exc)
        raise TransportTimeout(f"{provider} SMS sending timeout.") from exc
    except httpx.RequestError as exc:
        logger.error("%s SMS transport error: %s", provider, exc)
        raise TransportError(f"{provider} SMS transport error: {exc}") from exc
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid {provider} base URL: {exc}") from exc


def decode_json(response: httpx.Response) -> dict[str, Any]:
    """Parse a JSON object body, returning an empty dict for anything else."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}

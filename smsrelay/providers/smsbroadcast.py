"""SMS Broadcast sender.

The advanced API replies in plain text, one line per recipient::

    OK: 447700900123: 2942263
    BAD:447700900123:Invalid Number
    ERROR: Username or password is incorrect
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from smsrelay.credentials import CredentialResolver
from smsrelay.errors import ProviderError
from smsrelay.phone import digits_only
from smsrelay.types import OutboundMessage

from .base import (
    effective_base_url,
    effective_timeout,
    perform_request,
    require_recipient,
    require_setting,
    resolve_account,
    send_each,
)

logger = logging.getLogger(__name__)

PROVIDER = "SmsBroadcast"
SMSBROADCAST_BASE_URL = "https://api.smsbroadcast.co.uk/api-adv.php"
DEFAULT_TIMEOUT_SECONDS = 10.0

_FAILURE_STATUSES = {"BAD", "ERROR"}


class SmsBroadcastSender:
    """Sends SMS through the SMS Broadcast advanced HTTP API."""

    def __init__(
        self,
        resolver: CredentialResolver,
        *,
        base_url: str = SMSBROADCAST_BASE_URL,
        timeout: float | str | None = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._resolver = resolver
        self._base_url = base_url
        self._timeout = timeout
        self._client = client or httpx.Client()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> SmsBroadcastSender:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, message: OutboundMessage) -> None:
        """Send ``message`` to each destination in turn."""
        send_each(message, self._send_to_number)

    def _send_to_number(self, message: OutboundMessage, to_number: str) -> None:
        account = resolve_account(self._resolver, PROVIDER)

        username = require_setting(account, "username", "SmsBroadcast username")
        password = require_setting(account, "password", "SmsBroadcast password")
        require_recipient(to_number)

        fields = [
            ("username", username),
            ("password", password),
            ("to", digits_only(to_number)),
            ("message", message.body),
        ]
        sender = message.from_number or account.get("sender")
        if sender:
            fields.append(("from", sender))

        response = perform_request(
            PROVIDER,
            self._client.post,
            effective_base_url(account, self._base_url),
            content=encode_form(fields),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=effective_timeout(account, self._timeout),
        )
        logger.debug("SmsBroadcast: %s %s", response.status_code, response.text)

        _check_reply(response)


def encode_form(fields: list[tuple[str, str]]) -> str:
    """Percent-encode a form body, spaces as ``%20``."""
    return "&".join(f"{name}={quote(value, safe='')}" for name, value in fields)


def _check_reply(response: httpx.Response) -> None:
    line = next((line.strip() for line in response.text.splitlines() if line.strip()), "")
    status, _, rest = line.partition(":")
    status = status.strip().upper()

    if status == "OK":
        reference = rest.rsplit(":", 1)[-1].strip()
        logger.info("SmsBroadcast SMS sending successful. Reference: %s", reference)
        return

    if status in _FAILURE_STATUSES:
        reason = rest.strip()
        logger.error("SmsBroadcast SMS sending error. Reason: %s.", reason)
        raise ProviderError(f"SmsBroadcast SMS sending error. Reason: {reason}.", code=status, reason=reason)

    logger.error("Unexpected SmsBroadcast reply. Status: %s, Body: %s", response.status_code, response.text)
    raise ProviderError(
        f"SmsBroadcast SMS sending error. Unexpected response: {line!r}.",
        code=str(response.status_code),
        reason=line or None,
    )

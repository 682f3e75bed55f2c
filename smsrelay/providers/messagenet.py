"""Messagenet SMS sender."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from smsrelay.credentials import CredentialResolver
from smsrelay.errors import ProviderError
from smsrelay.phone import digits_only
from smsrelay.types import OutboundMessage

from .base import (
    decode_json,
    effective_base_url,
    effective_timeout,
    perform_request,
    require_recipient,
    require_setting,
    resolve_account,
    send_each,
)

logger = logging.getLogger(__name__)

PROVIDER = "Messagenet"
MESSAGENET_BASE_URL = "https://api.messagenet.com/api"
DEFAULT_TIMEOUT_SECONDS = 10.0


class MessagenetSender:
    """Sends SMS through the Messagenet ``send_sms`` API."""

    def __init__(
        self,
        resolver: CredentialResolver,
        *,
        base_url: str = MESSAGENET_BASE_URL,
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

    def __enter__(self) -> MessagenetSender:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, message: OutboundMessage) -> None:
        """Send ``message`` to each destination in turn."""
        send_each(message, self._send_to_number)

    def _send_to_number(self, message: OutboundMessage, to_number: str) -> None:
        account = resolve_account(self._resolver, PROVIDER)

        user_id = require_setting(account, "user_id", "Messagenet user ID")
        password = require_setting(account, "password", "Messagenet password")
        require_recipient(to_number)

        params = {
            "auth_userid": user_id,
            "auth_password": password,
            "destination": digits_only(to_number),
            "text": message.body,
            "format": "json",
        }
        sender = message.from_number or account.get("sender")
        if sender:
            params["sender"] = digits_only(sender)

        response = perform_request(
            PROVIDER,
            self._client.post,
            effective_base_url(account, self._base_url) + "/send_sms",
            params=params,
            timeout=effective_timeout(account, self._timeout),
        )
        logger.debug("Messagenet: %s %s", response.status_code, response.text)

        data = decode_json(response)
        code = _http_status(data, response.status_code)
        if not 200 <= code < 300:
            _raise_error(code, data)
        logger.info("SMS accepted by Messagenet for %s", params["destination"])


def _http_status(data: dict[str, Any], fallback: int) -> int:
    """Messagenet reports its own status in ``http_status.value``."""
    nested = data.get("http_status")
    value = nested.get("value") if isinstance(nested, dict) else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _raise_error(code: int, data: dict[str, Any]) -> None:
    status = data.get("status")
    description = status.get("description") if isinstance(status, dict) else None
    if description:
        logger.error("Messagenet SMS sending error. Message: %s", description)
    raise ProviderError(f"Messagenet SMS sending error. Code: {code}.", code=str(code), reason=description)

"""Hubtel SMS sender."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from smsrelay.credentials import CredentialResolver
from smsrelay.errors import MissingSender, ProviderError
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

PROVIDER = "Hubtel"
HUBTEL_BASE_URL = "https://devp-sms03726-api.hubtel.com"
SEND_PATH = "/v1/messages/send"
DEFAULT_TIMEOUT_SECONDS = 10.0
CREATED = 201


class HubtelSender:
    """Sends SMS through the Hubtel messages API.

    With ``verify_response=False`` any reply counts as accepted, which is how
    the older Hubtel endpoint behaved; otherwise the reply must be HTTP 201
    with a zero ``status`` in the JSON body.
    """

    def __init__(
        self,
        resolver: CredentialResolver,
        *,
        base_url: str = HUBTEL_BASE_URL,
        timeout: float | str | None = DEFAULT_TIMEOUT_SECONDS,
        verify_response: bool = True,
        client: httpx.Client | None = None,
    ) -> None:
        self._resolver = resolver
        self._base_url = base_url
        self._timeout = timeout
        self._verify_response = verify_response
        self._client = client or httpx.Client()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> HubtelSender:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, message: OutboundMessage) -> None:
        """Send ``message`` to each destination in turn."""
        send_each(message, self._send_to_number)

    def _send_to_number(self, message: OutboundMessage, to_number: str) -> None:
        account = resolve_account(self._resolver, PROVIDER)

        client_id = require_setting(account, "client_id", "Hubtel client ID")
        client_secret = require_setting(account, "client_secret", "Hubtel client secret")
        require_recipient(to_number)
        sender = message.from_number or account.get("sender")
        if not sender:
            raise MissingSender()

        params = {
            "clientid": client_id,
            "clientsecret": client_secret,
            "from": sender,
            "to": to_number,
            "content": message.body,
        }
        response = perform_request(
            PROVIDER,
            self._client.get,
            effective_base_url(account, self._base_url) + SEND_PATH,
            params=params,
            timeout=effective_timeout(account, self._timeout),
        )

        if self._verify_response:
            _check_response(response)


def _check_response(response: httpx.Response) -> None:
    data = decode_json(response)
    status = data.get("status", data.get("Status"))
    if response.status_code == CREATED and status is not None and str(status) == "0":
        logger.info("SMS accepted by Hubtel, messageId=%s", data.get("messageId", data.get("MessageId")))
        return

    reason = data.get("message", data.get("Message"))
    logger.error(
        "Hubtel SMS sending failed. Status: %s, Body: %s",
        response.status_code,
        response.text,
    )
    code = str(status) if response.status_code == CREATED and status is not None else str(response.status_code)
    text = f"Hubtel SMS sending error. Code: {code}."
    if reason:
        text = f"{text} Message: {reason}"
    raise ProviderError(text, code=code, reason=reason)

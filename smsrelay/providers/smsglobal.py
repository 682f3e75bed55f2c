"""SMSGlobal REST v2 sender with MAC authentication.

Every request carries an ``Authorization: MAC ...`` header signed with the
account's API secret::

    mac = base64(HMAC-SHA256(secret, "ts\\nnonce\\nPOST\\n/v2/sms\\nhost\\nport\\n\\n"))
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
import time
from typing import Any

import httpx

from smsrelay.credentials import CredentialResolver
from smsrelay.errors import ProviderError
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

PROVIDER = "SmsGlobal"
SMSGLOBAL_BASE_URL = "https://api.smsglobal.com"
SEND_PATH = "/v2/sms"
DEFAULT_TIMEOUT = "24:00"
MAC_HOST = "api.smsglobal.com"
MAC_PORT = 443


def sign_request(
    api_secret: str,
    timestamp: int,
    nonce: str,
    *,
    method: str = "POST",
    path: str = SEND_PATH,
    host: str = MAC_HOST,
    port: int = MAC_PORT,
) -> str:
    """Return the base64 HMAC-SHA256 signature for one request."""
    parts = (str(timestamp), nonce, method, path, host, str(port), "")
    payload = "\n".join(parts) + "\n"
    digest = hmac.new(api_secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def build_mac_header(
    api_key: str,
    api_secret: str,
    *,
    timestamp: int | None = None,
    nonce: str | None = None,
    host: str = MAC_HOST,
    port: int = MAC_PORT,
) -> str:
    """Build the ``Authorization`` header value for a send request.

    A fresh timestamp and 32-character hex nonce are used unless given.
    """
    ts = int(time.time()) if timestamp is None else timestamp
    nonce = nonce or secrets.token_hex(16)
    mac = sign_request(api_secret, ts, nonce, host=host, port=port)
    return f'MAC id="{api_key}", ts="{ts}", nonce="{nonce}", mac="{mac}"'


class SmsGlobalSender:
    """Sends SMS through the SMSGlobal ``/v2/sms`` endpoint.

    The MAC is signed for ``mac_host``/``mac_port`` whatever ``base_url``
    points at.
    """

    def __init__(
        self,
        resolver: CredentialResolver,
        *,
        base_url: str = SMSGLOBAL_BASE_URL,
        timeout: float | str | None = DEFAULT_TIMEOUT,
        mac_host: str = MAC_HOST,
        mac_port: int = MAC_PORT,
        client: httpx.Client | None = None,
    ) -> None:
        self._resolver = resolver
        self._base_url = base_url
        self._timeout = timeout
        self._mac_host = mac_host
        self._mac_port = mac_port
        self._client = client or httpx.Client()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> SmsGlobalSender:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, message: OutboundMessage) -> None:
        """Send ``message`` to each destination in turn."""
        send_each(message, self._send_to_number)

    def _send_to_number(self, message: OutboundMessage, to_number: str) -> None:
        account = resolve_account(self._resolver, PROVIDER)

        api_key = require_setting(account, "api_key", "SmsGlobal API key")
        api_secret = require_setting(account, "api_secret", "SmsGlobal API secret")
        require_recipient(to_number)

        payload = {
            "destination": to_number,
            "message": message.body,
            "origin": message.from_number or account.get("sender") or "",
        }

        headers = {
            "Authorization": build_mac_header(api_key, api_secret, host=self._mac_host, port=self._mac_port),
            "Accept": "application/json",
        }

        response = perform_request(
            PROVIDER,
            self._client.post,
            effective_base_url(account, self._base_url) + SEND_PATH,
            json=payload,
            headers=headers,
            timeout=effective_timeout(account, self._timeout),
        )

        if 200 <= response.status_code < 300:
            logger.info("SMS accepted by SmsGlobal for %s", to_number)
            return
        _raise_error(response)


def _raise_error(response: httpx.Response) -> None:
    reason = decode_json(response).get("message")
    if reason:
        logger.error("SmsGlobal SMS sending error. Message: %s", reason)
    code = response.status_code
    raise ProviderError(f"SmsGlobal SMS sending error. Code: {code}.", code=str(code), reason=reason)

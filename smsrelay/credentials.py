"""Credential resolution for SMS provider integrations.

Senders never read storage directly: they ask a :class:`CredentialResolver`
for the :class:`~smsrelay.types.ProviderAccount` of their provider on every
send. The consuming app implements the protocol over its own storage, or
uses one of the resolvers below.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from typing import Protocol

from .errors import IntegrationDisabled
from .types import ProviderAccount

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


class CredentialResolver(Protocol):
    """Interface that supplies provider accounts to senders."""

    def resolve(self, provider: str) -> ProviderAccount:
        """Return the enabled account for ``provider``.

        Raises:
            IntegrationDisabled: if no account exists or it is disabled.
        """
        ...


class StaticCredentialResolver:
    """Resolves accounts from an in-memory collection.

    Usage::

        resolver = StaticCredentialResolver([
            ProviderAccount("Hubtel", settings={"client_id": "...", "client_secret": "..."}),
        ])
    """

    def __init__(self, accounts: Iterable[ProviderAccount] | Mapping[str, ProviderAccount] = ()) -> None:
        if isinstance(accounts, Mapping):
            accounts = accounts.values()
        self._accounts = {account.provider.casefold(): account for account in accounts}

    def resolve(self, provider: str) -> ProviderAccount:
        account = self._accounts.get(provider.casefold())
        if account is None or not account.enabled:
            raise IntegrationDisabled(provider)
        return account


class EnvCredentialResolver:
    """Resolves accounts from environment variables.

    Variables are named ``<prefix><PROVIDER>_<KEY>``; for Hubtel::

        SMSRELAY_HUBTEL_ENABLED=1
        SMSRELAY_HUBTEL_CLIENT_ID=...
        SMSRELAY_HUBTEL_CLIENT_SECRET=...
        SMSRELAY_HUBTEL_SENDER=MyShop
        SMSRELAY_HUBTEL_TIMEOUT=15

    ``BASE_URL`` and ``TIMEOUT`` become account overrides, every other key
    is lower-cased into the account settings. The environment is read on
    each call so rotated credentials are picked up without a restart.
    """

    def __init__(self, environ: Mapping[str, str] | None = None, prefix: str = "SMSRELAY_") -> None:
        self._environ = environ if environ is not None else os.environ
        self._prefix = prefix

    def resolve(self, provider: str) -> ProviderAccount:
        head = f"{self._prefix}{provider.upper()}_"
        values = {key[len(head):].lower(): value for key, value in self._environ.items() if key.startswith(head)}

        enabled = values.pop("enabled", "").strip().lower() in _TRUTHY
        if not enabled:
            logger.debug("No enabled %s account in environment (prefix %s)", provider, head)
            raise IntegrationDisabled(provider)

        base_url = values.pop("base_url", None) or None
        timeout = values.pop("timeout", None) or None
        return ProviderAccount(
            provider=provider,
            enabled=True,
            settings=values,
            base_url=base_url,
            timeout=timeout,
        )

"""Shared test fixtures for the SMS relay library."""

from unittest.mock import MagicMock

import httpx
import pytest

from smsrelay import MockSender, OutboundMessage, ProviderAccount, StaticCredentialResolver


@pytest.fixture
def accounts() -> list[ProviderAccount]:
    return [
        ProviderAccount(
            "Hubtel",
            settings={"client_id": "hubtel_id", "client_secret": "hubtel_secret", "sender": "MyShop"},
        ),
        ProviderAccount("Messagenet", settings={"user_id": "mn_user", "password": "mn_pass"}),
        ProviderAccount("SmsBroadcast", settings={"username": "sb_user", "password": "sb pass&1"}),
        ProviderAccount(
            "SmsGlobal",
            settings={"api_key": "sg_key", "api_secret": "sg_secret", "sender": "MyShop"},
        ),
    ]


@pytest.fixture
def resolver(accounts: list[ProviderAccount]) -> StaticCredentialResolver:
    return StaticCredentialResolver(accounts)


@pytest.fixture
def http_client() -> MagicMock:
    """Stand-in for ``httpx.Client``; set ``get``/``post`` return values per test."""
    client = MagicMock(spec=httpx.Client)
    client.get.return_value = httpx.Response(201, json={"status": 0})
    client.post.return_value = httpx.Response(200, json={})
    return client


@pytest.fixture
def message() -> OutboundMessage:
    return OutboundMessage(body="Hello world", to=["+44 7700 900123"])


@pytest.fixture
def mock_sender() -> MockSender:
    return MockSender()

"""Tests for the Messagenet sender."""

import logging

import httpx
import pytest

from smsrelay import (
    IntegrationDisabled,
    MissingCredential,
    MissingRecipient,
    OutboundMessage,
    ProviderAccount,
    ProviderError,
    StaticCredentialResolver,
    TransportError,
    TransportTimeout,
)
from smsrelay.providers.messagenet import MESSAGENET_BASE_URL, MessagenetSender


class TestMessagenetSend:
    def test_send_success(self, resolver, http_client, message):
        http_client.post.return_value = httpx.Response(200, json={"http_status": {"value": 200}})
        sender = MessagenetSender(resolver, client=http_client)

        sender.send(message)

        http_client.post.assert_called_once()
        call_args = http_client.post.call_args
        assert call_args[0][0] == f"{MESSAGENET_BASE_URL}/send_sms"
        assert call_args.kwargs["params"] == {
            "auth_userid": "mn_user",
            "auth_password": "mn_pass",
            "destination": "447700900123",
            "text": "Hello world",
            "format": "json",
        }
        assert call_args.kwargs["timeout"] == 10.0

    def test_sender_override_is_digits_only(self, resolver, http_client):
        http_client.post.return_value = httpx.Response(200, json={"http_status": {"value": 200}})
        sender = MessagenetSender(resolver, client=http_client)

        sender.send(OutboundMessage(body="Hi", to=["+39 333 1234567"], from_number="+39 (02) 555-0100"))

        params = http_client.post.call_args.kwargs["params"]
        assert params["sender"] == "39025550100"
        assert params["destination"] == "393331234567"

    def test_nested_status_failure(self, resolver, http_client, message, caplog):
        http_client.post.return_value = httpx.Response(
            200,
            json={"http_status": {"value": 500}, "status": {"description": "Internal failure"}},
        )
        sender = MessagenetSender(resolver, client=http_client)

        with caplog.at_level(logging.ERROR, logger="smsrelay.providers.messagenet"):
            with pytest.raises(ProviderError, match="Code: 500") as exc_info:
                sender.send(message)

        assert exc_info.value.code == "500"
        assert exc_info.value.reason == "Internal failure"
        assert "Internal failure" in caplog.text

    def test_nested_status_wins_over_http_status(self, resolver, http_client, message):
        http_client.post.return_value = httpx.Response(500, json={"http_status": {"value": 201}})
        sender = MessagenetSender(resolver, client=http_client)

        sender.send(message)

    def test_falls_back_to_http_status(self, resolver, http_client, message):
        http_client.post.return_value = httpx.Response(403, text="Forbidden")
        sender = MessagenetSender(resolver, client=http_client)

        with pytest.raises(ProviderError) as exc_info:
            sender.send(message)

        assert exc_info.value.code == "403"
        assert exc_info.value.reason is None

    def test_timeout(self, resolver, http_client, message):
        http_client.post.side_effect = httpx.ConnectTimeout("timed out")
        sender = MessagenetSender(resolver, client=http_client)

        with pytest.raises(TransportTimeout, match="Messagenet SMS sending timeout"):
            sender.send(message)

    def test_connection_error(self, resolver, http_client, message):
        http_client.post.side_effect = httpx.ConnectError("connection refused")
        sender = MessagenetSender(resolver, client=http_client)

        with pytest.raises(TransportError) as exc_info:
            sender.send(message)

        assert not isinstance(exc_info.value, TransportTimeout)

    def test_password_is_sent_verbatim(self, http_client, message):
        resolver = StaticCredentialResolver([
            ProviderAccount("Messagenet", settings={"user_id": "u", "password": " p4ss "}),
        ])
        http_client.post.return_value = httpx.Response(200, json={"http_status": {"value": 200}})
        sender = MessagenetSender(resolver, client=http_client)

        sender.send(message)

        assert http_client.post.call_args.kwargs["params"]["auth_password"] == " p4ss "


class TestMessagenetValidation:
    def test_empty_recipient_list(self, resolver, http_client):
        sender = MessagenetSender(resolver, client=http_client)

        with pytest.raises(MissingRecipient):
            sender.send(OutboundMessage(body="Hi"))

        assert http_client.post.call_count == 0

    def test_blank_recipient(self, resolver, http_client):
        sender = MessagenetSender(resolver, client=http_client)

        with pytest.raises(MissingRecipient):
            sender.send(OutboundMessage(body="Hi", to=["  "]))

        assert http_client.post.call_count == 0

    def test_integration_disabled(self, http_client, message):
        resolver = StaticCredentialResolver([
            ProviderAccount("Messagenet", enabled=False, settings={"user_id": "u", "password": "p"}),
        ])
        sender = MessagenetSender(resolver, client=http_client)

        with pytest.raises(IntegrationDisabled):
            sender.send(message)

        assert http_client.post.call_count == 0

    @pytest.mark.parametrize("field", ["user_id", "password"])
    def test_missing_credential(self, http_client, message, field):
        settings = {"user_id": "u", "password": "p"}
        settings[field] = "  "
        resolver = StaticCredentialResolver([ProviderAccount("Messagenet", settings=settings)])
        sender = MessagenetSender(resolver, client=http_client)

        with pytest.raises(MissingCredential) as exc_info:
            sender.send(message)

        assert exc_info.value.field == field
        assert http_client.post.call_count == 0

"""Tests for credential resolvers."""

import pytest

from smsrelay import EnvCredentialResolver, IntegrationDisabled, ProviderAccount, StaticCredentialResolver


class TestStaticCredentialResolver:
    def test_resolves_by_name_case_insensitively(self, resolver):
        account = resolver.resolve("hubtel")
        assert account.provider == "Hubtel"
        assert account.get("client_id") == "hubtel_id"

    def test_accepts_mapping(self):
        account = ProviderAccount("SmsGlobal", settings={"api_key": "k"})
        resolver = StaticCredentialResolver({"anything": account})
        assert resolver.resolve("SmsGlobal") is account

    def test_absent_provider(self, resolver):
        with pytest.raises(IntegrationDisabled, match="Twilio integration is not enabled"):
            resolver.resolve("Twilio")

    def test_disabled_provider(self):
        resolver = StaticCredentialResolver([ProviderAccount("Hubtel", enabled=False)])
        with pytest.raises(IntegrationDisabled):
            resolver.resolve("Hubtel")


class TestEnvCredentialResolver:
    def test_reads_prefixed_variables(self):
        environ = {
            "SMSRELAY_HUBTEL_ENABLED": "true",
            "SMSRELAY_HUBTEL_CLIENT_ID": "id",
            "SMSRELAY_HUBTEL_CLIENT_SECRET": "secret",
            "SMSRELAY_HUBTEL_BASE_URL": "https://smsc.example.com",
            "SMSRELAY_HUBTEL_TIMEOUT": "15",
            "SMSRELAY_SMSGLOBAL_API_KEY": "other",
        }
        account = EnvCredentialResolver(environ).resolve("Hubtel")

        assert account.provider == "Hubtel"
        assert account.enabled
        assert dict(account.settings) == {"client_id": "id", "client_secret": "secret"}
        assert account.base_url == "https://smsc.example.com"
        assert account.timeout == "15"

    @pytest.mark.parametrize("flag", [None, "", "0", "false", "off"])
    def test_not_enabled(self, flag):
        environ = {"SMSRELAY_MESSAGENET_USER_ID": "u"}
        if flag is not None:
            environ["SMSRELAY_MESSAGENET_ENABLED"] = flag

        with pytest.raises(IntegrationDisabled):
            EnvCredentialResolver(environ).resolve("Messagenet")

    def test_custom_prefix(self):
        environ = {"CRM_SMSBROADCAST_ENABLED": "1", "CRM_SMSBROADCAST_USERNAME": "u"}
        account = EnvCredentialResolver(environ, prefix="CRM_").resolve("SmsBroadcast")
        assert account.get("username") == "u"
        assert account.base_url is None
        assert account.timeout is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("SMSRELAY_SMSGLOBAL_ENABLED", "yes")
        monkeypatch.setenv("SMSRELAY_SMSGLOBAL_API_KEY", "key")
        account = EnvCredentialResolver().resolve("SmsGlobal")
        assert account.get("api_key") == "key"

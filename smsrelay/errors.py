"""Exceptions raised by SMS senders.

Every failure derives from :class:`SmsError`, which carries a short
machine-readable ``code`` next to the human-readable message::

    SmsError
    ├── ConfigurationError
    │   ├── IntegrationDisabled
    │   ├── MissingCredential
    │   └── UnknownProvider
    ├── ValidationError
    │   ├── MissingRecipient
    │   └── MissingSender
    ├── TransportError
    │   └── TransportTimeout
    └── ProviderError
"""

from __future__ import annotations


class SmsError(RuntimeError):
    """Base error for anything that stops an SMS from being relayed."""

    default_code: str | None = None

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code


class ConfigurationError(SmsError):
    """The provider integration is unusable as configured."""

    default_code = "configuration_error"


class IntegrationDisabled(ConfigurationError):
    default_code = "integration_disabled"

    def __init__(self, provider: str) -> None:
        super().__init__(f"{provider} integration is not enabled")
        self.provider = provider


class MissingCredential(ConfigurationError):
    """A required account setting is empty."""

    def __init__(self, provider: str, field: str, label: str) -> None:
        super().__init__(f"No {label}.", code=f"missing_{field}")
        self.provider = provider
        self.field = field


class UnknownProvider(ConfigurationError):
    default_code = "unknown_provider"

    def __init__(self, provider: str) -> None:
        super().__init__(f"Unknown SMS provider: {provider}")
        self.provider = provider


class ValidationError(SmsError):
    """The message itself cannot be sent."""

    default_code = "validation_error"


class MissingRecipient(ValidationError):
    default_code = "missing_recipient"

    def __init__(self, message: str = "No recipient phone number.") -> None:
        super().__init__(message)


class MissingSender(ValidationError):
    default_code = "missing_sender"

    def __init__(self, message: str = "No sender phone number.") -> None:
        super().__init__(message)


class TransportError(SmsError):
    """The provider could not be reached."""

    default_code = "transport_error"


class TransportTimeout(TransportError):
    default_code = "timeout"


class ProviderError(SmsError):
    """The provider answered but rejected the message."""

    default_code = "provider_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.reason = reason

"""Exceptions raised while binding configuration to an OpenFGA client."""

from enum import Enum


class ValidationRule(str, Enum):
    METHOD_REQUIRED = "credentials.method.required"
    METHOD_UNKNOWN = "credentials.method.unknown"
    API_TOKEN_REQUIRED = "credentials.api_token.required"
    CLIENT_CREDENTIALS_REQUIRED = "credentials.client_credentials.required"
    TELEMETRY_KEY_UNKNOWN = "telemetry.key.unknown"
    TELEMETRY_KEY_DUPLICATE = "telemetry.key.duplicate"


class FgaAutoconfigError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationInvalid(FgaAutoconfigError):
    """The configuration record breaks one of the credential/telemetry rules.

    Not a ValueError, so it propagates out of pydantic validators unwrapped.
    """

    def __init__(self, rule: ValidationRule, message: str):
        super().__init__(message)
        self.rule = rule
        self.message = message


class UnknownTelemetryKey(ConfigurationInvalid):
    def __init__(self, kind: str, key: object):
        super().__init__(
            ValidationRule.TELEMETRY_KEY_UNKNOWN,
            f"unknown telemetry {kind} '{key}'",
        )
        self.kind = kind
        self.key = key


class ClientConstructionFailed(FgaAutoconfigError):
    """The SDK rejected a configuration that passed our own validation."""

"""OpenFGA client settings loaded from environment variables.

Every field is optional; unset fields leave the SDK's own defaults alone.
Nested values use ``__`` as the delimiter, e.g.::

    OPENFGA_API_URL=https://fga.example.com
    OPENFGA_CREDENTIALS__METHOD=API_TOKEN
    OPENFGA_CREDENTIALS__CONFIG__API_TOKEN=secret
    OPENFGA_TELEMETRY_CONFIGURATION='{"REQUEST_DURATION": {"HTTP_HOST": null}}'
"""

import re
from datetime import timedelta
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, field_validator, model_validator
from pydantic_settings import BaseSettings

from fga_autoconfig.clients.mapper import has_text
from fga_autoconfig.config.credentials import CredentialsMethod
from fga_autoconfig.config.validation import parse_credentials_method, validate_settings
from fga_autoconfig.errors import ConfigurationInvalid, ValidationRule
from fga_autoconfig.telemetry.vocabulary import TelemetryAttribute, TelemetryMetric

_DURATION_RE = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)\s*(ns|us|ms|s|m|h|d)?\s*$", re.IGNORECASE)

# Milliseconds per unit
_DURATION_UNITS_MS = {
    "ns": 1e-6,
    "us": 1e-3,
    "ms": 1,
    "s": 1_000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
}


def parse_duration(value: Any) -> Any:
    """Accept ``10s`` / ``250ms`` style durations; bare numbers are milliseconds.

    Anything else (timedelta, ISO-8601 strings) is left for pydantic.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return timedelta(milliseconds=value)
    if isinstance(value, str):
        match = _DURATION_RE.match(value)
        if match:
            amount, unit = match.groups()
            return timedelta(milliseconds=float(amount) * _DURATION_UNITS_MS[(unit or "ms").lower()])
    return value


def _duplicate_telemetry_key(kind: str, key: Any, name: Any) -> ConfigurationInvalid:
    return ConfigurationInvalid(
        ValidationRule.TELEMETRY_KEY_DUPLICATE,
        f"telemetry {kind} '{key}' duplicates '{name.value}'",
    )


class CredentialsConfigSettings(BaseModel):
    model_config = {"frozen": True}

    api_token: str | None = None
    api_token_issuer: str | None = None
    api_audience: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    scopes: str | None = None  # space separated OAuth2 scopes


class CredentialsSettings(BaseModel):
    model_config = {"frozen": True}

    method: CredentialsMethod | None = None
    config: CredentialsConfigSettings | None = None

    @field_validator("method", mode="before")
    @classmethod
    def _parse_method(cls, value: Any) -> CredentialsMethod | None:
        return parse_credentials_method(value)


class FgaSettings(BaseSettings):
    # Setting this activates the whole integration
    api_url: str | None = None

    store_id: str | None = None
    authorization_model_id: str | None = None
    credentials: CredentialsSettings | None = None

    # HTTP behaviour; SDK defaults apply when unset
    user_agent: str | None = None
    read_timeout: timedelta | None = None
    connect_timeout: timedelta | None = None
    max_retries: int | None = None
    minimum_retry_delay: timedelta | None = None
    default_headers: dict[str, str] | None = None

    telemetry_configuration: dict[TelemetryMetric, dict[TelemetryAttribute, Any]] | None = None

    model_config = {
        "env_prefix": "OPENFGA_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("read_timeout", "connect_timeout", "minimum_retry_delay", mode="before")
    @classmethod
    def _parse_durations(cls, value: Any) -> Any:
        return parse_duration(value)

    @field_validator("telemetry_configuration", mode="before")
    @classmethod
    def _parse_telemetry_keys(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        table = {}
        for metric_key, attributes in value.items():
            metric = TelemetryMetric.from_key(metric_key)
            if metric in table:
                raise _duplicate_telemetry_key("metric", metric_key, metric)
            if attributes is None:
                attributes = {}
            if not isinstance(attributes, dict):
                # Left for pydantic to reject against the declared mapping type
                table[metric] = attributes
                continue
            table[metric] = {}
            for attribute_key, setting in attributes.items():
                attribute = TelemetryAttribute.from_key(attribute_key)
                if attribute in table[metric]:
                    raise _duplicate_telemetry_key("attribute", attribute_key, attribute)
                table[metric][attribute] = setting
        return table

    @model_validator(mode="after")
    def _validate(self) -> "FgaSettings":
        # Inactive records are never handed to the client builder
        if has_text(self.api_url):
            validate_settings(self)
        return self


class LoggingSettings(BaseSettings):
    log_level: str = "INFO"
    log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> FgaSettings:
    return FgaSettings()


@lru_cache
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()

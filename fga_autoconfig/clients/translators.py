"""Shape conversion from our settings model to the OpenFGA SDK's types."""

from typing import Any

from openfga_sdk.credentials import CredentialConfiguration, Credentials
from openfga_sdk.telemetry.attributes import TelemetryAttribute as SdkAttribute
from openfga_sdk.telemetry.configuration import TelemetryConfiguration
from openfga_sdk.telemetry.counters import TelemetryCounter
from openfga_sdk.telemetry.histograms import TelemetryHistogram

from fga_autoconfig.config.credentials import (
    ApiTokenCredentials,
    ClientCredentialsGrant,
    NoCredentials,
    ResolvedCredentials,
)
from fga_autoconfig.telemetry.vocabulary import TelemetryAttribute, TelemetryMetric

SdkMetric = TelemetryCounter | TelemetryHistogram


def to_sdk_credentials(credentials: ResolvedCredentials) -> Credentials | None:
    """Build SDK credentials; ``None`` for the no-credentials variant."""
    if isinstance(credentials, ApiTokenCredentials):
        return Credentials(
            method="api_token",
            configuration=CredentialConfiguration(api_token=credentials.token),
        )
    if isinstance(credentials, ClientCredentialsGrant):
        return Credentials(
            method="client_credentials",
            configuration=CredentialConfiguration(
                client_id=credentials.client_id,
                client_secret=credentials.client_secret,
                api_issuer=credentials.api_token_issuer,
                api_audience=credentials.api_audience,
                scopes=credentials.scopes,
            ),
        )
    if isinstance(credentials, NoCredentials):
        return None
    raise TypeError(f"Unsupported credentials variant: {type(credentials).__name__}")


def translate_telemetry(
    table: dict[TelemetryMetric, dict[TelemetryAttribute, Any]],
) -> dict[SdkMetric, dict[SdkAttribute, Any]]:
    """Re-key a telemetry table with SDK identifiers, values untouched.

    An attribute configured with an explicit ``None`` keeps its key, so
    "listed without a value" and "not listed" stay distinguishable.
    """
    return {
        metric.sdk_metric: {
            attribute.sdk_attribute: value for attribute, value in attributes.items()
        }
        for metric, attributes in table.items()
    }


def to_sdk_telemetry(
    table: dict[TelemetryMetric, dict[TelemetryAttribute, Any]],
) -> TelemetryConfiguration:
    """Build the SDK telemetry configuration for the listed metrics only.

    The SDK switches attributes on with booleans; an attribute listed
    without a value is switched on. Metrics left out of ``table`` stay
    disabled.
    """
    metrics = {
        metric: {
            attribute: True if value is None else value
            for attribute, value in attributes.items()
        }
        for metric, attributes in translate_telemetry(table).items()
    }
    return TelemetryConfiguration({"metrics": metrics})

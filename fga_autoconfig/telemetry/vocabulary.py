"""Symbolic telemetry names and their OpenFGA SDK identifiers.

Operators configure telemetry with short symbolic keys
(``REQUEST_DURATION``, ``HTTP_HOST``); the SDK wants its own
``TelemetryHistogram`` / ``TelemetryCounter`` / ``TelemetryAttribute``
tuples. These two enums are the only place that translation happens.
"""

from enum import Enum

from openfga_sdk.telemetry.attributes import TelemetryAttribute as SdkAttribute
from openfga_sdk.telemetry.attributes import TelemetryAttributes
from openfga_sdk.telemetry.counters import TelemetryCounter, TelemetryCounters
from openfga_sdk.telemetry.histograms import TelemetryHistogram, TelemetryHistograms

from fga_autoconfig.errors import UnknownTelemetryKey


def _normalize(key: str) -> str:
    return key.strip().upper().replace("-", "_")


class TelemetryMetric(str, Enum):
    CREDENTIALS_REQUEST = "CREDENTIALS_REQUEST"
    QUERY_DURATION = "QUERY_DURATION"
    REQUEST_DURATION = "REQUEST_DURATION"
    REQUEST = "REQUEST"

    @property
    def sdk_metric(self) -> TelemetryCounter | TelemetryHistogram:
        return _METRICS[self]

    @classmethod
    def from_key(cls, key: "str | TelemetryMetric") -> "TelemetryMetric":
        """Resolve a configured key, accepting any case and ``-`` for ``_``."""
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            try:
                return cls(_normalize(key))
            except ValueError:
                pass
        raise UnknownTelemetryKey("metric", key)


class TelemetryAttribute(str, Enum):
    FGA_CLIENT_REQUEST_BATCH_CHECK_SIZE = "FGA_CLIENT_REQUEST_BATCH_CHECK_SIZE"
    FGA_CLIENT_REQUEST_CLIENT_ID = "FGA_CLIENT_REQUEST_CLIENT_ID"
    FGA_CLIENT_REQUEST_METHOD = "FGA_CLIENT_REQUEST_METHOD"
    FGA_CLIENT_REQUEST_MODEL_ID = "FGA_CLIENT_REQUEST_MODEL_ID"
    FGA_CLIENT_REQUEST_STORE_ID = "FGA_CLIENT_REQUEST_STORE_ID"
    FGA_CLIENT_RESPONSE_MODEL_ID = "FGA_CLIENT_RESPONSE_MODEL_ID"
    FGA_CLIENT_USER = "FGA_CLIENT_USER"
    HTTP_CLIENT_REQUEST_DURATION = "HTTP_CLIENT_REQUEST_DURATION"
    HTTP_HOST = "HTTP_HOST"
    HTTP_REQUEST_METHOD = "HTTP_REQUEST_METHOD"
    HTTP_REQUEST_RESEND_COUNT = "HTTP_REQUEST_RESEND_COUNT"
    HTTP_RESPONSE_STATUS_CODE = "HTTP_RESPONSE_STATUS_CODE"
    HTTP_SERVER_REQUEST_DURATION = "HTTP_SERVER_REQUEST_DURATION"
    URL_FULL = "URL_FULL"
    URL_SCHEME = "URL_SCHEME"
    USER_AGENT = "USER_AGENT"

    @property
    def sdk_attribute(self) -> SdkAttribute:
        return _ATTRIBUTES[self]

    @classmethod
    def from_key(cls, key: "str | TelemetryAttribute") -> "TelemetryAttribute":
        """Resolve a configured key, accepting any case and ``-`` for ``_``."""
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            try:
                return cls(_normalize(key))
            except ValueError:
                pass
        raise UnknownTelemetryKey("attribute", key)


_METRICS: dict[TelemetryMetric, TelemetryCounter | TelemetryHistogram] = {
    TelemetryMetric.CREDENTIALS_REQUEST: TelemetryCounters.fga_client_credentials_request,
    TelemetryMetric.QUERY_DURATION: TelemetryHistograms.fga_client_query_duration,
    TelemetryMetric.REQUEST_DURATION: TelemetryHistograms.fga_client_request_duration,
    TelemetryMetric.REQUEST: TelemetryCounters.fga_client_request,
}

_ATTRIBUTES: dict[TelemetryAttribute, SdkAttribute] = {
    TelemetryAttribute.FGA_CLIENT_REQUEST_BATCH_CHECK_SIZE: TelemetryAttributes.fga_client_request_batch_check_size,
    TelemetryAttribute.FGA_CLIENT_REQUEST_CLIENT_ID: TelemetryAttributes.fga_client_request_client_id,
    TelemetryAttribute.FGA_CLIENT_REQUEST_METHOD: TelemetryAttributes.fga_client_request_method,
    TelemetryAttribute.FGA_CLIENT_REQUEST_MODEL_ID: TelemetryAttributes.fga_client_request_model_id,
    TelemetryAttribute.FGA_CLIENT_REQUEST_STORE_ID: TelemetryAttributes.fga_client_request_store_id,
    TelemetryAttribute.FGA_CLIENT_RESPONSE_MODEL_ID: TelemetryAttributes.fga_client_response_model_id,
    TelemetryAttribute.FGA_CLIENT_USER: TelemetryAttributes.fga_client_user,
    TelemetryAttribute.HTTP_CLIENT_REQUEST_DURATION: TelemetryAttributes.http_client_request_duration,
    TelemetryAttribute.HTTP_HOST: TelemetryAttributes.http_host,
    TelemetryAttribute.HTTP_REQUEST_METHOD: TelemetryAttributes.http_request_method,
    TelemetryAttribute.HTTP_REQUEST_RESEND_COUNT: TelemetryAttributes.http_request_resend_count,
    TelemetryAttribute.HTTP_RESPONSE_STATUS_CODE: TelemetryAttributes.http_response_status_code,
    TelemetryAttribute.HTTP_SERVER_REQUEST_DURATION: TelemetryAttributes.http_server_request_duration,
    TelemetryAttribute.URL_FULL: TelemetryAttributes.url_full,
    TelemetryAttribute.URL_SCHEME: TelemetryAttributes.url_scheme,
    TelemetryAttribute.USER_AGENT: TelemetryAttributes.user_agent_original,
}

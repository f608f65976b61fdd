"""Builds an OpenFGA client (and the Fga facade) from FgaSettings.

Pipeline: activation gate -> credential validation -> selective mapping
onto ``ClientConfiguration`` -> SDK structural validation -> client -> facade.

Nothing here keeps state between calls; ``bind`` can be invoked any number
of times and each call starts from a fresh ``ClientConfiguration``.
"""

from dataclasses import dataclass
from datetime import timedelta

from openfga_sdk import ClientConfiguration
from openfga_sdk.exceptions import OpenApiException
from openfga_sdk.sync import OpenFgaClient

from fga_autoconfig.clients.facade import Fga
from fga_autoconfig.clients.mapper import has_text, map_field
from fga_autoconfig.clients.translators import to_sdk_credentials, to_sdk_telemetry
from fga_autoconfig.config.credentials import NoCredentials
from fga_autoconfig.config.settings import FgaSettings
from fga_autoconfig.config.validation import resolve_credentials
from fga_autoconfig.errors import ClientConstructionFailed, FgaAutoconfigError
from fga_autoconfig.logging.structured import (
    BindTimer,
    bind_id_var,
    generate_bind_id,
    get_logger,
)

# Everything the SDK raises for a configuration it does not accept
_SDK_REJECTIONS = (OpenApiException, ValueError, TypeError)


@dataclass(frozen=True)
class FgaBinding:
    client: OpenFgaClient
    fga: Fga


def is_active(settings: FgaSettings) -> bool:
    """The integration runs only when an API URL is configured."""
    return has_text(settings.api_url)


def _to_millis(value: timedelta) -> int:
    return int(value.total_seconds() * 1000)


def _request_timeout_ms(settings: FgaSettings) -> int | None:
    """Total request budget: the SDK has one timeout covering connect and read."""
    parts = [t for t in (settings.connect_timeout, settings.read_timeout) if t is not None]
    if not parts:
        return None
    return sum(_to_millis(t) for t in parts)


def build_client_configuration(settings: FgaSettings) -> ClientConfiguration:
    """Map every explicitly set field onto a fresh ClientConfiguration.

    Raises:
        ConfigurationInvalid: credentials break a validation rule.
        ClientConstructionFailed: the SDK refused one of the values.
    """
    credentials = resolve_credentials(settings.credentials)
    configuration = ClientConfiguration()
    applied: list[str] = []

    def apply(name: str, value, attribute: str, **kwargs) -> None:
        if map_field(value, configuration, attribute, **kwargs):
            applied.append(name)

    try:
        apply("api_url", settings.api_url, "api_url", when=has_text)
        apply("store_id", settings.store_id, "store_id", when=has_text)
        apply(
            "authorization_model_id",
            settings.authorization_model_id,
            "authorization_model_id",
            when=has_text,
        )
        apply(
            "credentials",
            credentials,
            "credentials",
            when=lambda c: not isinstance(c, NoCredentials),
            transform=to_sdk_credentials,
        )
        apply("default_headers", settings.default_headers, "headers", transform=dict)
        apply(
            "user_agent",
            settings.user_agent,
            "headers",
            when=has_text,
            transform=lambda agent: {**configuration.headers, "User-Agent": agent},
        )
        apply("timeouts", _request_timeout_ms(settings), "timeout_millisec")
        apply("max_retries", settings.max_retries, "retry_params.max_retry")
        apply(
            "minimum_retry_delay",
            settings.minimum_retry_delay,
            "retry_params.min_wait_in_ms",
            transform=_to_millis,
        )
        apply(
            "telemetry_configuration",
            settings.telemetry_configuration,
            "telemetry",
            transform=to_sdk_telemetry,
        )
    except _SDK_REJECTIONS as e:
        raise ClientConstructionFailed(f"OpenFGA SDK rejected the configuration: {e}") from e

    get_logger().info(
        "OpenFGA client configuration built",
        extra={"event_data": {
            "applied_fields": applied,
            "credentials_method": type(credentials).__name__,
        }},
    )
    return configuration


def create_client(configuration: ClientConfiguration) -> OpenFgaClient:
    """Run the SDK's own checks, then construct the client.

    Raises:
        ClientConstructionFailed: with the SDK error chained as the cause.
    """
    try:
        configuration.is_valid()
        return OpenFgaClient(configuration)
    except _SDK_REJECTIONS as e:
        raise ClientConstructionFailed(f"Failed to create OpenFgaClient: {e}") from e


def create_fga(client: OpenFgaClient) -> Fga:
    return Fga(client)


def bind(
    settings: FgaSettings,
    *,
    configuration: ClientConfiguration | None = None,
    client: OpenFgaClient | None = None,
) -> FgaBinding | None:
    """Produce the client/facade pair, or None when no API URL is configured.

    A caller-supplied ``client`` is used as-is; a caller-supplied
    ``configuration`` replaces the one built from ``settings``.
    """
    logger = get_logger()
    token = bind_id_var.set(generate_bind_id())
    try:
        if not is_active(settings):
            logger.debug("OpenFGA integration inactive: no api_url configured")
            return None

        with BindTimer() as timer:
            if client is None:
                if configuration is None:
                    configuration = build_client_configuration(settings)
                client = create_client(configuration)
            fga = create_fga(client)

        logger.info(
            "OpenFGA client ready",
            extra={"event_data": {
                "api_url": settings.api_url,
                "store_id": settings.store_id,
                "elapsed_ms": timer.elapsed_ms,
            }},
        )
        return FgaBinding(client=client, fga=fga)
    except FgaAutoconfigError as e:
        logger.error(
            "OpenFGA binding failed",
            extra={"event_data": {"error": str(e), "error_type": type(e).__name__}},
        )
        raise
    finally:
        bind_id_var.reset(token)

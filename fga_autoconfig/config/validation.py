"""Credential consistency rules for the OpenFGA configuration record.

Every check here is a pure function of the record. A passing record is
turned into one of the ``ResolvedCredentials`` variants so later stages never
need to re-check which fields are set.
"""

from typing import TYPE_CHECKING, Any

from fga_autoconfig.config.credentials import (
    ApiTokenCredentials,
    ClientCredentialsGrant,
    CredentialsMethod,
    NoCredentials,
    ResolvedCredentials,
)
from fga_autoconfig.errors import ConfigurationInvalid, ValidationRule

if TYPE_CHECKING:
    from fga_autoconfig.config.settings import CredentialsSettings, FgaSettings

METHOD_REQUIRED_MESSAGE = "credentials method must not be null"
METHOD_UNKNOWN_MESSAGE = (
    "credentials method must be either 'NONE', 'API_TOKEN', or 'CLIENT_CREDENTIALS'"
)
API_TOKEN_REQUIRED_MESSAGE = (
    "'API_TOKEN' credentials method specified, but no token specified"
)
CLIENT_CREDENTIALS_REQUIRED_MESSAGE = (
    "'CLIENT_CREDENTIALS' configuration must contain "
    "'client-id', 'client-secret', and 'api-token-issuer'"
)


def parse_credentials_method(value: Any) -> CredentialsMethod | None:
    """Coerce a configured method name into a CredentialsMethod.

    Accepts any case and ``-`` in place of ``_`` (``api-token``). ``None`` is
    passed through so the missing-method rule can report it.
    """
    if value is None or isinstance(value, CredentialsMethod):
        return value
    if isinstance(value, str):
        try:
            return CredentialsMethod(value.strip().upper().replace("-", "_"))
        except ValueError:
            pass
    raise ConfigurationInvalid(ValidationRule.METHOD_UNKNOWN, METHOD_UNKNOWN_MESSAGE)


def _non_empty(value: str | None) -> bool:
    return value is not None and value != ""


def resolve_credentials(credentials: "CredentialsSettings | None") -> ResolvedCredentials:
    """Check the credentials sub-record and return the matching variant.

    Raises:
        ConfigurationInvalid: naming the violated rule.
    """
    if credentials is None:
        return NoCredentials()

    method = credentials.method
    if method is None:
        raise ConfigurationInvalid(ValidationRule.METHOD_REQUIRED, METHOD_REQUIRED_MESSAGE)

    config = credentials.config

    if method == CredentialsMethod.NONE:
        return NoCredentials()

    if method == CredentialsMethod.API_TOKEN:
        if config is None or not _non_empty(config.api_token):
            raise ConfigurationInvalid(
                ValidationRule.API_TOKEN_REQUIRED, API_TOKEN_REQUIRED_MESSAGE
            )
        return ApiTokenCredentials(token=config.api_token)

    if method == CredentialsMethod.CLIENT_CREDENTIALS:
        if (
            config is None
            or not _non_empty(config.api_token_issuer)
            or not _non_empty(config.client_id)
            or not _non_empty(config.client_secret)
        ):
            raise ConfigurationInvalid(
                ValidationRule.CLIENT_CREDENTIALS_REQUIRED,
                CLIENT_CREDENTIALS_REQUIRED_MESSAGE,
            )
        return ClientCredentialsGrant(
            client_id=config.client_id,
            client_secret=config.client_secret,
            api_token_issuer=config.api_token_issuer,
            api_audience=config.api_audience or None,
            scopes=config.scopes or None,
        )

    raise ConfigurationInvalid(ValidationRule.METHOD_UNKNOWN, METHOD_UNKNOWN_MESSAGE)


def validate_settings(settings: "FgaSettings") -> ResolvedCredentials:
    """Run every record-level rule; returns the resolved credentials."""
    return resolve_credentials(settings.credentials)

"""Validated credential variants handed to the SDK translator."""

from dataclasses import dataclass
from enum import Enum


class CredentialsMethod(str, Enum):
    NONE = "NONE"
    API_TOKEN = "API_TOKEN"  # static access token sent as a bearer token
    CLIENT_CREDENTIALS = "CLIENT_CREDENTIALS"  # OAuth2 client credentials exchanged for a token


@dataclass(frozen=True)
class NoCredentials:
    pass


@dataclass(frozen=True)
class ApiTokenCredentials:
    token: str

    def __repr__(self) -> str:
        return "ApiTokenCredentials(token='***')"


@dataclass(frozen=True)
class ClientCredentialsGrant:
    client_id: str
    client_secret: str
    api_token_issuer: str
    api_audience: str | None = None
    scopes: str | None = None  # space separated

    def __repr__(self) -> str:
        return (
            f"ClientCredentialsGrant(client_id={self.client_id!r}, client_secret='***', "
            f"api_token_issuer={self.api_token_issuer!r}, api_audience={self.api_audience!r}, "
            f"scopes={self.scopes!r})"
        )


ResolvedCredentials = NoCredentials | ApiTokenCredentials | ClientCredentialsGrant

"""Shared fixtures for the fga-autoconfig test suite."""

import os

import pytest

from fga_autoconfig.config.settings import (
    FgaSettings,
    LoggingSettings,
    get_logging_settings,
    get_settings,
)

# Well-formed ULIDs; the SDK rejects anything else at client construction
STORE_ID = "01HVMMBCMGZNT3SED4Z17ECXCA"
MODEL_ID = "01HVMMBD123SED4Z17ECXCA456"


@pytest.fixture(autouse=True)
def clean_openfga_env(monkeypatch):
    """Keep the developer's own OPENFGA_* variables and .env out of tests."""
    for key in list(os.environ):
        if key.startswith("OPENFGA_") or key in ("LOG_LEVEL", "LOG_FILE"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setitem(FgaSettings.model_config, "env_file", None)
    monkeypatch.setitem(LoggingSettings.model_config, "env_file", None)


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings caches.

    Usage:
        override_settings(OPENFGA_API_URL="https://fga.example.com")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so settings re-read env
        get_settings.cache_clear()
        get_logging_settings.cache_clear()

    yield _override

    get_settings.cache_clear()
    get_logging_settings.cache_clear()


@pytest.fixture
def api_token_settings() -> FgaSettings:
    return FgaSettings(
        api_url="https://fga.example.com",
        store_id=STORE_ID,
        credentials={"method": "API_TOKEN", "config": {"api_token": "secret123"}},
    )


@pytest.fixture
def client_credentials_settings() -> FgaSettings:
    return FgaSettings(
        api_url="https://fga.example.com",
        store_id=STORE_ID,
        authorization_model_id=MODEL_ID,
        credentials={
            "method": "CLIENT_CREDENTIALS",
            "config": {
                "client_id": "client-a",
                "client_secret": "shh",
                "api_token_issuer": "https://issuer.example.com",
                "api_audience": "https://api.fga.example",
                "scopes": "read write",
            },
        },
    )

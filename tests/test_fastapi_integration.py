"""Integration tests for fga_autoconfig/integrations/fastapi.py via ASGI transport."""

import logging
import threading
from types import SimpleNamespace
from unittest.mock import patch

import httpx
import pytest
from fastapi import Depends, FastAPI

import fga_autoconfig.clients.registry as registry_mod
from fga_autoconfig.clients.facade import Fga
from fga_autoconfig.errors import ConfigurationInvalid
from fga_autoconfig.integrations.fastapi import fga_lifespan, require_fga
from fga_autoconfig.logging.structured import LOGGER_NAME
from tests.conftest import STORE_ID


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset the binding and the logger that the lifespan configures."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    monkeypatch.setattr(registry_mod, "_binding", None)
    yield
    if registry_mod._binding is not None:
        registry_mod._binding.client.close()
    monkeypatch.setattr(registry_mod, "_binding", None)
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def _make_app() -> FastAPI:
    app = FastAPI(lifespan=fga_lifespan)

    @app.get("/documents/{doc_id}")
    def read_doc(doc_id: str, fga: Fga = Depends(require_fga)):
        allowed = fga.check("document", doc_id, "viewer", "user", "anne")
        return {"doc_id": doc_id, "allowed": allowed}

    return app


async def _get(app: FastAPI, path: str) -> httpx.Response:
    # ASGITransport does not run lifespan events, so drive them here
    async with fga_lifespan(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            return await client.get(path)


class TestInactive:

    async def test_dependency_returns_503(self, override_settings):
        override_settings()
        app = _make_app()
        response = await _get(app, "/documents/roadmap")
        assert response.status_code == 503
        assert response.json()["detail"] == "OpenFGA is not configured"

    async def test_incomplete_credentials_do_not_abort_startup(self, override_settings):
        override_settings(OPENFGA_CREDENTIALS__METHOD="API_TOKEN")
        app = _make_app()
        response = await _get(app, "/documents/roadmap")
        assert response.status_code == 503

    async def test_state_is_none(self, override_settings):
        override_settings()
        app = _make_app()
        async with fga_lifespan(app):
            assert app.state.fga is None


class TestActive:

    async def test_facade_on_app_state(self, override_settings):
        override_settings(
            OPENFGA_API_URL="https://fga.example.com",
            OPENFGA_STORE_ID=STORE_ID,
        )
        app = _make_app()
        async with fga_lifespan(app):
            assert isinstance(app.state.fga, Fga)
            assert app.state.fga is registry_mod._binding.fga
        assert app.state.fga is None
        assert registry_mod._binding is None

    async def test_route_uses_facade(self, override_settings):
        override_settings(OPENFGA_API_URL="https://fga.example.com", OPENFGA_STORE_ID=STORE_ID)
        app = _make_app()
        with patch(
            "openfga_sdk.sync.OpenFgaClient.check",
            return_value=SimpleNamespace(allowed=True),
        ) as check:
            response = await _get(app, "/documents/roadmap")

        assert response.status_code == 200
        assert response.json() == {"doc_id": "roadmap", "allowed": True}
        assert check.call_args.args[0].object == "document:roadmap"

    async def test_check_runs_off_event_loop_thread(self, override_settings):
        override_settings(OPENFGA_API_URL="https://fga.example.com", OPENFGA_STORE_ID=STORE_ID)
        app = _make_app()
        threads = []

        def fake_check(request):
            threads.append(threading.get_ident())
            return SimpleNamespace(allowed=False)

        with patch("openfga_sdk.sync.OpenFgaClient.check", side_effect=fake_check):
            response = await _get(app, "/documents/roadmap")

        assert response.json()["allowed"] is False
        assert threads and threads[0] != threading.get_ident()

    async def test_shutdown_closes_client(self, override_settings):
        override_settings(OPENFGA_API_URL="https://fga.example.com")
        app = _make_app()
        with patch("openfga_sdk.sync.OpenFgaClient.close") as close:
            async with fga_lifespan(app):
                pass
        close.assert_called_once()


class TestMisconfigured:

    async def test_startup_aborts(self, override_settings):
        override_settings(
            OPENFGA_API_URL="https://fga.example.com",
            OPENFGA_CREDENTIALS__METHOD="API_TOKEN",
        )
        app = _make_app()
        with pytest.raises(ConfigurationInvalid):
            async with fga_lifespan(app):
                pass
        assert registry_mod._binding is None

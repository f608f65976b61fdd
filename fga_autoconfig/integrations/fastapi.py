"""FastAPI wiring: bind at startup, close at shutdown, inject the facade.

    app = FastAPI(lifespan=fga_lifespan)

    @app.get("/documents/{doc_id}")
    def read_doc(doc_id: str, fga: Fga = Depends(require_fga)):
        ...

The facade wraps the blocking ``openfga_sdk.sync.OpenFgaClient``. Call it from
plain ``def`` endpoints so Starlette runs them in its threadpool; an
``async def`` endpoint would block the event loop for the whole request.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request

from fga_autoconfig.clients.facade import Fga
from fga_autoconfig.clients.registry import close_fga_binding, get_fga_binding
from fga_autoconfig.logging.structured import get_logger, setup_logging


@asynccontextmanager
async def fga_lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks.

    Configuration errors raised by the binder abort startup.
    """
    setup_logging()
    binding = get_fga_binding()
    app.state.fga = binding.fga if binding is not None else None
    get_logger().info(
        "OpenFGA lifespan started",
        extra={"event_data": {"active": binding is not None}},
    )
    yield
    close_fga_binding()
    app.state.fga = None


async def require_fga(request: Request) -> Fga:
    """FastAPI dependency returning the Fga facade bound at startup."""
    fga = getattr(request.app.state, "fga", None)
    if fga is None:
        raise HTTPException(status_code=503, detail="OpenFGA is not configured")
    return fga

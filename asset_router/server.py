from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from asset_router.config import RouterConfig, load_config
from asset_router.dispatch import ProxyForwarder
from asset_router.routes import CATCH_ALL_PATH, route_request
from asset_router.routing import DiskFiles, FileOracle
from asset_router.telemetry import setup_metrics, setup_tracing


def create_app(
    config: Optional[RouterConfig] = None, files: Optional[FileOracle] = None
) -> FastAPI:
    """
    Build the routing application.

    ``config`` defaults to the environment; ``files`` defaults to the local
    root on disk.
    """
    config = config or load_config()
    forwarder = ProxyForwarder(config)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        await forwarder.aclose()

    # No docs/openapi routes: every path belongs to the local root or upstream.
    app = FastAPI(lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = config
    app.state.files = files if files is not None else DiskFiles(config.local_root)
    app.state.forwarder = forwarder

    setup_tracing(app, config)
    setup_metrics(app, config)
    app.add_route(CATCH_ALL_PATH, route_request, include_in_schema=False)
    return app

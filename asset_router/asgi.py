"""Hosted-mode entry point, e.g. ``uvicorn asset_router.asgi:app``."""

from asset_router.server import create_app

app = create_app()

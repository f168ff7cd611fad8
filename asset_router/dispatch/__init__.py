from fastapi import Request
from fastapi.responses import Response

from asset_router.config import RouterConfig
from asset_router.routing import Decision, LocalMiss, Proxy, ServeLocal

from .proxy import ProxyForwarder
from .static import not_found, send_local_file


async def dispatch(
    request: Request,
    decision: Decision,
    config: RouterConfig,
    forwarder: ProxyForwarder,
) -> Response:
    """Carry out a routing decision. Every outcome becomes an HTTP response."""
    if isinstance(decision, ServeLocal):
        return send_local_file(config, decision.file_path, request.url.path)
    if isinstance(decision, LocalMiss):
        return not_found(decision.request_path, "no matching file under local root")
    if isinstance(decision, Proxy):
        return await forwarder.forward(request)
    raise TypeError(f"Unknown routing decision: {decision!r}")


__all__ = ["dispatch", "ProxyForwarder", "send_local_file", "not_found"]

import logging

from fastapi import Request
from fastapi.responses import Response
from opentelemetry import trace

from asset_router.dispatch import dispatch
from asset_router.routing import Proxy, ServeLocal, accepts_html, decide
from asset_router.utils.traced_requests import traced_request

tracer = trace.get_tracer(__name__)
logger = logging.getLogger("uvicorn.error")

# Registered without a method list: every method is routed.
CATCH_ALL_PATH = "/{path:path}"


async def route_request(request: Request) -> Response:
    """Decide local or remote for every request, then dispatch it."""
    state = request.app.state
    request_path = request.url.path
    is_html = accepts_html(request.headers.get("accept"))

    with traced_request(
        tracer,
        operation="route_request",
        path=request_path,
        start_message=f"Attempting to serve {request.method} {request_path}",
    ) as span:
        classification, decision = decide(request_path, is_html, state.files)
        span.set_attribute("router.decision", classification.kind.value)
        if classification.rule:
            span.set_attribute("router.rule", classification.rule)

        if isinstance(decision, ServeLocal):
            span.set_attribute("router.file", decision.file_path)
            logger.info(f"    Serving {request_path} locally at {decision.file_path}")
        elif isinstance(decision, Proxy):
            logger.info(f"    Proxying {request_path} to {state.config.proxy_target}")

        return await dispatch(request, decision, state.config, state.forwarder)

import logging
from typing import AsyncIterator, List, Optional, Tuple

import httpx
from fastapi import Request
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from opentelemetry import trace
from starlette.background import BackgroundTask

from asset_router.config import RouterConfig

tracer = trace.get_tracer(__name__)
logger = logging.getLogger("uvicorn.error")

PROXY_ERROR_BODY = "Proxy Error"

# Hop-by-hop headers that should NOT be forwarded (RFC 7230, section 6.1)
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "trailers",
    "transfer-encoding",
    "upgrade",
}

# Recomputed for the outbound request
REPLACED_REQUEST_HEADERS = {"host", "content-length"}


def get_target_url(request: Request, proxy_target: str) -> str:
    """Proxy target plus the original, still percent-encoded, path and query."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = request.url.path

    query_string = str(request.url.query)
    if query_string:
        path = f"{path}?{query_string}"

    return f"{proxy_target.rstrip('/')}{path}"


def prepare_headers(
    request: Request, proxy_host: str, forwarded: bool = False
) -> List[Tuple[str, str]]:
    """
    Copy the client's headers for the upstream request.

    Hop-by-hop headers are dropped and ``Host`` is replaced by the target's
    host so name-based virtual hosting upstream resolves correctly.
    """
    headers = [
        (name, value)
        for name, value in request.headers.items()
        if name.lower() not in HOP_BY_HOP_HEADERS
        and name.lower() not in REPLACED_REQUEST_HEADERS
    ]
    headers.append(("host", proxy_host))

    if forwarded:
        client_ip = request.client.host if request.client else "unknown"
        existing_xff = request.headers.get("x-forwarded-for", "")
        headers = [(n, v) for n, v in headers if n.lower() != "x-forwarded-for"]
        headers.append(
            ("x-forwarded-for", f"{existing_xff}, {client_ip}".strip(", "))
        )
        headers.append(("x-forwarded-host", request.headers.get("host", "")))
        headers.append(("x-forwarded-proto", request.url.scheme))

    return headers


def proxy_error() -> Response:
    return PlainTextResponse(PROXY_ERROR_BODY, status_code=500)


async def relay_body(upstream: httpx.Response, target_url: str) -> AsyncIterator[bytes]:
    """Pass the upstream body through byte for byte (no decompression)."""
    try:
        async for chunk in upstream.aiter_raw():
            yield chunk
    except httpx.HTTPError as e:
        # Status and headers are already sent; the transport aborts the reply.
        logger.error(f"Upstream body from {target_url} aborted: {e}")
        raise


class ProxyForwarder:
    """
    Forwards requests unchanged to the configured proxy target.

    Owns one ``httpx.AsyncClient`` for the lifetime of the application;
    call ``aclose`` on shutdown.
    """

    def __init__(self, config: RouterConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.client = client if client is not None else httpx.AsyncClient(
            verify=config.proxy_verify_tls,
            timeout=httpx.Timeout(config.proxy_timeout),
            follow_redirects=False,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def forward(self, request: Request) -> Response:
        target_url = get_target_url(request, self.config.proxy_target)

        with tracer.start_as_current_span("proxy_request") as span:
            span.set_attribute("proxy.target_url", target_url)
            span.set_attribute("proxy.method", request.method)

            headers = prepare_headers(
                request, self.config.proxy_host, forwarded=self.config.proxy_xfwd
            )
            body = await request.body()

            try:
                # Built directly: client.build_request would merge httpx's own
                # User-Agent/Accept-Encoding defaults into the forwarded headers.
                upstream_request = httpx.Request(
                    method=request.method,
                    url=target_url,
                    headers=headers,
                    content=body,
                    extensions={"timeout": self.client.timeout.as_dict()},
                )
                upstream = await self.client.send(upstream_request, stream=True)
            except httpx.HTTPError as e:
                logger.error(f"Proxy error for {target_url}: {e!r}")
                span.set_attribute("proxy.error", type(e).__name__)
                return proxy_error()

            span.set_attribute("proxy.status_code", upstream.status_code)

            response = StreamingResponse(
                relay_body(upstream, target_url),
                status_code=upstream.status_code,
                background=BackgroundTask(upstream.aclose),
            )
            for name, value in upstream.headers.multi_items():
                if name.lower() in HOP_BY_HOP_HEADERS:
                    continue
                response.headers.append(name, value)
            return response

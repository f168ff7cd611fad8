"""
Process configuration for the router.

Environment variables are read once into ``asset_router.vars``; ``load_config``
bundles them into an immutable ``RouterConfig`` that is handed to the routing
and dispatch layers explicitly. Request handling never looks at the
environment.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import asset_router.vars as router_vars

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PRODUCTION = "production"
DEVELOPMENT = "development"


class StartupConfigError(RuntimeError):
    """Raised when the process cannot start with the given configuration."""


@dataclass(frozen=True)
class RouterConfig:
    port: int
    proxy_target: str
    environment: str
    local_root: Path
    tls_key_file: Path
    tls_cert_file: Path
    proxy_verify_tls: bool = False
    proxy_timeout: float = 300.0
    proxy_xfwd: bool = False
    service_name: str = "asset-router"
    metrics_enabled: bool = False
    otlp_endpoint: Optional[str] = None
    otlp_headers: str = ""

    @property
    def proxy_host(self) -> str:
        """Host (and port, if any) of the proxy target, used for the Host header."""
        return urlparse(self.proxy_target).netloc

    @property
    def standalone(self) -> bool:
        """Anything but production runs as a local TLS server."""
        return self.environment != PRODUCTION


def default_local_root(environment: str) -> Path:
    if environment == DEVELOPMENT:
        return PROJECT_ROOT.parent / "jitsi-meet"
    return PROJECT_ROOT / "jitsi-meet"


def load_config() -> RouterConfig:
    environment = router_vars.NODE_ENV
    local_root = (
        Path(router_vars.LOCAL_ROOT)
        if router_vars.LOCAL_ROOT
        else default_local_root(environment)
    )
    certs_dir = (
        Path(router_vars.CERTS_DIR) if router_vars.CERTS_DIR else PROJECT_ROOT / "certs"
    )
    key_file = (
        Path(router_vars.TLS_KEY_FILE)
        if router_vars.TLS_KEY_FILE
        else certs_dir / "localhost-key.pem"
    )
    cert_file = (
        Path(router_vars.TLS_CERT_FILE)
        if router_vars.TLS_CERT_FILE
        else certs_dir / "localhost.pem"
    )

    return RouterConfig(
        port=router_vars.PORT,
        proxy_target=router_vars.PROXY_TARGET,
        environment=environment,
        local_root=local_root.resolve(),
        tls_key_file=key_file,
        tls_cert_file=cert_file,
        proxy_verify_tls=router_vars.PROXY_VERIFY_TLS,
        proxy_timeout=router_vars.PROXY_TIMEOUT,
        proxy_xfwd=router_vars.PROXY_XFWD,
        service_name=router_vars.SERVICE_NAME,
        metrics_enabled=router_vars.METRICS_ENABLED,
        otlp_endpoint=router_vars.OTLP_ENDPOINT,
        otlp_headers=router_vars.OTLP_HEADERS,
    )


def load_tls_files(config: RouterConfig) -> tuple[str, str]:
    """
    Return the (keyfile, certfile) pair for the standalone TLS listener.

    Raises:
        StartupConfigError: if either file is missing. Standalone mode never
        falls back to plain HTTP.
    """
    missing = [
        str(p) for p in (config.tls_key_file, config.tls_cert_file) if not p.is_file()
    ]
    if missing:
        raise StartupConfigError(
            f"TLS key/certificate not found: {', '.join(missing)}"
        )
    return str(config.tls_key_file), str(config.tls_cert_file)

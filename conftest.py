# Ensure tests import modules from this repository first, so
# `import asset_router.*` resolves to the checkout rather than an install.
import os
import sys

import pytest

SERVICE_ROOT = os.path.dirname(__file__)

if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

from asset_router.config import RouterConfig  # noqa: E402

TEST_PROXY_TARGET = "https://meet.example.com"


@pytest.fixture
def local_root(tmp_path):
    """A small jitsi-meet style checkout with build output and assets."""
    root = tmp_path / "jitsi-meet"
    files = {
        "build/index.html": "<html>local index</html>",
        "build/external_api.min.js": "/* external api */",
        "build/app.bundle.min.js": "/* app bundle */",
        "build/app.bundle.min.js.map": '{"version": 3}',
        "css/all.css": "body { color: red; }",
        "images/logo.svg": "<svg></svg>",
        "libs/lib-iframe-api.min.js": "/* iframe api min */",
        "libs/rnnoise.wasm": "\0asm",
        "static/close.html": "<html>close</html>",
    }
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def router_config(local_root, tmp_path):
    return RouterConfig(
        port=4001,
        proxy_target=TEST_PROXY_TARGET,
        environment="",
        local_root=local_root,
        tls_key_file=tmp_path / "certs" / "localhost-key.pem",
        tls_cert_file=tmp_path / "certs" / "localhost.pem",
    )

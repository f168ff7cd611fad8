from dataclasses import replace
from unittest.mock import patch

import pytest

from asset_router import main as main_module


@pytest.fixture
def run_server():
    with patch("asset_router.main.uvicorn.run") as run:
        yield run


@pytest.fixture
def certs(router_config):
    router_config.tls_key_file.parent.mkdir(parents=True, exist_ok=True)
    router_config.tls_key_file.write_text("key")
    router_config.tls_cert_file.write_text("cert")
    return router_config


def test_standalone_serves_tls(monkeypatch, certs, run_server, caplog):
    monkeypatch.setattr(main_module, "load_config", lambda: certs)

    with caplog.at_level("INFO", logger="uvicorn.error"):
        assert main_module.main() == 0

    kwargs = run_server.call_args[1]
    assert kwargs["port"] == 4001
    assert kwargs["ssl_keyfile"] == str(certs.tls_key_file)
    assert kwargs["ssl_certfile"] == str(certs.tls_cert_file)
    assert kwargs["log_config"] is None
    assert "Server running on https://localhost:4001" in caplog.text


def test_standalone_without_certs_fails(monkeypatch, router_config, run_server, caplog):
    monkeypatch.setattr(main_module, "load_config", lambda: router_config)

    assert main_module.main() == 1

    run_server.assert_not_called()
    assert "Cannot start HTTPS server" in caplog.text


def test_production_serves_plain_http(monkeypatch, router_config, run_server, caplog):
    config = replace(router_config, environment="production")
    monkeypatch.setattr(main_module, "load_config", lambda: config)

    with caplog.at_level("INFO", logger="uvicorn.error"):
        assert main_module.main() == 0

    kwargs = run_server.call_args[1]
    assert "ssl_keyfile" not in kwargs
    assert "ssl_certfile" not in kwargs
    assert "Server running on http://localhost:4001" in caplog.text

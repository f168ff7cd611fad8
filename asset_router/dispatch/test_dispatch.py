import pytest
from unittest.mock import AsyncMock, Mock

from fastapi import Request

from asset_router.dispatch import dispatch
from asset_router.routing import LocalMiss, Proxy, ServeLocal


@pytest.fixture
def mock_request():
    request = Mock(spec=Request)
    request.url.path = "/css/all.css"
    return request


@pytest.fixture
def forwarder():
    forwarder = Mock()
    forwarder.forward = AsyncMock(return_value="proxied")
    return forwarder


@pytest.mark.asyncio
async def test_serve_local(mock_request, router_config, forwarder):
    response = await dispatch(
        mock_request, ServeLocal("css/all.css"), router_config, forwarder
    )

    assert response.status_code == 200
    forwarder.forward.assert_not_called()


@pytest.mark.asyncio
async def test_local_miss_is_404(mock_request, router_config, forwarder):
    response = await dispatch(
        mock_request, LocalMiss("/libs/nothing.js"), router_config, forwarder
    )

    assert response.status_code == 404
    assert response.body == b"Not Found"
    forwarder.forward.assert_not_called()


@pytest.mark.asyncio
async def test_proxy(mock_request, router_config, forwarder):
    result = await dispatch(mock_request, Proxy(), router_config, forwarder)

    assert result == "proxied"
    forwarder.forward.assert_awaited_once_with(mock_request)


@pytest.mark.asyncio
async def test_unknown_decision(mock_request, router_config, forwarder):
    with pytest.raises(TypeError):
        await dispatch(mock_request, object(), router_config, forwarder)

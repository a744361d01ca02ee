import httpx
import pytest

from core.config import RewriteSettings, UpstreamSettings
from core.exceptions import InvalidInput, TransportFailure, UpstreamFailure
from services.proxy_service import ProxyService
from services.upstream import UpstreamClient


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_fetch_returns_buffered_response():
    async with _client(lambda request: httpx.Response(200, text="<html></html>")) as client:
        result = await UpstreamClient(client, UpstreamSettings()).fetch("https://example.com/")

    assert result.ok
    assert result.status_code == 200
    assert result.status_text == "OK"
    assert result.text == "<html></html>"


async def test_fetch_uses_configured_user_agent():
    seen = []

    def handler(request):
        seen.append(request.headers["user-agent"])
        return httpx.Response(204)

    settings = UpstreamSettings(user_agent="TestBrowser/1.0")
    async with _client(handler) as client:
        await UpstreamClient(client, settings).fetch("https://example.com/")

    assert seen == ["TestBrowser/1.0"]


async def test_fetch_raises_upstream_failure():
    async with _client(lambda request: httpx.Response(410)) as client:
        with pytest.raises(UpstreamFailure) as exc_info:
            await UpstreamClient(client, UpstreamSettings()).fetch("https://example.com/")

    assert exc_info.value.status_code == 410
    assert exc_info.value.status_text == "Gone"


async def test_fetch_wraps_transport_errors():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with _client(handler) as client:
        with pytest.raises(TransportFailure) as exc_info:
            await UpstreamClient(client, UpstreamSettings()).fetch("https://example.com/")

    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


async def test_proxy_service_validates_before_fetching():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200)

    async with _client(handler) as client:
        service = ProxyService(UpstreamClient(client, UpstreamSettings()), RewriteSettings())
        with pytest.raises(InvalidInput):
            await service.fetch_page("ftp://example.com")
        with pytest.raises(InvalidInput):
            await service.fetch_page(None)

    assert calls == []


async def test_proxy_service_honours_custom_marker():
    body = '<a href="/search?q=x">x</a>'
    settings = RewriteSettings(marker="search.example", base_url="https://search.example")

    async with _client(lambda request: httpx.Response(200, text=body)) as client:
        service = ProxyService(UpstreamClient(client, UpstreamSettings()), settings)
        page = await service.fetch_page("https://search.example/search?q=x")
        google = await service.fetch_page("https://www.google.com/search?q=x")

    assert page.rewritten
    assert page.body == '<a href="/proxy?url=https%3A%2F%2Fsearch.example%2Fsearch%3Fq%3Dx">x</a>'
    assert not google.rewritten
    assert google.body == body

import asyncio
import json

import httpx
import pytest

from crawlers import SearchBackendError, SerperClient
from data_transformers.serper import SerperNewsTransformer


def _client(handler) -> SerperClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SerperClient(api_key="test-key", client=http)


def _search(client: SerperClient, *args, **kwargs):
    async def run():
        try:
            return await client.search_news(*args, **kwargs)
        finally:
            await client.aclose()

    return asyncio.run(run())


def test_search_news_builds_request_and_maps_results():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers["X-API-KEY"]
        seen["payload"] = json.loads(request.content)
        return httpx.Response(200, json={
            "news": [
                {
                    "title": "Baht hits two-year high",
                    "snippet": "The Thai baht strengthened...",
                    "link": "https://example.com/baht",
                    "date": "2 hours ago",
                    "source": "Bangkok Post",
                },
                {"title": "Rice exports rise", "link": "https://example.com/rice"},
                {"snippet": "no title or link"},
            ]
        })

    items = _search(_client(handler), "Thai baht", region="th", time_filter="qdr:w")

    assert seen["url"] == SerperClient.API_URL
    assert seen["key"] == "test-key"
    assert seen["payload"] == {"q": "Thai baht", "num": 10, "gl": "th", "hl": "en", "tbs": "qdr:w"}

    assert len(items) == 2
    assert items[0].title == "Baht hits two-year high"
    assert items[0].description == "The Thai baht strengthened..."
    assert items[0].published_at == "2 hours ago"
    assert items[0].region == "th"
    assert items[1].source == "Unknown"
    assert items[1].published_at


def test_time_filter_is_optional():
    client = SerperClient(api_key="k", client=httpx.AsyncClient())
    assert "tbs" not in client.build_payload("gold", "us")
    asyncio.run(client.aclose())


def test_http_error_status():
    client = _client(lambda request: httpx.Response(429, json={"message": "rate limit"}))

    with pytest.raises(SearchBackendError) as exc:
        _search(client, "gold", region="us")

    assert exc.value.region == "us"
    assert "429" in str(exc.value)


def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SearchBackendError):
        _search(_client(handler), "gold", region="de")


def test_invalid_json():
    client = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(SearchBackendError):
        _search(client, "gold")


def test_api_key_required():
    with pytest.raises(ValueError):
        SerperClient(api_key="")


def test_transformer_handles_missing_news():
    transformer = SerperNewsTransformer()

    assert transformer.transform({}, region="us") == []
    assert transformer.transform({"news": "bad"}, region="us") == []

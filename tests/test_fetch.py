import logging

import httpx
import pytest

from evidencemesh.fetch import NetworkError, fetch_with_retry

URL = "https://api.example.org/search"


def scripted(*responses):
    """Transport that replays responses in order and counts calls."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        item = responses[min(len(calls), len(responses)) - 1]
        if isinstance(item, Exception):
            raise item
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler)), calls


@pytest.mark.asyncio
async def test_success_returns_response(sleeps):
    client, calls = scripted(httpx.Response(200, json={"ok": True}))
    async with client:
        response = await fetch_with_retry(client, URL, 3, params={"term": "creatine"})

    assert response.json() == {"ok": True}
    assert calls[0].url.params["term"] == "creatine"
    assert sleeps == []


@pytest.mark.asyncio
async def test_429_waits_retry_after_plus_one(sleeps):
    client, calls = scripted(
        httpx.Response(429, headers={"retry-after": "2"}),
        httpx.Response(200, json={"ok": True}),
    )
    async with client:
        response = await fetch_with_retry(client, URL, 3)

    assert response.status_code == 200
    assert len(calls) == 2
    assert sleeps == [3]
    assert sum(sleeps) >= 3


@pytest.mark.asyncio
async def test_429_without_retry_after_uses_default(sleeps):
    client, _ = scripted(httpx.Response(429), httpx.Response(200))
    async with client:
        await fetch_with_retry(client, URL, 3)

    assert sleeps == [4]


@pytest.mark.asyncio
async def test_429_exhausts_retries(sleeps):
    client, calls = scripted(httpx.Response(429, headers={"retry-after": "1"}))
    async with client:
        with pytest.raises(NetworkError) as exc_info:
            await fetch_with_retry(client, URL, 3)

    assert exc_info.value.status_code == 429
    assert exc_info.value.url == URL
    assert len(calls) == 4
    assert sleeps == [2, 2, 2]


@pytest.mark.asyncio
async def test_429_with_no_retry_budget_fails_immediately(sleeps):
    client, calls = scripted(httpx.Response(429))
    async with client:
        with pytest.raises(NetworkError):
            await fetch_with_retry(client, URL, 0)

    assert len(calls) == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_other_errors_are_not_retried(sleeps):
    client, calls = scripted(httpx.Response(500), httpx.Response(200))
    async with client:
        with pytest.raises(NetworkError) as exc_info:
            await fetch_with_retry(client, URL, 3)

    assert exc_info.value.status_code == 500
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)
    assert len(calls) == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_transport_errors_become_network_errors(sleeps):
    client, _ = scripted(httpx.ConnectError("connection refused"))
    async with client:
        with pytest.raises(NetworkError) as exc_info:
            await fetch_with_retry(client, URL, 3)

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_exhausted_quota_throttles_before_returning(sleeps):
    client, calls = scripted(
        httpx.Response(200, headers={"x-ratelimit-remaining": "0", "retry-after": "5"}, json={})
    )
    async with client:
        response = await fetch_with_retry(client, URL, 3)

    assert response.status_code == 200
    assert len(calls) == 1
    assert sleeps == [6]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [
        {"x-ratelimit-remaining": "0"},
        {"x-ratelimit-remaining": "4", "retry-after": "5"},
        {"retry-after": "5"},
        {"x-ratelimit-remaining": "zero", "retry-after": "5"},
    ],
)
async def test_no_throttle_unless_quota_exhausted_with_retry_after(sleeps, headers):
    client, _ = scripted(httpx.Response(200, headers=headers, json={}))
    async with client:
        await fetch_with_retry(client, URL, 3)

    assert sleeps == []


@pytest.mark.asyncio
async def test_retries_are_logged(sleeps, caplog):
    client, _ = scripted(httpx.Response(429, headers={"retry-after": "0"}), httpx.Response(200))
    with caplog.at_level(logging.WARNING, logger="evidencemesh.fetch"):
        async with client:
            await fetch_with_retry(client, URL, 3)

    assert any("429" in record.getMessage() for record in caplog.records)

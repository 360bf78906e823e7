"""
tests/test_http_client.py

Pytest unit tests for the httpx-backed fetch client, using
`httpx.MockTransport` so no network access is needed.
"""

from __future__ import annotations

import asyncio
import random

import httpx
import pytest

from harvester.scraping.errors import FetchFailure
from harvester.scraping.http_client import USER_AGENTS, FetchResponse, HttpxFetchClient
from tests.fakes import make_settings


def _run(handler, *, url: str, params: dict[str, str] | None = None) -> FetchResponse:
    async def scenario() -> FetchResponse:
        transport = httpx.MockTransport(handler)
        async with HttpxFetchClient.build(make_settings(), transport=transport) as client:
            return await client.get(url, params=params)

    return asyncio.run(scenario())


class TestFetchResponse:
    @pytest.mark.parametrize(
        ("status_code", "expected"),
        [(200, True), (204, True), (301, False), (404, False), (503, False)],
    )
    def test_is_success(self, status_code: int, expected: bool) -> None:
        response = FetchResponse(status_code=status_code, text="", url="https://x.test")
        assert response.is_success is expected


class TestHttpxFetchClient:
    def test_returns_body_and_sends_query_params(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text='{"result": {}}')

        response = _run(handler, url="https://search.test/sr", params={"mid": "42", "pi": "1"})

        assert response.status_code == 200
        assert response.text == '{"result": {}}'
        assert seen[0].url.params["mid"] == "42"
        assert seen[0].url.params["pi"] == "1"
        assert seen[0].headers["User-Agent"] in USER_AGENTS
        assert seen[0].headers["Accept"] == "application/json"

    def test_error_status_is_returned_not_raised(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="Page index cannot be higher than 208")

        response = _run(handler, url="https://search.test/sr")

        assert response.status_code == 404
        assert not response.is_success
        assert "Page index" in response.text

    def test_transport_error_becomes_fetch_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchFailure) as exc_info:
            _run(handler, url="https://search.test/sr")

        assert exc_info.value.url == "https://search.test/sr"
        assert exc_info.value.status_code is None

    def test_user_agent_is_drawn_from_pool(self) -> None:
        pool = ("agent-a", "agent-b")
        client = HttpxFetchClient(
            client=httpx.AsyncClient(),
            user_agents=pool,
            rng=random.Random(3),
        )
        picks = {client.pick_user_agent() for _ in range(50)}
        assert picks == set(pool)
        asyncio.run(client.aclose())

    def test_empty_user_agent_pool_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            HttpxFetchClient(client=httpx.AsyncClient(), user_agents=())

"""
Asynchronous HTTP fetch client with rotated browser identities.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import httpx

from harvester.scraping.config.models import HarvestSettings
from harvester.scraping.errors import FetchFailure
from harvester.scraping.logging_utils import log_event

logger = logging.getLogger(__name__)

USER_AGENTS: tuple[str, ...] = (
    # Windows 10 - Chrome
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36",
    # Windows 11 - Chrome
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:109.0) Gecko/20100101 "
    "Chrome/124.0.0.0 Safari/537.36",
    # Windows 10 - Firefox
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0",
    # Windows 11 - Firefox
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:124.0) Gecko/20100101 Firefox/124.0",
    # Windows 10 - Edge
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36 Edg/124.0.2478.67",
    # macOS - Safari
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Safari/605.1.15",
)


@dataclass(frozen=True)
class FetchResponse:
    status_code: int
    text: str
    url: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class FetchClient(Protocol):
    """
    Minimal GET contract the crawler and enricher depend on.
    """

    async def get(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> FetchResponse:
        ...


class HttpxFetchClient:
    """
    Wraps one pooled `httpx.AsyncClient` for the lifetime of a harvest run.

    Non-success statuses are returned as values; only transport errors raise.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        user_agents: tuple[str, ...] = USER_AGENTS,
        rng: random.Random | None = None,
    ) -> None:
        if not user_agents:
            raise ValueError("At least one user agent is required.")
        self._client = client
        self._user_agents = user_agents
        self._rng = rng or random.Random()

    @classmethod
    def build(
        cls,
        settings: HarvestSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpxFetchClient":
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.timeout_seconds),
            limits=httpx.Limits(
                max_connections=settings.max_connections,
                max_keepalive_connections=settings.max_connections,
                keepalive_expiry=60.0,
            ),
            headers={"Accept": "application/json"},
            follow_redirects=True,
            transport=transport,
        )
        return cls(client=client, rng=random.Random(settings.jitter_seed))

    async def __aenter__(self) -> "HttpxFetchClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def pick_user_agent(self) -> str:
        return self._rng.choice(self._user_agents)

    async def get(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> FetchResponse:
        headers = {"User-Agent": self.pick_user_agent()}
        try:
            response = await self._client.get(
                url,
                params=dict(params) if params else None,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            log_event(
                logger,
                logging.WARNING,
                "http_transport_failed",
                url=url,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise FetchFailure(f"Request to {url} failed: {exc}", url=url) from exc

        return FetchResponse(
            status_code=response.status_code,
            text=response.text,
            url=str(response.url),
        )

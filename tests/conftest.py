"""
tests/conftest.py

Purpose:
    Shared fixtures: a test Config and an UpstreamGateway whose httpx client
    is backed by httpx.MockTransport, so no test touches the network.
"""

from __future__ import annotations

import httpx
import pytest

from config import Config
from gateway.upstream import UpstreamGateway


class Upstream:
    """Records requests and answers them with a per-host handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.rates: dict | None = None
        self.rates_status = 200
        self.odds: list | None = []
        self.odds_status = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if "frankfurter" in request.url.host:
            if self.rates_status != 200:
                return httpx.Response(self.rates_status, json={"message": "not found"})
            return httpx.Response(200, json=self.rates)
        if self.odds_status != 200:
            return httpx.Response(self.odds_status, json={"message": "error"})
        return httpx.Response(200, json=self.odds)


def make_event(home: str, away: str, bookmakers: list[dict] | None = None) -> dict:
    if bookmakers is None:
        bookmakers = [
            {
                "key": "betway",
                "title": "Betway",
                "markets": [
                    {
                        "key": "h2h",
                        "outcomes": [
                            {"name": home, "price": 2.1},
                            {"name": away, "price": 3.4},
                            {"name": "Draw", "price": 3.0},
                        ],
                    }
                ],
            },
            {
                "key": "unibet",
                "title": "Unibet",
                "markets": [
                    {
                        "key": "h2h",
                        "outcomes": [
                            {"name": home, "price": 9.9},
                            {"name": away, "price": 9.9},
                            {"name": "Draw", "price": 9.9},
                        ],
                    }
                ],
            },
        ]
    return {
        "id": f"{home}-{away}",
        "sport_key": "soccer_epl",
        "commence_time": "2024-05-11T14:00:00Z",
        "home_team": home,
        "away_team": away,
        "bookmakers": bookmakers,
    }


@pytest.fixture
def config() -> Config:
    return Config(odds_api_key="test-key", odds_footer="Promo footer")


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def make_gateway(upstream):
    def _make(cfg: Config) -> UpstreamGateway:
        client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        return UpstreamGateway(cfg, client=client)

    return _make


@pytest.fixture
def gateway(config, make_gateway) -> UpstreamGateway:
    return make_gateway(config)

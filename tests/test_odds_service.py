"""
tests/test_odds_service.py

Purpose:
    League resolution (including the PSL → EPL fallback), the five-match
    cap, first-bookmaker extraction and the distinct failure kinds.
"""

from __future__ import annotations

from decimal import Decimal

import httpx
import pytest

from config import Config
from gateway.upstream import UpstreamGateway
from models.odds import FETCH_ERROR, NO_DATA, UNCONFIGURED
from services.odds_service import MAX_MATCHES, OddsService
from tests.conftest import make_event


@pytest.mark.asyncio
async def test_never_returns_more_than_five_matches(config, gateway, upstream):
    upstream.odds = [make_event(f"Home {i}", f"Away {i}") for i in range(12)]
    service = OddsService(gateway, config)

    result = await service.get_odds_for_league("EPL")

    assert result.success
    assert len(result.matches) == MAX_MATCHES
    assert [m.home_team for m in result.matches] == [f"Home {i}" for i in range(5)]


@pytest.mark.asyncio
async def test_takes_first_bookmaker_outcomes_verbatim(config, gateway, upstream):
    upstream.odds = [make_event("Arsenal", "Chelsea")]
    service = OddsService(gateway, config)

    result = await service.get_odds_for_league("epl")

    match = result.matches[0]
    assert match.bookmaker == "Betway"
    assert match.commence_time == "2024-05-11T14:00:00Z"
    assert [(o.name, o.price) for o in match.outcomes] == [
        ("Arsenal", Decimal("2.1")),
        ("Chelsea", Decimal("3.4")),
        ("Draw", Decimal("3.0")),
    ]


@pytest.mark.asyncio
async def test_event_without_bookmakers_keeps_match_with_no_outcomes(config, gateway, upstream):
    upstream.odds = [make_event("Celtic", "Rangers", bookmakers=[])]
    service = OddsService(gateway, config)

    result = await service.get_odds_for_league("UCL")

    assert result.matches[0].outcomes == ()
    assert result.sport_key == "soccer_uefa_champs_league"


@pytest.mark.asyncio
async def test_empty_feed_is_no_data_not_fetch_error(config, gateway, upstream):
    upstream.odds = []
    service = OddsService(gateway, config)

    result = await service.get_odds_for_league("PSL")

    assert not result.success
    assert result.kind == NO_DATA
    assert result.error == "No upcoming PSL matches found"


@pytest.mark.asyncio
async def test_missing_key_is_unconfigured_and_makes_no_request(make_gateway, upstream):
    config = Config(odds_api_key="")
    service = OddsService(make_gateway(config), config)

    result = await service.get_odds_for_league("EPL")

    assert result.to_dict() == {"success": False, "league": "EPL", "error": "Unconfigured"}
    assert result.kind == UNCONFIGURED
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_upstream_failure_is_fetch_error(config, gateway, upstream):
    upstream.odds_status = 500
    service = OddsService(gateway, config)

    result = await service.get_odds_for_league("EPL")

    assert result.kind == FETCH_ERROR
    assert result.error == "Request failed with status code 500"


@pytest.mark.asyncio
async def test_psl_uses_south_african_feed_by_default(config, gateway, upstream):
    upstream.odds = [make_event("Orlando Pirates", "Kaizer Chiefs")]
    service = OddsService(gateway, config)

    result = await service.get_odds_for_league("PSL")

    assert upstream.requests[0].url.path == "/v4/sports/soccer_south_africa_premier_division/odds"
    assert result.league == "PSL"
    assert result.substituted_from is None


@pytest.mark.asyncio
async def test_psl_fallback_queries_epl_but_keeps_psl_label(make_gateway, upstream):
    config = Config(odds_api_key="k", psl_fallback_to_epl=True)
    upstream.odds = [make_event("Arsenal", "Chelsea")]
    service = OddsService(make_gateway(config), config)

    result = await service.get_odds_for_league("PSL")

    assert upstream.requests[0].url.path == "/v4/sports/soccer_epl/odds"
    assert result.league == "PSL"
    assert result.sport_key == "soccer_epl"
    assert result.substituted_from == "EPL"
    assert result.to_dict()["substitutedFrom"] == "EPL"


@pytest.mark.asyncio
async def test_null_feed_is_no_data(config):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"null"))
    gateway = UpstreamGateway(config, client=httpx.AsyncClient(transport=transport))
    service = OddsService(gateway, config)

    result = await service.get_odds_for_league("EPL")

    assert not result.success
    assert result.kind == NO_DATA
    assert result.error == "No upcoming EPL matches found"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "events",
    [
        ["junk"],
        [make_event("Arsenal", "Chelsea"), 42],
        [make_event("Arsenal", "Chelsea", bookmakers=[{"title": "Betway", "markets": [{"outcomes": ["x"]}]}])],
    ],
)
async def test_malformed_events_fail_instead_of_raising(config, gateway, upstream, events):
    upstream.odds = events
    service = OddsService(gateway, config)

    result = await service.get_odds_for_league("EPL")

    assert not result.success
    assert result.kind == FETCH_ERROR
    assert result.error == "Unexpected odds payload"

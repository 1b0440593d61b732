"""
services/odds_service.py
-------------------------
Business logic for league odds.
Resolves a league token to a provider sport key, fetches the events and
keeps the first five, priced by the first bookmaker only.
"""

from decimal import InvalidOperation

from config import Config
from gateway.errors import Unconfigured, UpstreamError
from gateway.upstream import UpstreamGateway
from models.currency import to_decimal
from models.odds import NO_DATA, UNCONFIGURED, Match, OddsResult, Outcome
from utils.logger import get_logger

logger = get_logger(__name__)

MAX_MATCHES = 5
UNEXPECTED_ODDS = "Unexpected odds payload"


def _first_bookmaker_outcomes(event: dict) -> tuple[tuple[Outcome, ...], str | None]:
    """Outcomes of the first market of the first bookmaker, verbatim."""
    bookmakers = event.get("bookmakers") or []
    if not bookmakers:
        return (), None
    bookmaker = bookmakers[0]
    markets = bookmaker.get("markets") or []
    if not markets:
        return (), bookmaker.get("title")

    outcomes = []
    for raw in markets[0].get("outcomes") or []:
        try:
            price = to_decimal(raw.get("price"))
        except InvalidOperation:
            logger.debug(f"Skipping unpriced outcome {raw!r}")
            continue
        outcomes.append(Outcome(name=str(raw.get("name", "")), price=price))
    return tuple(outcomes), bookmaker.get("title")


def _to_match(event: dict) -> Match:
    outcomes, bookmaker = _first_bookmaker_outcomes(event)
    return Match(
        home_team=event.get("home_team", ""),
        away_team=event.get("away_team", ""),
        commence_time=event.get("commence_time", ""),
        outcomes=outcomes,
        bookmaker=bookmaker,
    )


class OddsService:
    """Fetches and normalizes odds for the supported leagues (PSL, EPL, UCL)."""

    def __init__(self, gateway: UpstreamGateway, config: Config):
        self.gateway = gateway
        self.config = config

    def resolve(self, league: str) -> str | None:
        """League token → provider sport key, or None for an unknown league."""
        return self.config.league_sport_keys.get(league.upper())

    async def get_odds_for_league(self, league: str) -> OddsResult:
        """
        Get up to five upcoming matches for ``league``.

        Returns:
            OddsResult labelled with the requested league. ``kind`` tells
            an unconfigured key, a fetch failure and an empty feed apart.
        """
        league = league.upper()
        sport_key = self.resolve(league)
        if sport_key is None:
            return OddsResult.failed(league, f"Unsupported league: {league}")

        substituted_from = self.config.league_substitutions.get(league)
        if substituted_from:
            logger.info(f"{league} odds served from {substituted_from} feed ({sport_key})")

        try:
            events = await self.gateway.fetch_odds(sport_key)
        except Unconfigured as e:
            return OddsResult.failed(league, e.message, kind=UNCONFIGURED)
        except UpstreamError as e:
            logger.warning(f"Odds for {league} failed: {e.message}")
            return OddsResult.failed(league, e.message)

        if not events:
            return OddsResult.failed(league, f"No upcoming {league} matches found", kind=NO_DATA)

        try:
            matches = tuple(_to_match(event) for event in events[:MAX_MATCHES])
        except (AttributeError, TypeError, IndexError) as e:
            logger.warning(f"Odds for {league}: unexpected event payload: {e!r}")
            return OddsResult.failed(league, UNEXPECTED_ODDS)
        return OddsResult.ok(league, sport_key, matches, substituted_from=substituted_from)

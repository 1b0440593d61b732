"""
models/odds.py
--------------
Domain models for football odds returned by the odds provider.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

# Reasons an odds lookup can fail.
FETCH_ERROR = "fetch_error"
NO_DATA = "no_data"
UNCONFIGURED = "unconfigured"


@dataclass(frozen=True)
class Outcome:
    """One priced outcome, e.g. ``Kaizer Chiefs @ 2.10``."""
    name: str
    price: Decimal

    def to_dict(self) -> dict:
        return {"name": self.name, "price": float(self.price)}


@dataclass(frozen=True)
class Match:
    """
    An upcoming fixture with the first bookmaker's prices.

    Attributes:
        home_team / away_team: Team names as the provider spells them.
        commence_time: ISO-8601 kick-off time.
        outcomes: Outcomes in provider order (no cross-bookmaker selection).
        bookmaker: Title of the bookmaker the prices came from, if any.
    """
    home_team: str
    away_team: str
    commence_time: str
    outcomes: tuple[Outcome, ...] = ()
    bookmaker: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "homeTeam": self.home_team,
            "awayTeam": self.away_team,
            "commenceTime": self.commence_time,
            "bookmaker": self.bookmaker,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


@dataclass(frozen=True)
class OddsResult:
    """
    Odds for one league as requested by the user.

    ``league`` is always the token the user asked for. When the league is
    served with another league's fixtures, ``substituted_from`` names the
    league whose data is shown.
    """
    success: bool
    league: str
    sport_key: Optional[str] = None
    matches: tuple[Match, ...] = ()
    substituted_from: Optional[str] = None
    error: Optional[str] = None
    kind: Optional[str] = None

    @classmethod
    def ok(
        cls,
        league: str,
        sport_key: str,
        matches: tuple[Match, ...],
        substituted_from: Optional[str] = None,
    ) -> "OddsResult":
        return cls(
            success=True,
            league=league,
            sport_key=sport_key,
            matches=tuple(matches),
            substituted_from=substituted_from,
        )

    @classmethod
    def failed(cls, league: str, error: str, kind: str = FETCH_ERROR) -> "OddsResult":
        return cls(success=False, league=league, error=error, kind=kind)

    @property
    def no_data(self) -> bool:
        return self.kind == NO_DATA

    def to_dict(self) -> dict:
        if not self.success:
            return {"success": False, "league": self.league, "error": self.error}
        data = {
            "success": True,
            "league": self.league,
            "sportKey": self.sport_key,
            "matches": [m.to_dict() for m in self.matches],
        }
        if self.substituted_from:
            data["substitutedFrom"] = self.substituted_from
        return data

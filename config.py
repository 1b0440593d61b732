"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file into a single immutable Config object.

The Config is built once in main.py and handed to every component
that needs it; nothing reads the environment while serving requests.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# ── Leagues ───────────────────────────────────────────────
LEAGUES: tuple[str, ...] = ("PSL", "EPL", "UCL")

EPL_SPORT_KEY = "soccer_epl"
UCL_SPORT_KEY = "soccer_uefa_champs_league"
PSL_SPORT_KEY = "soccer_south_africa_premier_division"

# ── Currency ──────────────────────────────────────────────
WATCH_LIST: tuple[str, ...] = ("USD", "EUR", "GBP", "AUD", "BWP", "NAD", "ZMW")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    """
    Process-wide settings, read-only after startup.

    Attributes:
        odds_api_key: The Odds API key. Empty means odds are unconfigured.
        telegram_bot_token: Bot token. Empty disables the Telegram channel.
        host / port: Where the HTTP server listens.
        frankfurter_url: Latest-rates endpoint of the currency provider.
        odds_api_url: Base URL of The Odds API (v4).
        odds_regions / odds_markets: Query parameters sent with odds requests.
        psl_sport_key: Provider key used for PSL when no fallback is active.
        psl_fallback_to_epl: Serve EPL fixtures for PSL requests.
        default_base: Base currency for RATES when none is given.
        odds_footer: Promotional line appended to odds replies.
        log_level: Root logging level.
    """
    odds_api_key: str = ""
    telegram_bot_token: str = ""
    host: str = "0.0.0.0"
    port: int = 3000
    frankfurter_url: str = "https://api.frankfurter.app/latest"
    odds_api_url: str = "https://api.the-odds-api.com/v4"
    odds_regions: str = "uk,us,eu"
    odds_markets: str = "h2h"
    psl_sport_key: str = PSL_SPORT_KEY
    psl_fallback_to_epl: bool = False
    default_base: str = "ZAR"
    odds_footer: str = "🎰 Odds by zar-bot. Bet responsibly, 18+ only."
    log_level: str = "INFO"

    @property
    def odds_configured(self) -> bool:
        return bool(self.odds_api_key)

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_bot_token)

    @property
    def league_sport_keys(self) -> dict[str, str]:
        """League token → provider sport key."""
        keys = {
            "PSL": EPL_SPORT_KEY if self.psl_fallback_to_epl else self.psl_sport_key,
            "EPL": EPL_SPORT_KEY,
            "UCL": UCL_SPORT_KEY,
        }
        return keys

    @property
    def league_substitutions(self) -> dict[str, str]:
        """Leagues that are served with another league's fixtures."""
        if self.psl_fallback_to_epl:
            return {"PSL": "EPL"}
        return {}


def load_config(env_file: str | None = None) -> Config:
    """
    Build a Config from the environment (and an optional .env file).

    Args:
        env_file: Path to a dotenv file. Defaults to ``.env`` lookup.

    Returns:
        A frozen Config instance.
    """
    load_dotenv(env_file)

    return Config(
        odds_api_key=os.getenv("ODDS_API_KEY", ""),
        telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        frankfurter_url=os.getenv("FRANKFURTER_URL", "https://api.frankfurter.app/latest"),
        odds_api_url=os.getenv("ODDS_API_URL", "https://api.the-odds-api.com/v4"),
        odds_markets=os.getenv("ODDS_MARKETS", "h2h"),
        psl_sport_key=os.getenv("PSL_SPORT_KEY", PSL_SPORT_KEY),
        psl_fallback_to_epl=_env_bool("PSL_FALLBACK_TO_EPL"),
        default_base=os.getenv("DEFAULT_BASE", "ZAR").strip().upper(),
        odds_footer=os.getenv("ODDS_FOOTER", Config.odds_footer),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

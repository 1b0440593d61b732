"""
gateway/upstream.py
-------------------
Thin async client for the two upstream REST providers:

    - Frankfurter (https://www.frankfurter.app) for currency rates.
    - The Odds API (v4) for football odds.

Every call is a single GET; failures are converted to FetchError and are
never retried.
"""

from typing import Any, Optional
from urllib.parse import urlparse

import httpx

from config import Config
from gateway.errors import FetchError, Unconfigured
from utils.logger import get_logger

logger = get_logger(__name__)


def _safe_url(url: str) -> str:
    """Strip query params (may contain API keys) for safe logging."""
    parsed = urlparse(str(url))
    return f"{parsed.scheme}://{parsed.netloc}{parsed.path}"


class UpstreamGateway:
    """
    Access point for currency and odds providers.

    Args:
        config: Process configuration (URLs, API key, odds query params).
        client: Optional pre-built ``httpx.AsyncClient``. Tests pass one
            backed by ``httpx.MockTransport``.
    """

    def __init__(self, config: Config, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._client = client or httpx.AsyncClient()

    async def _get_json(self, url: str, params: dict[str, str]) -> Any:
        logger.info(f"GET {_safe_url(url)}")
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"Upstream {_safe_url(url)} answered {status}")
            raise FetchError(f"Request failed with status code {status}") from e
        except httpx.HTTPError as e:
            logger.warning(f"Upstream {_safe_url(url)} unreachable: {e}")
            raise FetchError(str(e) or type(e).__name__) from e
        except ValueError as e:
            logger.warning(f"Upstream {_safe_url(url)} returned invalid JSON")
            raise FetchError("Invalid JSON response from upstream") from e

    # ── Currency ──────────────────────────────────────────

    async def fetch_rates(self, base: str, symbols: Optional[str] = None) -> dict:
        """
        Fetch the latest rates relative to ``base``.

        Returns:
            The raw Frankfurter payload: ``{"amount", "base", "date", "rates"}``.
        """
        params = {"from": base}
        if symbols:
            params["to"] = symbols
        payload = await self._get_json(self.config.frankfurter_url, params)
        if not isinstance(payload, dict):
            raise FetchError("Unexpected rates payload")
        return payload

    async def fetch_pair_rate(self, source: str, target: str) -> dict:
        """Fetch the single ``source`` → ``target`` rate."""
        return await self.fetch_rates(source, symbols=target)

    # ── Odds ──────────────────────────────────────────────

    async def fetch_odds(self, sport_key: str) -> list:
        """
        Fetch upcoming events with odds for a provider sport key.

        Raises:
            Unconfigured: No odds API key is set; no request is made.
            FetchError: Network/HTTP failure.
        """
        if not self.config.odds_configured:
            logger.error("Cannot fetch odds: no ODDS_API_KEY configured")
            raise Unconfigured()

        url = f"{self.config.odds_api_url}/sports/{sport_key}/odds"
        params = {
            "apiKey": self.config.odds_api_key,
            "regions": self.config.odds_regions,
            "markets": self.config.odds_markets,
            "oddsFormat": "decimal",
        }
        payload = await self._get_json(url, params)
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise FetchError("Unexpected odds payload")
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()

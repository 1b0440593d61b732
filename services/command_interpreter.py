"""
services/command_interpreter.py
--------------------------------
Turns raw channel input into an Intent and dispatches it to the
Currency or Odds service.

One decision table serves all three channels:

    1. RATES [BASE]            → RatesIntent
    2. PSL / EPL / UCL         → OddsIntent
    3. FROM TO [AMOUNT]        → ConvertIntent
    4. HELP / START            → HelpIntent
    5. anything else           → UnknownIntent

Rates and league checks run before the two-token conversion check, so
"RATES USD" or "EPL odds" are never read as currency pairs. Parsing is
pure: the same input always yields the same Intent.
"""

import re
from decimal import Decimal
from typing import Any, Optional, Union

from config import LEAGUES
from models.currency import ConversionResult, RatesSnapshot
from models.intent import (
    ConvertIntent,
    HelpIntent,
    Intent,
    OddsIntent,
    RatesIntent,
    UnknownIntent,
)
from models.odds import OddsResult
from services.currency_service import CurrencyService
from services.odds_service import OddsService
from utils.logger import get_logger

logger = get_logger(__name__)

Result = Union[ConversionResult, RatesSnapshot, OddsResult]

# Leading numeric prefix, the way a lenient number parser reads "100abc" or "1e3".
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(value: Any) -> Decimal:
    """
    Read an amount leniently.

    Missing, non-numeric, non-finite and zero amounts all become 1; this
    never raises.
    """
    if isinstance(value, bool) or value is None:
        return Decimal(1)
    if isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        match = _NUMBER_PREFIX.match(str(value).strip())
        if not match:
            return Decimal(1)
        amount = Decimal(match.group(0))
    if not amount.is_finite() or amount == 0:
        return Decimal(1)
    return amount


def _command_token(token: str) -> str:
    """``/rates@zar_bot`` → ``RATES``."""
    if token.startswith("/"):
        token = token[1:].split("@", 1)[0]
    return token


class CommandInterpreter:
    """
    Shared command table for the JSON API, WhatsApp and Telegram channels.

    Args:
        currency_service: Handles Convert and Rates intents.
        odds_service: Handles Odds intents.
        default_base: Base currency used by RATES without an argument.
    """

    def __init__(
        self,
        currency_service: CurrencyService,
        odds_service: OddsService,
        default_base: str = "ZAR",
    ):
        self.currency_service = currency_service
        self.odds_service = odds_service
        self.default_base = default_base

    # ── Parsing ───────────────────────────────────────────

    def parse_text(self, text: Optional[str]) -> Intent:
        """Parse a free-text message (WhatsApp body or Telegram text)."""
        raw = (text or "").strip()
        tokens = raw.upper().split()
        if not tokens:
            return UnknownIntent(raw)

        tokens[0] = _command_token(tokens[0])
        first = tokens[0]

        if first == "RATES":
            base = tokens[1] if len(tokens) > 1 else self.default_base
            return RatesIntent(base=base)

        for token in tokens:
            league = _command_token(token)
            if league in LEAGUES:
                return OddsIntent(league=league)

        if first == "CONVERT":
            tokens = tokens[1:]

        if len(tokens) in (2, 3):
            amount = parse_amount(tokens[2]) if len(tokens) == 3 else Decimal(1)
            return ConvertIntent(source=tokens[0], target=tokens[1], amount=amount)

        if len(tokens) == 1 and first in ("HELP", "START"):
            return HelpIntent()

        return UnknownIntent(raw)

    def parse_request(self, payload: Any) -> Intent:
        """
        Parse a JSON API body: ``{from, to, amount, command, sport}``.
        """
        if not isinstance(payload, dict):
            return UnknownIntent(str(payload or ""))

        command = str(payload.get("command") or "").strip()
        sport = str(payload.get("sport") or "").strip().upper()
        source = str(payload.get("from") or "").strip().upper()
        target = str(payload.get("to") or "").strip().upper()

        if command.lower() == "rates":
            return RatesIntent(base=source or self.default_base)

        for candidate in (sport, command.upper()):
            if candidate in LEAGUES:
                return OddsIntent(league=candidate)

        if source and target:
            return ConvertIntent(source=source, target=target, amount=parse_amount(payload.get("amount")))

        if command.lower() == "help":
            return HelpIntent()

        return UnknownIntent(command)

    # ── Dispatch ──────────────────────────────────────────

    async def dispatch(self, intent: Intent) -> Optional[Result]:
        """
        Run the service call behind ``intent``.

        Returns:
            The service result, or None for Help/Unknown intents which
            need no upstream data.
        """
        if isinstance(intent, ConvertIntent):
            return await self.currency_service.convert(intent.source, intent.target, intent.amount)
        if isinstance(intent, RatesIntent):
            return await self.currency_service.get_rates(intent.base)
        if isinstance(intent, OddsIntent):
            return await self.odds_service.get_odds_for_league(intent.league)
        if isinstance(intent, UnknownIntent):
            logger.info(f"Unrecognized input: {intent.raw_text!r}")
        return None

    async def handle_text(self, text: Optional[str]) -> tuple[Intent, Optional[Result]]:
        intent = self.parse_text(text)
        return intent, await self.dispatch(intent)

    async def handle_request(self, payload: Any) -> tuple[Intent, Optional[Result]]:
        intent = self.parse_request(payload)
        return intent, await self.dispatch(intent)

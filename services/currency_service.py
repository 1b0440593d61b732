"""
services/currency_service.py
-----------------------------
Business logic for currency conversion and rate snapshots.
Talks to the UpstreamGateway and returns immutable result models.
"""

from decimal import Decimal, DecimalException, InvalidOperation

from config import WATCH_LIST
from gateway.errors import UpstreamError
from gateway.upstream import UpstreamGateway
from models.currency import ConversionResult, RatesSnapshot, round_rate, to_decimal
from utils.logger import get_logger

logger = get_logger(__name__)

CONVERT_HINT = "Try: USD ZAR or EUR GBP"
AMOUNT_TOO_LARGE = "Amount too large to convert"
UNEXPECTED_RATES = "Unexpected rates payload"


class CurrencyService:
    """
    Converts amounts and builds watch-list rate snapshots.

    Errors from the gateway never escape: they become ``success=False``
    results carrying the upstream message unchanged.
    """

    def __init__(self, gateway: UpstreamGateway, default_base: str = "ZAR"):
        self.gateway = gateway
        self.default_base = default_base

    async def convert(self, source: str, target: str, amount: Decimal = Decimal(1)) -> ConversionResult:
        """
        Convert ``amount`` of ``source`` into ``target``.

        Args:
            source: 3-letter code to convert from, e.g. "USD".
            target: 3-letter code to convert to, e.g. "ZAR".
            amount: Amount of ``source``; defaults to 1.

        Returns:
            ConversionResult with the raw rate and the 2dp result.
        """
        source, target = source.upper(), target.upper()
        try:
            payload = await self.gateway.fetch_pair_rate(source, target)
        except UpstreamError as e:
            logger.warning(f"Conversion {source}->{target} failed: {e.message}")
            return ConversionResult.failed(e.message, hint=CONVERT_HINT)

        provider_rates = payload.get("rates")
        raw_rate = provider_rates.get(target) if isinstance(provider_rates, dict) else None
        try:
            rate = to_decimal(raw_rate) if raw_rate is not None else None
        except InvalidOperation:
            rate = None
        if rate is None or not rate.is_finite():
            logger.warning(f"No {target} rate in payload for base {source}")
            return ConversionResult.failed(f"No rate available for {source} to {target}", hint=CONVERT_HINT)

        try:
            return ConversionResult.ok(
                source=source,
                target=target,
                amount=to_decimal(amount),
                rate=rate,
                date=payload.get("date"),
            )
        except DecimalException as e:
            logger.warning(f"Conversion {source}->{target} out of range for amount {amount}: {e!r}")
            return ConversionResult.failed(AMOUNT_TOO_LARGE, hint=CONVERT_HINT)

    async def get_rates(self, base: str | None = None) -> RatesSnapshot:
        """
        Get the watch-list rates relative to ``base`` (default ZAR).

        Codes the provider does not return for this base are left out.
        """
        base = (base or self.default_base).upper()
        try:
            payload = await self.gateway.fetch_rates(base)
        except UpstreamError as e:
            logger.warning(f"Rates for {base} failed: {e.message}")
            return RatesSnapshot.failed(e.message)

        provider_rates = payload.get("rates") or {}
        if not isinstance(provider_rates, dict):
            logger.warning(f"Rates for {base}: unexpected payload {provider_rates!r}")
            return RatesSnapshot.failed(UNEXPECTED_RATES)

        rates = {}
        for code in WATCH_LIST:
            value = provider_rates.get(code)
            if value is None:
                continue
            try:
                rate = round_rate(to_decimal(value))
            except DecimalException:
                rate = None
            if rate is None or not rate.is_finite():
                logger.warning(f"Rates for {base}: unreadable {code} rate {value!r}")
                return RatesSnapshot.failed(UNEXPECTED_RATES)
            rates[code] = rate

        return RatesSnapshot.ok(base=base, date=payload.get("date"), rates=rates)

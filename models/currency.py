"""
models/currency.py
------------------
Domain models for currency conversions and rate snapshots.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Context, Decimal
from types import MappingProxyType
from typing import Mapping, Optional

_CENT = Decimal("0.01")
_RATE_STEP = Decimal("0.0001")

# Wider than the default 28 digits so large amounts still convert exactly.
# Anything past this raises a DecimalException, which the service reports.
MAX_DIGITS = 60
_WIDE = Context(prec=MAX_DIGITS, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    """Convert a JSON number (or numeric string) to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_result(value: Decimal) -> Decimal:
    """Round a converted amount to exactly 2 decimal places."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP, context=_WIDE)


def round_rate(value: Decimal) -> Decimal:
    """Round a snapshot rate to exactly 4 decimal places."""
    return value.quantize(_RATE_STEP, rounding=ROUND_HALF_UP, context=_WIDE)


def format_amount(value: Decimal) -> str:
    """Render an amount the way a user typed it: ``100`` not ``100.00``."""
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1), context=_WIDE))
    return format(value.normalize(context=_WIDE), "f")


def _json_number(value: Decimal):
    if value == value.to_integral_value():
        return int(value)
    return float(value)


@dataclass(frozen=True)
class ConversionResult:
    """
    Outcome of a single currency conversion.

    Attributes:
        success: False when the provider call failed.
        source / target: 3-letter currency codes (``from`` / ``to`` on the wire).
        amount: Amount of ``source`` being converted.
        rate: Raw, unrounded provider rate.
        result: ``amount * rate`` rounded to 2 decimal places.
        date: Provider's rate date (ISO).
        formatted: Human-readable line, e.g. ``100 USD = 1850.00 ZAR``.
        error / hint: Populated on failure only.
    """
    success: bool
    source: Optional[str] = None
    target: Optional[str] = None
    amount: Optional[Decimal] = None
    rate: Optional[Decimal] = None
    result: Optional[Decimal] = None
    formatted: Optional[str] = None
    date: Optional[str] = None
    error: Optional[str] = None
    hint: Optional[str] = None

    @classmethod
    def ok(cls, source: str, target: str, amount: Decimal, rate: Decimal, date: str) -> "ConversionResult":
        """
        Build a successful conversion.

        Raises:
            decimal.DecimalException: The result needs more than MAX_DIGITS
                digits or leaves the exponent range.
        """
        result = round_result(_WIDE.multiply(rate, amount))
        return cls(
            success=True,
            source=source,
            target=target,
            amount=amount,
            rate=rate,
            result=result,
            formatted=f"{format_amount(amount)} {source} = {result} {target}",
            date=date,
        )

    @classmethod
    def failed(cls, error: str, hint: Optional[str] = None) -> "ConversionResult":
        return cls(success=False, error=error, hint=hint)

    def to_dict(self) -> dict:
        if not self.success:
            data = {"success": False, "error": self.error}
            if self.hint:
                data["hint"] = self.hint
            return data
        return {
            "success": True,
            "from": self.source,
            "to": self.target,
            "amount": _json_number(self.amount),
            "rate": float(self.rate),
            "result": str(self.result),
            "formatted": self.formatted,
            "date": self.date,
        }


@dataclass(frozen=True)
class RatesSnapshot:
    """
    Watch-list rates relative to one base currency.

    ``rates`` only ever holds codes the provider actually returned.
    """
    success: bool
    base: Optional[str] = None
    date: Optional[str] = None
    rates: Mapping[str, Decimal] = field(default_factory=dict)
    error: Optional[str] = None

    def __post_init__(self):
        # Read-only view so formatters cannot mutate a snapshot.
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    @classmethod
    def ok(cls, base: str, date: str, rates: Mapping[str, Decimal]) -> "RatesSnapshot":
        return cls(success=True, base=base, date=date, rates=rates)

    @classmethod
    def failed(cls, error: str) -> "RatesSnapshot":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "base": self.base,
            "date": self.date,
            "rates": {code: float(value) for code, value in self.rates.items()},
        }

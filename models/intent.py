"""
models/intent.py
----------------
Channel-independent representation of what the user asked for.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class ConvertIntent:
    source: str
    target: str
    amount: Decimal = Decimal(1)


@dataclass(frozen=True)
class RatesIntent:
    base: str


@dataclass(frozen=True)
class OddsIntent:
    league: str


@dataclass(frozen=True)
class HelpIntent:
    pass


@dataclass(frozen=True)
class UnknownIntent:
    raw_text: str = ""


Intent = Union[ConvertIntent, RatesIntent, OddsIntent, HelpIntent, UnknownIntent]

"""
services/response_formatter.py
-------------------------------
Renders service results into each channel's native representation:

    - API channel:      JSON-ready dict.
    - WhatsApp channel: plain text wrapped in a TwiML envelope.
    - Telegram channel: plain text.

All functions are pure. They read the result models and never modify them.
"""

from enum import Enum
from typing import Optional
from xml.sax.saxutils import escape

from config import WATCH_LIST
from models.currency import ConversionResult, RatesSnapshot
from models.intent import HelpIntent, Intent, UnknownIntent
from models.odds import OddsResult


class Channel(str, Enum):
    API = "api"
    WHATSAPP = "whatsapp"
    TELEGRAM = "telegram"


USAGE = {
    "convert": '{ "from": "USD", "to": "ZAR", "amount": 100 }',
    "rates": '{ "command": "rates", "from": "ZAR" }',
    "odds": '{ "sport": "PSL" }',
}

COMMANDS = ["convert", "rates", "odds", "help", "whatsapp endpoint", "telegram bot"]


def help_text(default_base: str = "ZAR") -> str:
    return (
        "zar-bot Commands:\n"
        "\n"
        f"RATES - Get {default_base} rates\n"
        "RATES USD - Get USD rates\n"
        "USD ZAR - Convert USD to ZAR\n"
        "USD ZAR 100 - Convert 100 USD to ZAR\n"
        "EUR GBP - Convert EUR to GBP\n"
        "PSL / EPL / UCL - Upcoming match odds\n"
        "HELP - Show this"
    )


def unknown_text(raw_text: str) -> str:
    lead = f"Unknown command: {raw_text}" if raw_text else "Unknown command."
    return f"{lead}\nTry:\n- USD ZAR\n- RATES\n- PSL\n- HELP"


def _number(value) -> str:
    # 0.0540 → "0.054", 2.10 → "2.1"
    return str(float(value))


# ── Text renderers ────────────────────────────────────────

def format_conversion(result: ConversionResult) -> str:
    if not result.success:
        return f"Error: {result.error}"
    return result.formatted


def format_rates(snapshot: RatesSnapshot) -> str:
    """Header with base and date, then one ``CODE: value`` line per watch-list hit."""
    if not snapshot.success:
        return f"Error: {snapshot.error}"

    lines = [f"📊 {snapshot.base} Exchange Rates ({snapshot.date})", ""]
    for code in WATCH_LIST:
        if code in snapshot.rates:
            lines.append(f"{code}: {_number(snapshot.rates[code])}")
    return "\n".join(lines)


def format_odds(result: OddsResult, footer: Optional[str] = None) -> str:
    """
    One block per match, labelled with the league the user asked for.

    Substituted feeds are always announced under the header.
    """
    if not result.success:
        if result.no_data:
            return f"😕 {result.error}. Try again later."
        return f"Error: {result.error}"

    header = f"⚽ {result.league} Odds"
    if result.substituted_from:
        header += (
            f"\n⚠️ No {result.league} feed available, "
            f"showing {result.substituted_from} fixtures instead."
        )

    blocks = []
    for match in result.matches:
        lines = [f"{match.home_team} vs {match.away_team}"]
        lines.extend(f"  {o.name}: {_number(o.price)}" for o in match.outcomes)
        blocks.append("\n".join(lines))

    text = header + "\n\n" + "\n\n".join(blocks)
    if footer:
        text += "\n\n" + footer
    return text


def render_text(
    intent: Intent,
    result,
    footer: Optional[str] = None,
    default_base: str = "ZAR",
) -> str:
    """Plain-text reply shared by the WhatsApp and Telegram channels."""
    if isinstance(result, ConversionResult):
        return format_conversion(result)
    if isinstance(result, RatesSnapshot):
        return format_rates(result)
    if isinstance(result, OddsResult):
        return format_odds(result, footer)
    if isinstance(intent, HelpIntent):
        return help_text(default_base)
    raw = intent.raw_text if isinstance(intent, UnknownIntent) else ""
    return unknown_text(raw)


# ── Channel envelopes ─────────────────────────────────────

def render_twiml(text: str) -> str:
    """Wrap one text message in a TwiML ``<Response>`` envelope."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<Response>\n"
        f"  <Message>{escape(text)}</Message>\n"
        "</Response>"
    )


def render_json(intent: Intent, result) -> dict:
    """
    JSON body for the API channel.

    Service results pass through as-is; Help and Unknown get a usage block.
    """
    if result is not None:
        return result.to_dict()
    if isinstance(intent, HelpIntent):
        return {"success": True, "commands": list(COMMANDS), "usage": dict(USAGE)}
    return {"success": False, "error": "Missing parameters", "usage": dict(USAGE)}


def render(
    channel: Channel,
    intent: Intent,
    result,
    footer: Optional[str] = None,
    default_base: str = "ZAR",
):
    """Dispatch on channel: dict for the API, TwiML for WhatsApp, text for Telegram."""
    if channel is Channel.API:
        return render_json(intent, result)
    text = render_text(intent, result, footer, default_base)
    if channel is Channel.WHATSAPP:
        return render_twiml(text)
    return text

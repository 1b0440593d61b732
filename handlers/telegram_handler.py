"""
handlers/telegram_handler.py
----------------------------
Telegram channel. Commands (/rates, /psl, /convert ...) and plain text
both go through the shared CommandInterpreter.

The interpreter and config are read from ``context.bot_data``, filled in
once when the bot is built in main.py.
"""

from telegram import Update
from telegram.ext import ContextTypes

from models.intent import OddsIntent
from services.response_formatter import Channel, help_text, render
from utils.logger import get_logger

logger = get_logger(__name__)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start - greet the user and show the command list."""
    user = update.effective_user
    config = context.bot_data["config"]
    name = user.first_name if user else "there"
    logger.info(f"User {user.id if user else '?'} started the bot.")

    await update.message.reply_text(
        f"Hi {name}! 👋\n"
        "I convert currencies and fetch football odds.\n\n"
        + help_text(config.default_base)
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help - show all available commands."""
    config = context.bot_data["config"]
    await update.message.reply_text(help_text(config.default_base))


async def handle_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /rates, /psl, /epl, /ucl, /convert and any plain text.

    Odds lookups get a short "fetching" acknowledgement first.
    """
    message = update.message
    if message is None or not message.text:
        return

    interpreter = context.bot_data["interpreter"]
    config = context.bot_data["config"]

    intent = interpreter.parse_text(message.text)
    if isinstance(intent, OddsIntent):
        await message.reply_text(f"⏳ Fetching {intent.league} odds...")

    result = await interpreter.dispatch(intent)
    logger.info(f"Telegram chat {message.chat_id} → {type(intent).__name__}")

    reply = render(
        Channel.TELEGRAM,
        intent,
        result,
        footer=config.odds_footer,
        default_base=config.default_base,
    )
    await message.reply_text(reply)

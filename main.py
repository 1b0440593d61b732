"""
main.py
-------
Entry point for zar-bot.

Responsibilities:
    - Load the configuration once and wire gateway → services → interpreter.
    - Build the FastAPI app serving the JSON API and the WhatsApp webhook.
    - Start the Telegram bot alongside it when a bot token is configured.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from telegram import BotCommand
from telegram.ext import Application, CommandHandler, MessageHandler, filters

from config import Config, load_config
from gateway.upstream import UpstreamGateway
from handlers import api_handler, whatsapp_handler
from handlers.telegram_handler import help_command, handle_text_message, start_command
from services.command_interpreter import CommandInterpreter
from services.currency_service import CurrencyService
from services.odds_service import OddsService
from utils.logger import get_logger, set_level

logger = get_logger(__name__)


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("start", "🚀 Start the bot"),
        BotCommand("help", "📖 Show help"),
        BotCommand("rates", "📊 Exchange rates, e.g. /rates USD"),
        BotCommand("convert", "💱 Convert, e.g. /convert USD ZAR 100"),
        BotCommand("psl", "⚽ PSL odds"),
        BotCommand("epl", "⚽ EPL odds"),
        BotCommand("ucl", "⚽ UCL odds"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


def build_interpreter(config: Config, gateway: UpstreamGateway) -> CommandInterpreter:
    currency_service = CurrencyService(gateway, default_base=config.default_base)
    odds_service = OddsService(gateway, config)
    return CommandInterpreter(currency_service, odds_service, default_base=config.default_base)


def build_bot(config: Config, interpreter: CommandInterpreter) -> Application:
    """Build the Telegram application with all handlers registered."""
    bot = Application.builder().token(config.telegram_bot_token).build()
    bot.bot_data["config"] = config
    bot.bot_data["interpreter"] = interpreter

    bot.add_handler(CommandHandler("start", start_command))
    bot.add_handler(CommandHandler("help", help_command))
    # /rates, /convert, /psl, /epl, /ucl and free text share one parser.
    bot.add_handler(
        CommandHandler(["rates", "convert", "psl", "epl", "ucl"], handle_text_message)
    )
    bot.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_text_message))
    return bot


@asynccontextmanager
async def lifespan(app: FastAPI):
    bot: Optional[Application] = app.state.bot
    if bot is not None:
        logger.info("Starting Telegram bot...")
        await bot.initialize()
        await set_bot_commands(bot)
        await bot.start()
        await bot.updater.start_polling(drop_pending_updates=True, allowed_updates=["message"])
    else:
        logger.info("TELEGRAM_BOT_TOKEN not set, Telegram channel disabled.")

    yield

    if bot is not None:
        await bot.updater.stop()
        await bot.stop()
        await bot.shutdown()
    await app.state.gateway.aclose()
    logger.info("zar-bot stopped.")


def create_app(config: Config, gateway: Optional[UpstreamGateway] = None) -> FastAPI:
    """
    Wire every component from one Config.

    Args:
        config: Process configuration.
        gateway: Optional gateway override (tests inject one with a mock transport).
    """
    gateway = gateway or UpstreamGateway(config)
    interpreter = build_interpreter(config, gateway)

    app = FastAPI(title="zar-bot", lifespan=lifespan)
    app.state.config = config
    app.state.gateway = gateway
    app.state.interpreter = interpreter
    app.state.bot = build_bot(config, interpreter) if config.telegram_enabled else None

    app.include_router(api_handler.router)
    app.include_router(whatsapp_handler.router)

    if not config.odds_configured:
        logger.warning("ODDS_API_KEY not set, odds requests will answer 'Unconfigured'.")
    return app


def main() -> None:
    """Load config and serve until interrupted."""
    config = load_config()
    set_level(config.log_level)

    app = create_app(config)
    logger.info(f"🚀 zar-bot running on port {config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()

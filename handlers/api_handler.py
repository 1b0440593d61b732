"""
handlers/api_handler.py
-----------------------
JSON API channel: the health check and the single ``POST /api`` endpoint.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from services.response_formatter import COMMANDS, Channel, render
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["api"])


@router.get("/")
async def health() -> dict:
    """Static service descriptor."""
    return {"name": "zar-bot", "status": "online", "commands": list(COMMANDS)}


@router.post("/api")
async def api_command(request: Request) -> JSONResponse:
    """
    Handle ``{from, to, amount, command, sport}``.

    Malformed bodies are answered like an unknown command, with the
    usage block, instead of a validation error.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("POST /api with a non-JSON body")
        payload = None

    interpreter = request.app.state.interpreter
    intent, result = await interpreter.handle_request(payload)
    logger.info(f"POST /api → {type(intent).__name__}")
    return JSONResponse(render(Channel.API, intent, result))

"""
handlers/whatsapp_handler.py
----------------------------
WhatsApp channel (Twilio webhook convention).
Receives a form-encoded ``Body``/``From`` pair and answers with TwiML.
"""

from fastapi import APIRouter, Form, Request
from fastapi.responses import Response

from services.response_formatter import Channel, render
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["whatsapp"])


@router.post("/whatsapp")
async def whatsapp_webhook(
    request: Request,
    Body: str = Form(""),
    From: str = Form(""),
) -> Response:
    """Handle one inbound WhatsApp message."""
    state = request.app.state
    intent, result = await state.interpreter.handle_text(Body)
    logger.info(f"WhatsApp message from {From or 'unknown'} → {type(intent).__name__}")

    twiml = render(
        Channel.WHATSAPP,
        intent,
        result,
        footer=state.config.odds_footer,
        default_base=state.config.default_base,
    )
    return Response(content=twiml, media_type="text/xml")

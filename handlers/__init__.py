"""
handlers/ - Presentation Layer
================================
Channel adapters: the JSON API, the WhatsApp webhook and the Telegram bot.
Each handler receives a request, hands it to the CommandInterpreter,
and sends the formatted response back. No business logic lives here.
"""

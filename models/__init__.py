"""
models/ - Domain Layer
=======================
Immutable dataclasses shared by every layer: parsed intents and the
results produced by the currency and odds services.
"""

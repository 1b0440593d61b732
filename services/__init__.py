"""
services/ - Business Logic Layer
=================================
Currency and odds services, the shared command interpreter and the
per-channel response formatter. Handlers call into this layer only.
"""

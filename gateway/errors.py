"""
gateway/errors.py
-----------------
Exceptions raised by the upstream gateway.
Services catch these and turn them into ``success=False`` results.
"""


class UpstreamError(Exception):
    """Base class for every upstream failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchError(UpstreamError):
    """Network or HTTP failure; ``message`` is passed through verbatim."""


class Unconfigured(UpstreamError):
    """A required credential (e.g. the odds API key) is missing."""

    def __init__(self, message: str = "Unconfigured"):
        super().__init__(message)

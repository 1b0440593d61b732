"""
gateway/ - Upstream Access Layer
=================================
Async HTTP access to the two upstream providers (currency rates and odds).
The gateway returns raw provider payloads or raises an UpstreamError.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""

from gateway.errors import FetchError, Unconfigured, UpstreamError
from gateway.upstream import UpstreamGateway

__all__ = ["FetchError", "Unconfigured", "UpstreamError", "UpstreamGateway"]

"""
Transport Module

- Transport: abstract "send JSON, get JSON + status" interface
- TransportResponse: 2xx response container
- AiohttpTransport: aiohttp-backed implementation
"""

from .abstractions import Transport, TransportResponse
from .aiohttp_transport import AiohttpTransport, join_url

__all__ = [
    "Transport",
    "TransportResponse",
    "AiohttpTransport",
    "join_url",
]

"""
Transport Abstractions

The client only needs "send JSON, get JSON, get HTTP status". Everything above
this layer depends on the Transport interface, never on aiohttp directly, so
tests can substitute a scripted transport.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass
class TransportResponse:
    """
    Successful (2xx) response

    Attributes:
        status: HTTP status code
        body: decoded JSON, or text for non-JSON content
    """
    status: int
    body: Any = None


class Transport(ABC):
    """
    Abstract HTTP transport

    Implementations must:
    - return TransportResponse for 2xx answers
    - raise ApiError(status_code, body) for any other HTTP status
    - raise TransportError for failures that carry no HTTP status
    """

    @abstractmethod
    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Mapping[str, str]] = None,
        token: Optional[str] = None
    ) -> TransportResponse:
        """
        Send one request

        Args:
            method: HTTP method
            path: path relative to the transport's base URL
            json: optional JSON body
            params: optional query parameters
            token: optional bearer access token
        """
        pass

    async def close(self) -> None:
        """Release resources; no-op by default"""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

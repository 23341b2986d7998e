import asyncio
import logging
from typing import Any, Mapping, Optional
from urllib.parse import urljoin

import aiohttp

from .abstractions import Transport, TransportResponse
from ..exceptions import ApiError, TransportError

logger = logging.getLogger(__name__)


def join_url(base_url: str, path: str) -> str:
    """Join a relative API path onto a base URL, keeping any base path prefix"""
    if not base_url.endswith("/"):
        base_url += "/"
    return urljoin(base_url, path.lstrip("/"))


class AiohttpTransport(Transport):
    """
    Transport backed by aiohttp.

    The ClientSession is created on first use, so constructing a transport
    (and a Client) needs no running event loop and does no I/O. A session
    passed in by the caller is never closed here.
    """

    def __init__(self, base_url: str, request_timeout: float = 30.0, session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url
        self.request_timeout = request_timeout
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.request_timeout),
                headers={"Accept": "application/json"}
            )
            self._owns_session = True
        return self._session

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Mapping[str, str]] = None,
        token: Optional[str] = None
    ) -> TransportResponse:
        url = join_url(self.base_url, path)
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug(f"[API] {method} {url}")
        session = self._get_session()
        try:
            async with session.request(method, url, json=json, params=params, headers=headers) as response:
                body = await self._read_body(response)
                if 200 <= response.status < 300:
                    return TransportResponse(status=response.status, body=body)
                logger.warning(f"[API] {method} {url} failed: {response.status}")
                raise ApiError(response.status, body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"[ERROR] [API] {method} {url} exception: {e!r}")
            raise TransportError(f"{method} {url} failed: {e!r}") from e

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse) -> Any:
        if response.content_type == "application/json":
            try:
                return await response.json()
            except ValueError:
                # Content-Type says JSON but the body is not
                pass
        return await response.text()

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

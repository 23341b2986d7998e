"""
Token Session

Holds the one live TokenPair of a Client and serializes changes to it.

Concurrent callers never start duplicate logins or refreshes: the first
caller starts an asyncio.Task, later callers await the same task. Waiters go
through asyncio.shield so a cancelled waiter does not cancel the shared task.
"""
import asyncio
import logging
from typing import Optional

from .auth_manager import AuthManager
from .domain.credentials import Credentials, TokenPair

logger = logging.getLogger(__name__)


class TokenSession:
    """Credentials plus the current token pair, with coalesced login/refresh"""

    def __init__(self, credentials: Credentials, auth_manager: AuthManager):
        self.credentials = credentials
        self.auth_manager = auth_manager
        self._tokens: Optional[TokenPair] = None
        self._login_task: Optional[asyncio.Task] = None
        self._refresh_task: Optional[asyncio.Task] = None
        self.login_count = 0
        self.refresh_count = 0

    @property
    def tokens(self) -> Optional[TokenPair]:
        return self._tokens

    @property
    def is_authenticated(self) -> bool:
        return self._tokens is not None

    async def ensure_login(self) -> TokenPair:
        """Return the current pair, logging in first if none is held"""
        if self._tokens is not None:
            return self._tokens

        if self._login_task is None:
            self._login_task = asyncio.ensure_future(self._login())
            self._login_task.add_done_callback(self._clear_login_task)
        return await asyncio.shield(self._login_task)

    async def refresh(self, stale: TokenPair) -> TokenPair:
        """
        Replace `stale` with a fresh pair.

        If the held pair is no longer `stale`, another caller already
        refreshed (or logged in) and the current pair is returned as is.
        """
        if self._tokens is not None and self._tokens != stale:
            logger.debug("[AUTH] Token pair already replaced, reusing it")
            return self._tokens

        if self._refresh_task is None:
            self._refresh_task = asyncio.ensure_future(self._refresh(stale))
            self._refresh_task.add_done_callback(self._clear_refresh_task)
        else:
            logger.debug("[AUTH] Refresh already in flight, waiting for it")
        return await asyncio.shield(self._refresh_task)

    async def _login(self) -> TokenPair:
        tokens = await self.auth_manager.login(self.credentials.address, self.credentials.password)
        self.login_count += 1
        self._tokens = tokens
        return tokens

    async def _refresh(self, stale: TokenPair) -> TokenPair:
        tokens = await self.auth_manager.refresh(stale.access_token, stale.refresh_token)
        self.refresh_count += 1
        self._tokens = tokens
        return tokens

    def _clear_login_task(self, task: asyncio.Task) -> None:
        if self._login_task is task:
            self._login_task = None

    def _clear_refresh_task(self, task: asyncio.Task) -> None:
        if self._refresh_task is task:
            self._refresh_task = None

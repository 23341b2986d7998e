import logging
from typing import Awaitable, Callable, TypeVar

from .exceptions import ApiError
from .session import TokenSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Only an expired access token can be fixed locally before an identical retry
UNAUTHORIZED = 401


class AuthorizedRequestExecutor:
    """
    Runs one authorized API call with a single refresh-and-retry on 401.

    1. Log in if no token is held
    2. Call request_fn(access_token)
    3. On 401: refresh the pair (shared with concurrent callers), retry once
    4. Any other error, or a 401 on the retry, propagates unchanged
    """

    def __init__(self, session: TokenSession):
        self.session = session

    async def execute(self, request_fn: Callable[[str], Awaitable[T]]) -> T:
        tokens = await self.session.ensure_login()
        try:
            return await request_fn(tokens.access_token)
        except ApiError as e:
            if e.status_code != UNAUTHORIZED:
                raise
            logger.info("[AUTH] Access token rejected (401), refreshing and retrying once")

        tokens = await self.session.refresh(tokens)
        return await request_fn(tokens.access_token)

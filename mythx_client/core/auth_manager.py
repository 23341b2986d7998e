import logging
from typing import Any

from .domain.credentials import TokenPair
from .exceptions import ApiError, AuthenticationError
from .transport import Transport
from ..config import API_VERSION
from ..schemas import LoginRequest, RefreshRequest, TokenResponse

logger = logging.getLogger(__name__)


class AuthManager:
    """
    Login and token refresh against the MythX auth endpoints.

    Pure request/response: returns new TokenPairs and never stores them.
    Storing (and deciding when to refresh) belongs to TokenSession.
    """

    def __init__(self, transport: Transport, api_version: str = API_VERSION):
        self.transport = transport
        self.api_version = api_version

    async def login(self, address: str, password: str) -> TokenPair:
        """
        Exchange credentials for a token pair.

        Raises:
            AuthenticationError: the service rejected the credentials
        """
        payload = LoginRequest(ethAddress=address, password=password).model_dump()
        logger.info("[AUTH] Logging in...")
        try:
            response = await self.transport.request("POST", f"{self.api_version}/auth/login", json=payload)
        except ApiError as e:
            logger.error(f"[ERROR] [AUTH] Login rejected ({e.status_code})")
            raise AuthenticationError(
                f"Invalid MythX credentials for ethereum address {address} given.",
                address=address,
                status_code=e.status_code
            ) from e

        tokens = self._parse_tokens(response.body, "login")
        logger.info("[OK] [AUTH] Logged in")
        return tokens

    async def refresh(self, access_token: str, refresh_token: str) -> TokenPair:
        """
        Exchange the current (possibly expired) access token and the refresh
        token for a new pair.

        Raises:
            AuthenticationError: the refresh token is invalid or expired
        """
        payload = RefreshRequest(accessToken=access_token, refreshToken=refresh_token).model_dump()
        logger.info("[AUTH] Refreshing access token...")
        try:
            response = await self.transport.request("POST", f"{self.api_version}/auth/refresh", json=payload)
        except ApiError as e:
            logger.error(f"[ERROR] [AUTH] Token refresh rejected ({e.status_code})")
            raise AuthenticationError(
                "MythX token refresh failed; please log in again.",
                status_code=e.status_code
            ) from e

        tokens = self._parse_tokens(response.body, "token refresh")
        logger.info("[OK] [AUTH] Access token refreshed")
        return tokens

    @staticmethod
    def _parse_tokens(body: Any, context: str) -> TokenPair:
        try:
            parsed = TokenResponse.model_validate(body)
            return TokenPair(access_token=parsed.jwtTokens.access, refresh_token=parsed.jwtTokens.refresh)
        except ValueError as e:  # ValidationError or an empty token
            raise AuthenticationError(f"Malformed token response during {context}") from e

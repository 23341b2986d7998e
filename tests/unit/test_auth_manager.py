"""
Unit tests for AuthManager

Tests login/refresh requests with a scripted transport
"""
import logging

import pytest

from conftest import LOGIN_PATH, REFRESH_PATH, FakeTransport, token_body
from mythx_client.core.auth_manager import AuthManager
from mythx_client.core.domain.credentials import TokenPair
from mythx_client.core.exceptions import ApiError, AuthenticationError, TransportError


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def auth_manager(transport):
    return AuthManager(transport)


class TestLogin:
    """Test credential login"""

    @pytest.mark.asyncio
    async def test_login_success(self, auth_manager, transport):
        transport.add("POST", LOGIN_PATH, token_body("acc", "ref"))

        tokens = await auth_manager.login("0xabc", "secret")

        assert tokens == TokenPair("acc", "ref")
        call = transport.calls_to("POST", LOGIN_PATH)[0]
        assert call.json == {"ethAddress": "0xabc", "password": "secret"}
        assert call.token is None

    @pytest.mark.asyncio
    async def test_login_rejected(self, auth_manager, transport):
        """Test rejection names the address but never the password"""
        transport.add("POST", LOGIN_PATH, ApiError(401, {"error": "Wrong password"}))

        with pytest.raises(AuthenticationError) as exc_info:
            await auth_manager.login("0xabc", "secret")

        assert exc_info.value.address == "0xabc"
        assert exc_info.value.status_code == 401
        assert "0xabc" in str(exc_info.value)
        assert "secret" not in str(exc_info.value)

    @pytest.mark.parametrize("outcome", [token_body("acc", "ref"), ApiError(401)])
    @pytest.mark.asyncio
    async def test_credentials_never_logged(self, auth_manager, transport, outcome, caplog):
        transport.add("POST", LOGIN_PATH, outcome)

        with caplog.at_level(logging.DEBUG, logger="mythx_client"):
            try:
                await auth_manager.login("0xabc", "secret")
            except AuthenticationError:
                pass

        assert caplog.records
        for record in caplog.records:
            assert "0xabc" not in record.getMessage()
            assert "secret" not in record.getMessage()

    @pytest.mark.asyncio
    async def test_login_any_non_2xx_is_auth_error(self, auth_manager, transport):
        transport.add("POST", LOGIN_PATH, ApiError(500))

        with pytest.raises(AuthenticationError):
            await auth_manager.login("0xabc", "secret")

    @pytest.mark.asyncio
    async def test_login_malformed_response(self, auth_manager, transport):
        transport.add("POST", LOGIN_PATH, {"unexpected": True})

        with pytest.raises(AuthenticationError, match="Malformed token response"):
            await auth_manager.login("0xabc", "secret")

    @pytest.mark.asyncio
    async def test_network_error_propagates(self, auth_manager, transport):
        transport.add("POST", LOGIN_PATH, TransportError("connection reset"))

        with pytest.raises(TransportError) as exc_info:
            await auth_manager.login("0xabc", "secret")

        assert not isinstance(exc_info.value, ApiError)

    @pytest.mark.asyncio
    async def test_custom_api_version(self, transport):
        transport.add("POST", "v2/auth/login", token_body("acc", "ref"))

        tokens = await AuthManager(transport, api_version="v2").login("0xabc", "secret")

        assert tokens.access_token == "acc"


class TestRefresh:
    """Test token refresh"""

    @pytest.mark.asyncio
    async def test_refresh_success(self, auth_manager, transport):
        transport.add("POST", REFRESH_PATH, token_body("acc-2", "ref-2"))

        tokens = await auth_manager.refresh("acc-1", "ref-1")

        assert tokens == TokenPair("acc-2", "ref-2")
        call = transport.calls_to("POST", REFRESH_PATH)[0]
        assert call.json == {"accessToken": "acc-1", "refreshToken": "ref-1"}

    @pytest.mark.asyncio
    async def test_refresh_rejected(self, auth_manager, transport):
        transport.add("POST", REFRESH_PATH, ApiError(401, {"error": "refresh token expired"}))

        with pytest.raises(AuthenticationError) as exc_info:
            await auth_manager.refresh("acc-1", "ref-1")

        assert exc_info.value.status_code == 401

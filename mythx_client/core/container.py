"""
Dependency Injection Container

Central place to wire settings, transport, auth manager and client.
Tests override the transport provider instead of patching modules.

Uses dependency-injector library for IoC container
"""

from typing import Optional

from dependency_injector import containers, providers

from .auth_manager import AuthManager
from .client import Client
from .domain.credentials import Credentials
from .transport import AiohttpTransport
from ..config import ClientSettings


class Container(containers.DeclarativeContainer):
    """
    Main DI Container

    - config: address, password and optional api_url
    - settings: ClientSettings read from MYTHX_* environment variables
    - transport: one aiohttp transport per container
    - auth_manager / client: built per call
    """

    # ========== Configuration ==========
    config = providers.Configuration()

    settings = providers.Singleton(
        ClientSettings.from_env
    )

    # ========== Transport ==========
    transport = providers.Singleton(
        AiohttpTransport,
        base_url=config.api_url,
        request_timeout=settings.provided.request_timeout
    )

    # ========== Auth ==========
    credentials = providers.Factory(
        Credentials,
        address=config.address,
        password=config.password
    )

    auth_manager = providers.Factory(
        AuthManager,
        transport=transport,
        api_version=settings.provided.api_version
    )

    # ========== Client ==========
    client = providers.Factory(
        Client,
        credentials=credentials,
        api_url=config.api_url,
        settings=settings,
        transport=transport,
        auth_manager=auth_manager
    )


def create_client(address: str, password: str, api_url: Optional[str] = None, container: Optional[Container] = None) -> Client:
    """Build a Client through the container"""
    container = container or Container()
    settings = container.settings()
    container.config.from_dict({
        "address": address,
        "password": password,
        "api_url": api_url or settings.api_url,
    })
    return container.client()

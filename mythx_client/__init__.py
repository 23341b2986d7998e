"""
mythx_client - async client for the MythX smart contract analysis API

    from mythx_client import Client

    async with Client({"ethAddress": address, "password": password}) as client:
        result = await client.analyze({"data": request_json})
        print(result.uuid, result.issues)
"""

from .config import (
    API_VERSION,
    DEFAULT_API_URL,
    DEFAULT_INITIAL_DELAY,
    ClientSettings
)
from .core.client import Client, api_version, openapi_spec
from .core.container import Container, create_client
from .core.domain import (
    AnalysisQuery,
    AnalysisReport,
    AnalysisResult,
    AnalysisStatus,
    AnalysisSubmission,
    Credentials,
    TokenPair
)
from .core.exceptions import (
    AnalysisFailedError,
    ApiError,
    AuthenticationError,
    ConfigurationError,
    InvalidRequestError,
    MythXError,
    NotFoundError,
    PollTimeoutError,
    RetrievalError,
    TransportError
)
from .core.logger import LogBuffer, setup_logging

__version__ = "0.3.0"

__all__ = [
    # Client
    "Client",
    "api_version",
    "openapi_spec",
    "Container",
    "create_client",
    # Configuration
    "ClientSettings",
    "API_VERSION",
    "DEFAULT_API_URL",
    "DEFAULT_INITIAL_DELAY",
    # Domain
    "Credentials",
    "TokenPair",
    "AnalysisStatus",
    "AnalysisSubmission",
    "AnalysisQuery",
    "AnalysisResult",
    "AnalysisReport",
    # Errors
    "MythXError",
    "ConfigurationError",
    "AuthenticationError",
    "InvalidRequestError",
    "TransportError",
    "ApiError",
    "RetrievalError",
    "NotFoundError",
    "PollTimeoutError",
    "AnalysisFailedError",
    # Logging
    "LogBuffer",
    "setup_logging",
]

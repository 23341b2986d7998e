"""
MythX client exceptions

Every failure surfaced by the client is one of these classes, so callers can
branch on the type and read structured fields (uuid, status_code) instead of
parsing messages.

Hierarchy:
- MythXError
  - ConfigurationError
  - AuthenticationError
  - InvalidRequestError
  - TransportError
    - ApiError
      - RetrievalError
        - NotFoundError
  - PollTimeoutError
  - AnalysisFailedError
"""
from typing import Any, Optional


class MythXError(Exception):
    """Base class for all client errors"""
    pass


class ConfigurationError(MythXError):
    """Raised when construction input or settings are malformed"""
    pass


class AuthenticationError(MythXError):
    """Raised when the service rejects a login or a token refresh"""

    def __init__(self, message: str, address: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.address = address
        self.status_code = status_code


class InvalidRequestError(MythXError):
    """Raised when a caller precondition is violated (nothing is sent)"""
    pass


class TransportError(MythXError):
    """Raised when a request fails below HTTP (connection, timeout)"""
    pass


class ApiError(TransportError):
    """Raised when the service answers with a non-2xx status"""

    def __init__(self, status_code: int, body: Any = None, message: Optional[str] = None):
        super().__init__(message or f"MythX API request failed, HTTP status code: {status_code}")
        self.status_code = status_code
        self.body = body


class RetrievalError(ApiError):
    """Raised when fetching an analysis status or issue report fails"""

    def __init__(self, uuid: str, status_code: int, body: Any = None, message: Optional[str] = None):
        super().__init__(
            status_code,
            body,
            message or f"Failed in retrieving analysis response, HTTP status code: {status_code}. UUID: {uuid}",
        )
        self.uuid = uuid


class NotFoundError(RetrievalError):
    """Raised when the service has no analysis with the given uuid"""

    def __init__(self, uuid: str, body: Any = None):
        super().__init__(uuid, 404, body, f"Analysis with UUID {uuid} not found.")


class PollTimeoutError(MythXError):
    """
    Raised when polling exceeds its deadline without a terminal status.

    The uuid is kept so the caller can resume with get_status/get_issues later.
    """

    def __init__(self, uuid: str, timeout: float):
        super().__init__(f"Analysis {uuid} did not finish within {timeout:g}s")
        self.uuid = uuid
        self.timeout = timeout


class AnalysisFailedError(MythXError):
    """Raised when an analysis reaches the service's error status"""

    def __init__(self, uuid: str, status: str):
        super().__init__(f"Analysis {uuid} ended with status '{status}'")
        self.uuid = uuid
        self.status = status

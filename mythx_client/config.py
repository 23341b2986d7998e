"""
Client configuration

Named defaults live here as module constants; ClientSettings carries them
explicitly into the client, poller and transport so tests can override any
of them without touching globals.
"""
import os
from typing import Any, Optional

from pydantic import BaseModel, ValidationError, field_validator

from .core.exceptions import ConfigurationError

DEFAULT_API_URL = os.getenv("MYTHX_API_URL", "https://api.mythx.io")
API_VERSION = "v1"

# No MythX job has been seen finishing faster than this, so the first status
# poll of a non-cached analysis is delayed by at least this many seconds.
DEFAULT_INITIAL_DELAY = 45.0

# Default deadlines when the caller gives no timeout
QUICK_ANALYSIS_TIMEOUT = 5 * 60.0  # 5 minutes
FULL_ANALYSIS_TIMEOUT = 5 * 60 * 60.0  # 5 hours

DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_MAX_POLL_INTERVAL = 10.0
DEFAULT_POLL_BACKOFF = 1.5
DEFAULT_REQUEST_TIMEOUT = 30.0


class ClientSettings(BaseModel):
    api_url: str = DEFAULT_API_URL
    api_version: str = API_VERSION
    initial_delay_floor: float = DEFAULT_INITIAL_DELAY
    quick_timeout: float = QUICK_ANALYSIS_TIMEOUT
    full_timeout: float = FULL_ANALYSIS_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    max_poll_interval: float = DEFAULT_MAX_POLL_INTERVAL
    poll_backoff: float = DEFAULT_POLL_BACKOFF
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    model_config = {"frozen": True}

    @field_validator("initial_delay_floor")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("quick_timeout", "full_timeout", "poll_interval", "max_poll_interval", "request_timeout")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("poll_backoff")
    @classmethod
    def _backoff_not_shrinking(cls, value: float) -> float:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("api_version")
    @classmethod
    def _strip_version(cls, value: str) -> str:
        value = value.strip("/")
        if not value:
            raise ValueError("must not be empty")
        return value

    @classmethod
    def build(cls, **values: Any) -> "ClientSettings":
        """Create settings, reporting invalid values as ConfigurationError"""
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client settings: {e}") from e

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "ClientSettings":
        """Read MYTHX_* overrides from the environment"""
        env = os.environ if environ is None else environ
        mapping = {
            "MYTHX_API_URL": "api_url",
            "MYTHX_API_VERSION": "api_version",
            "MYTHX_INITIAL_DELAY": "initial_delay_floor",
            "MYTHX_POLL_INTERVAL": "poll_interval",
            "MYTHX_REQUEST_TIMEOUT": "request_timeout",
        }
        values = {field: env[var] for var, field in mapping.items() if env.get(var)}
        return cls.build(**values)

    def default_timeout(self, analysis_mode: Optional[str]) -> float:
        """Deadline used when a submission gives none: quick unless mode is 'full'"""
        return self.full_timeout if analysis_mode == "full" else self.quick_timeout

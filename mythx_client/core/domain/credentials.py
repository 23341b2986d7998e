"""
Credential Domain Models

Value Objects:
- Credentials: login identity (address + password), immutable
- TokenPair: access/refresh JWT pair, replaced wholesale on login and refresh
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    """
    Value Object for login credentials
    The password is excluded from repr so it never reaches logs
    """
    address: str
    password: str = field(repr=False)

    def __post_init__(self):
        if not self.address or not self.password:
            raise ConfigurationError("Please provide an Ethereum address and a password.")

    @classmethod
    def coerce(cls, value: Union["Credentials", Mapping[str, Any], None]) -> "Credentials":
        """
        Accept a Credentials instance or a mapping.

        Mappings may use either `address` or the service's `ethAddress` key.
        """
        if isinstance(value, Credentials):
            return value
        if value is None:
            value = {}
        if not isinstance(value, Mapping):
            raise ConfigurationError("Credentials must be a mapping with an address and a password")
        address = value.get("address") or value.get("ethAddress")
        return cls(address=address or "", password=value.get("password") or "")


@dataclass(frozen=True)
class TokenPair:
    """
    Value Object for the access/refresh token pair

    Frozen: a refresh produces a new pair, it never patches one field.
    """
    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)

    def __post_init__(self):
        if not self.access_token or not self.refresh_token:
            raise ValueError("Token pair requires both an access and a refresh token")

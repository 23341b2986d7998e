"""
Pytest configuration and shared fixtures
"""
import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

# Add package root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mythx_client.config import ClientSettings
from mythx_client.core.client import Client
from mythx_client.core.exceptions import ApiError
from mythx_client.core.transport import Transport, TransportResponse


LOGIN_PATH = "v1/auth/login"
REFRESH_PATH = "v1/auth/refresh"
ANALYSES_PATH = "v1/analyses"


def token_body(access: str, refresh: str) -> dict:
    return {"jwtTokens": {"access": access, "refresh": refresh}}


@dataclass
class RecordedCall:
    method: str
    path: str
    json: Any = None
    params: Optional[dict] = None
    token: Optional[str] = None


class FakeTransport(Transport):
    """
    Scripted in-memory transport.

    Each route holds a queue of outcomes; the last one repeats. An outcome is
    a body (returned with 200), a TransportResponse, an exception (raised) or
    a callable taking the RecordedCall and returning any of those.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], List[Any]] = {}
        self.calls: List[RecordedCall] = []
        self.closed = False

    def add(self, method: str, path: str, *outcomes: Any) -> "FakeTransport":
        self.routes[(method, path)] = list(outcomes)
        return self

    def calls_to(self, method: str, path: str) -> List[RecordedCall]:
        return [c for c in self.calls if c.method == method and c.path == path]

    async def request(self, method, path, *, json=None, params=None, token=None):
        call = RecordedCall(method, path, json, dict(params) if params else None, token)
        self.calls.append(call)
        # Give concurrent callers a chance to interleave
        await asyncio.sleep(0)

        queue = self.routes.get((method, path))
        if not queue:
            raise ApiError(404, {"error": f"no route for {method} {path}"})
        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(outcome) and not isinstance(outcome, type):
            outcome = outcome(call)
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, TransportResponse):
            return outcome
        return TransportResponse(status=200, body=outcome)

    async def close(self):
        self.closed = True


class FakeClock:
    """Manual clock; sleep() advances it instead of waiting"""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


def reject_token(bad_token: str, body: Any) -> Callable[[RecordedCall], Any]:
    """Route outcome answering 401 for `bad_token` and `body` otherwise"""
    def outcome(call: RecordedCall):
        if call.token == bad_token:
            return ApiError(401, {"error": "jwt expired"})
        return body
    return outcome


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Transport with a working login route"""
    transport = FakeTransport()
    transport.add("POST", LOGIN_PATH, token_body("access-1", "refresh-1"))
    transport.add("POST", REFRESH_PATH, token_body("access-2", "refresh-2"))
    return transport


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings()


@pytest.fixture
def credentials() -> dict:
    """Sample login data"""
    return {
        "ethAddress": "0x0000000000000000000000000000000000000001",
        "password": "Test123!@#"
    }


@pytest.fixture
def make_client(fake_transport, clock, settings, credentials):
    """Factory building a Client wired to the fake transport and clock"""
    def factory(**overrides) -> Client:
        kwargs = {
            "settings": settings,
            "transport": fake_transport,
            "clock": clock,
            "sleep": clock.sleep,
        }
        kwargs.update(overrides)
        return Client(credentials, "https://api.mythx.io", **kwargs)
    return factory


@pytest.fixture
def sample_issues() -> list:
    """Issue report as returned by the issues endpoint"""
    return [
        {
            "issues": [
                {
                    "swcID": "SWC-101",
                    "swcTitle": "Integer Overflow and Underflow",
                    "severity": "High",
                    "locations": [{"sourceMap": "444:1:0"}]
                }
            ],
            "sourceType": "solidity-file",
            "sourceFormat": "text",
            "sourceList": ["contracts/Token.sol"],
            "meta": {}
        }
    ]


@pytest.fixture
def sample_request() -> dict:
    """Analysis request data"""
    return {
        "contractName": "Token",
        "bytecode": "0x6080",
        "sources": {"contracts/Token.sol": {"source": "pragma solidity ^0.5.0;"}},
        "analysisMode": "quick"
    }

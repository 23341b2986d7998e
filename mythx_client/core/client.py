import asyncio
import json
import logging
import time
from typing import Any, Awaitable, Callable, Mapping, Optional, Union
from urllib.parse import urlsplit

from .auth_manager import AuthManager
from .domain.analysis import (
    AnalysisQuery,
    AnalysisReport,
    AnalysisResult,
    AnalysisStatus,
    AnalysisSubmission
)
from .domain.credentials import Credentials
from .exceptions import ConfigurationError
from .executor import AuthorizedRequestExecutor
from .poller import AnalysisPoller
from .records import AnalysisRecords
from .session import TokenSession
from .transport import AiohttpTransport, Transport
from ..config import ClientSettings

logger = logging.getLogger(__name__)


def validate_api_url(api_url: str) -> str:
    """Require an absolute http(s) URL with a host"""
    try:
        parts = urlsplit(api_url)
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigurationError(f"{api_url} is not a valid URL") from e
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ConfigurationError(f"{api_url} is not a valid URL")
    return api_url


class Client:
    """
    MythX session orchestrator.

    Holds the login credentials and, once logged in, the access/refresh
    token pair. Every authorized call goes through one executor, so an
    expired access token is refreshed and the call retried once, for
    submissions and polls alike.

    Nothing touches the network until the first operation:

        async with Client({"ethAddress": "0x...", "password": "..."}) as client:
            result = await client.analyze({"data": {...}})
    """

    def __init__(
        self,
        credentials: Union[Credentials, Mapping[str, Any]],
        api_url: Optional[str] = None,
        *,
        settings: Optional[ClientSettings] = None,
        transport: Optional[Transport] = None,
        auth_manager: Optional[AuthManager] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        self.credentials = Credentials.coerce(credentials)
        self.settings = settings or ClientSettings()
        self.api_url = validate_api_url(api_url or self.settings.api_url)

        # A passed-in transport may be shared (container Singleton) and stays open on close()
        self._owns_transport = transport is None
        self.transport = transport or AiohttpTransport(self.api_url, request_timeout=self.settings.request_timeout)
        self.auth_manager = auth_manager or AuthManager(self.transport, api_version=self.settings.api_version)
        self.session = TokenSession(self.credentials, self.auth_manager)
        self.executor = AuthorizedRequestExecutor(self.session)
        self.records = AnalysisRecords(self.transport, self.executor, api_version=self.settings.api_version)
        self.clock = clock
        self.poller = AnalysisPoller(self.records, self.settings, clock=clock, sleep=sleep)

    @property
    def address(self) -> str:
        return self.credentials.address

    async def login(self) -> None:
        """Log in unless a token pair is already held"""
        await self.session.ensure_login()

    async def analyze(self, submission: Union[AnalysisSubmission, Mapping[str, Any], None]) -> AnalysisResult:
        """
        Submit an analysis and wait for its issues.

        A cached result ("Finished" at submission) is fetched directly.
        Otherwise the status is polled, first after at least the initial
        delay floor, until the timeout (given, or the quick/full default).

        Returns:
            AnalysisResult with the issues and the uuid for later lookups
        """
        if not isinstance(submission, AnalysisSubmission):
            submission = AnalysisSubmission.from_options(submission)
        submission.validate()

        await self.login()
        response = await self.records.submit(submission.to_request_body())
        started_at = self.clock()
        logger.info(f"[API] Analysis {response.uuid} submitted, status '{response.status}'")

        if AnalysisStatus.parse(response.status) == AnalysisStatus.FINISHED:
            issues = await self.records.issues(response.uuid)
            if submission.debug:
                logger.info(f"[OK] Analysis {response.uuid} served from cache")
                if int(submission.debug) > 1:
                    logger.info(f"Cached Result:\n{json.dumps(issues, indent=2, default=str)}")
            return AnalysisResult(issues=issues, uuid=response.uuid)

        timeout = submission.timeout
        if timeout is None:
            timeout = self.settings.default_timeout(submission.analysis_mode)

        issues = await self.poller.poll(
            response.uuid,
            timeout=timeout,
            initial_delay=self.poller.effective_initial_delay(submission.initial_delay),
            debug=submission.debug,
            started_at=started_at
        )
        return AnalysisResult(issues=issues, uuid=response.uuid)

    async def analyze_with_status(self, submission: Union[AnalysisSubmission, Mapping[str, Any], None]) -> AnalysisReport:
        """Run analyze() and also fetch the status record, timing the whole run"""
        start = self.clock()
        result = await self.analyze(submission)
        status = await self.get_status(result.uuid)
        return AnalysisReport(elapsed=self.clock() - start, issues=result.issues, status=status)

    async def get_status(self, uuid: str) -> Any:
        return await self.records.status(uuid)

    async def get_issues(self, uuid: str) -> Any:
        return await self.records.issues(uuid)

    async def analyses(self, query: Union[AnalysisQuery, Mapping[str, Any], None]) -> Any:
        """List past analyses; dateFrom is required, dateTo and offset optional"""
        if not isinstance(query, AnalysisQuery):
            query = AnalysisQuery.from_options(query)
        return await self.records.list(query.to_params())

    async def list_analyses(self) -> Any:
        return await self.records.list()

    async def close(self) -> None:
        """Close the transport if this client created it"""
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def __repr__(self) -> str:
        return f"Client(address={self.address}, api_url={self.api_url})"


async def api_version(api_url: Optional[str] = None, *, transport: Optional[Transport] = None) -> Any:
    """Service version information; no login required"""
    return await _public_get("version", api_url, transport)


async def openapi_spec(api_url: Optional[str] = None, *, transport: Optional[Transport] = None) -> Any:
    """Machine-readable API description (YAML text); no login required"""
    return await _public_get("openapi.yaml", api_url, transport)


async def _public_get(endpoint: str, api_url: Optional[str], transport: Optional[Transport]) -> Any:
    settings = ClientSettings()
    path = f"{settings.api_version}/{endpoint}"
    if transport is not None:
        response = await transport.request("GET", path)
        return response.body

    async with AiohttpTransport(validate_api_url(api_url or settings.api_url), request_timeout=settings.request_timeout) as owned:
        response = await owned.request("GET", path)
        return response.body

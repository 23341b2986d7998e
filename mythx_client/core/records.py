import logging
from typing import Any, Dict, Optional

from .exceptions import ApiError, NotFoundError, RetrievalError
from .executor import AuthorizedRequestExecutor
from .transport import Transport
from ..config import API_VERSION
from ..schemas import SubmissionResponse

logger = logging.getLogger(__name__)


class AnalysisRecords:
    """
    Authorized reads and writes of analysis records.

    Shared by the Client and the poller so every analysis endpoint goes
    through the executor and maps errors the same way.
    """

    def __init__(self, transport: Transport, executor: AuthorizedRequestExecutor, api_version: str = API_VERSION):
        self.transport = transport
        self.executor = executor
        self.api_version = api_version

    async def submit(self, body: Dict[str, Any]) -> SubmissionResponse:
        """POST a new analysis, returning its uuid and initial status"""
        async def send(token: str):
            return await self.transport.request("POST", f"{self.api_version}/analyses", json=body, token=token)

        response = await self.executor.execute(send)
        try:
            return SubmissionResponse.model_validate(response.body)
        except ValueError as e:
            raise ApiError(response.status, response.body, "Malformed analysis submission response") from e

    async def status(self, uuid: str) -> Any:
        return await self._fetch(uuid, f"{self.api_version}/analyses/{uuid}")

    async def issues(self, uuid: str) -> Any:
        return await self._fetch(uuid, f"{self.api_version}/analyses/{uuid}/issues")

    async def list(self, params: Optional[Dict[str, str]] = None) -> Any:
        async def send(token: str):
            return await self.transport.request("GET", f"{self.api_version}/analyses", params=params, token=token)

        response = await self.executor.execute(send)
        return response.body

    async def _fetch(self, uuid: str, path: str) -> Any:
        async def send(token: str):
            return await self.transport.request("GET", path, token=token)

        try:
            response = await self.executor.execute(send)
        except ApiError as e:
            if e.status_code == 404:
                logger.warning(f"[API] Analysis {uuid} not found")
                raise NotFoundError(uuid, e.body) from e
            logger.error(f"[ERROR] [API] Retrieving {path} failed ({e.status_code})")
            raise RetrievalError(uuid, e.status_code, e.body) from e
        return response.body

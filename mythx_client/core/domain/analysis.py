"""
Analysis Domain Models

Value Objects:
- AnalysisStatus: job status values reported by the service
- AnalysisSubmission: caller payload for a new analysis
- AnalysisQuery: filters for listing past analyses
- AnalysisResult / AnalysisReport: what analyze() / analyze_with_status() return
"""

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Union

from ..exceptions import InvalidRequestError


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a duration
    return isinstance(value, Real) and not isinstance(value, bool)


class AnalysisStatus(str, Enum):
    """
    Analysis status enum
    Values are the strings the API returns
    """
    QUEUED = "Queued"
    PENDING = "Pending"
    IN_PROGRESS = "In progress"
    FINISHED = "Finished"
    ERROR = "Error"

    def is_terminal(self) -> bool:
        """Check if polling can stop"""
        return self in [AnalysisStatus.FINISHED, AnalysisStatus.ERROR]

    def is_failure(self) -> bool:
        return self == AnalysisStatus.ERROR

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["AnalysisStatus"]:
        """Map a raw status string to the enum, None for values we don't know"""
        if value is None:
            return None
        for status in cls:
            if status.value.lower() == str(value).strip().lower():
                return status
        return None


@dataclass
class AnalysisSubmission:
    """
    Analysis request options

    Attributes:
        data: analysis request JSON (contracts, sources, analysisMode, ...)
        timeout: seconds to wait for a result before giving up (None = default)
        initial_delay: seconds before the first status poll; raised to the floor
        debug: truthy logs poll progress, > 1 also dumps results
        client_tool_name: tool name reported to the service for usage tracking
    """
    data: Optional[Dict[str, Any]] = None
    timeout: Optional[float] = None
    initial_delay: Optional[float] = None
    debug: Union[bool, int] = False
    client_tool_name: Optional[str] = None

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "AnalysisSubmission":
        """Build from a camelCase options mapping (data, timeout, initialDelay, debug, clientToolName)"""
        if options is None:
            return cls()
        return cls(
            data=options.get("data"),
            timeout=options.get("timeout"),
            initial_delay=options.get("initialDelay", options.get("initial_delay")),
            debug=options.get("debug") or False,
            client_tool_name=options.get("clientToolName", options.get("client_tool_name")),
        )

    def validate(self) -> None:
        if self.data is None:
            raise InvalidRequestError('Please provide analysis request JSON in a "data" attribute.')
        if self.timeout is not None:
            if not _is_number(self.timeout):
                raise InvalidRequestError(f"timeout must be a number of seconds, got {self.timeout!r}")
            if self.timeout <= 0:
                raise InvalidRequestError("timeout must be positive")
        if self.initial_delay is not None:
            if not _is_number(self.initial_delay):
                raise InvalidRequestError(f"initialDelay must be a number of seconds, got {self.initial_delay!r}")
            if self.initial_delay < 0:
                raise InvalidRequestError("initialDelay must not be negative")
        if not isinstance(self.debug, int):
            raise InvalidRequestError(f"debug must be a bool or an int, got {self.debug!r}")

    @property
    def analysis_mode(self) -> Optional[str]:
        if isinstance(self.data, Mapping):
            return self.data.get("analysisMode")
        return None

    def to_request_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"data": self.data}
        if self.client_tool_name:
            body["clientToolName"] = self.client_tool_name
        return body


@dataclass(frozen=True)
class AnalysisQuery:
    """Filters for listing past analyses; date_from is required"""
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    offset: Optional[int] = None

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "AnalysisQuery":
        if options is None:
            return cls()
        return cls(
            date_from=options.get("dateFrom", options.get("date_from")),
            date_to=options.get("dateTo", options.get("date_to")),
            offset=options.get("offset"),
        )

    def to_params(self) -> Dict[str, str]:
        if self.date_from is None:
            raise InvalidRequestError("Please provide a dateFrom option.")
        params = {"dateFrom": str(self.date_from)}
        if self.date_to is not None:
            params["dateTo"] = str(self.date_to)
        if self.offset is not None:
            params["offset"] = str(self.offset)
        return params


@dataclass
class AnalysisResult:
    """Issues of a finished analysis plus its uuid for later lookups"""
    issues: Any
    uuid: str


@dataclass
class AnalysisReport:
    """
    Result of analyze_with_status()

    Attributes:
        elapsed: wall-clock seconds spent in submit + wait + status fetch
        issues: issue report, grouped by input container
        status: status record as returned by get_status()
    """
    elapsed: float
    issues: Any
    status: Any

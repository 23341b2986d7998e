"""
Analysis Poller

Turns a submitted, not yet finished analysis into its issue report by polling
the status endpoint until the job is terminal or the deadline passes.

Schedule:
- first poll at started_at + max(initial_delay, floor)
- then poll_interval, growing by poll_backoff up to max_poll_interval
- if the next poll would land at or after the deadline, wait until the
  deadline and raise PollTimeoutError
"""
import asyncio
import json
import logging
import time
from typing import Any, Awaitable, Callable, Optional, Union

from .domain.analysis import AnalysisStatus
from .exceptions import AnalysisFailedError, PollTimeoutError, RetrievalError
from .records import AnalysisRecords
from ..config import ClientSettings
from ..schemas import StatusRecord

logger = logging.getLogger(__name__)


class AnalysisPoller:
    """Bounded, paced status polling for one analysis at a time"""

    def __init__(
        self,
        records: AnalysisRecords,
        settings: Optional[ClientSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        self.records = records
        self.settings = settings or ClientSettings()
        self.clock = clock
        self.sleep = sleep

    def effective_initial_delay(self, requested: Optional[float]) -> float:
        """Callers may ask for a longer first wait, never a shorter one"""
        return max(requested or 0.0, self.settings.initial_delay_floor)

    def next_interval(self, current: Optional[float]) -> float:
        if current is None:
            return self.settings.poll_interval
        return min(current * self.settings.poll_backoff, self.settings.max_poll_interval)

    async def poll(
        self,
        uuid: str,
        timeout: float,
        initial_delay: Optional[float] = None,
        debug: Union[bool, int] = False,
        started_at: Optional[float] = None
    ) -> Any:
        """
        Wait for analysis `uuid` to finish and return its issues.

        Args:
            uuid: analysis handle returned at submission
            timeout: total seconds allowed, counted from started_at
            initial_delay: seconds before the first poll (raised to the floor)
            debug: truthy logs each poll at INFO, > 1 also dumps the issues
            started_at: clock() value of the submission; defaults to now

        Raises:
            PollTimeoutError: no terminal status before the deadline
            AnalysisFailedError: the analysis ended in the error status
            NotFoundError / RetrievalError: a status or issues fetch failed
        """
        log = logger.info if debug else logger.debug
        start = self.clock() if started_at is None else started_at
        deadline = start + timeout
        delay = self.effective_initial_delay(initial_delay) - (self.clock() - start)
        interval = None
        poll_count = 0

        log(f"[POLL] Analysis {uuid}: first status check in {max(delay, 0.0):.1f}s (timeout {timeout:g}s)")

        while True:
            remaining = deadline - self.clock()
            if remaining <= 0 or delay >= remaining:
                if remaining > 0:
                    await self.sleep(remaining)
                logger.warning(f"[POLL] Analysis {uuid} not finished after {timeout:g}s, giving up")
                raise PollTimeoutError(uuid, timeout)
            if delay > 0:
                await self.sleep(delay)

            poll_count += 1
            record = await self.records.status(uuid)
            try:
                raw_status = StatusRecord.model_validate(record).status
            except ValueError as e:
                raise RetrievalError(uuid, 200, record, f"Malformed status record for analysis {uuid}") from e
            status = AnalysisStatus.parse(raw_status)
            log(f"[POLL] Analysis {uuid}: '{raw_status}' (poll #{poll_count}, {self.clock() - start:.1f}s elapsed)")

            if status is not None and status.is_terminal():
                break

            interval = self.next_interval(interval)
            delay = interval

        if status.is_failure():
            logger.error(f"[ERROR] [POLL] Analysis {uuid} failed with status '{raw_status}'")
            raise AnalysisFailedError(uuid, raw_status)

        issues = await self.records.issues(uuid)
        log(f"[OK] [POLL] Analysis {uuid} finished after {self.clock() - start:.1f}s")
        if debug and int(debug) > 1:
            logger.info(f"[POLL] Result:\n{json.dumps(issues, indent=2, default=str)}")
        return issues

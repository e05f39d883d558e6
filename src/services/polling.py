"""Backoff policy and polling state machine for asynchronous transcription jobs.

A job moves submitted -> polling -> completed | error | timeout. The delay
between status checks is a pure function of the attempt number so the loop can
be exercised without a network or a real clock.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

from models.transcript import TranscriptionJobState, TranscriptionJobStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackoffPolicy:
    """Exponential backoff with a capped delay and hard limits."""

    initial_delay: float = 2.0
    factor: float = 1.5
    max_delay: float = 5.0
    max_attempts: int = 120
    timeout_seconds: float = 600.0

    def __post_init__(self):
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("Backoff delays must be non-negative")
        if self.factor < 1.0:
            raise ValueError("Backoff factor must be >= 1.0")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def from_config(cls, config: dict) -> "BackoffPolicy":
        return cls(
            initial_delay=config.get("transcription_poll_initial_delay", 2.0),
            factor=config.get("transcription_poll_factor", 1.5),
            max_delay=config.get("transcription_poll_max_delay", 5.0),
            max_attempts=config.get("transcription_poll_max_attempts", 120),
            timeout_seconds=config.get("transcription_poll_timeout", 600.0),
        )

    def delay_for_attempt(self, attempt: int) -> float:
        """Seconds to wait before status check number ``attempt`` (0-based)."""
        if attempt < 0:
            raise ValueError("attempt must be >= 0")
        # Avoid float overflow for large attempt counts
        if self.initial_delay == 0:
            return 0.0
        delay = self.initial_delay
        for _ in range(attempt):
            delay *= self.factor
            if delay >= self.max_delay:
                return self.max_delay
        return min(delay, self.max_delay)


StatusFetcher = Callable[[str], Awaitable[TranscriptionJobStatus]]


async def poll_transcription(
    fetch_status: StatusFetcher,
    job_id: str,
    policy: BackoffPolicy,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> TranscriptionJobStatus:
    """Poll a transcription job until it completes, fails, or times out.

    Args:
        fetch_status: Coroutine returning the current job status
        job_id: Job handle returned at submission
        policy: Backoff and limit settings
        sleep: Awaitable sleep (injected in tests)
        clock: Monotonic clock in seconds (injected in tests)

    Returns:
        Final TranscriptionJobStatus. ``state`` is COMPLETED, ERROR or TIMEOUT;
        ``attempts`` is the number of status checks made.
    """
    started = clock()
    state = TranscriptionJobState.SUBMITTED
    checks = 0
    logger.info(f"Polling transcription job {job_id} (max {policy.max_attempts} attempts)")

    for attempt in range(policy.max_attempts):
        delay = policy.delay_for_attempt(attempt)
        if clock() - started + delay > policy.timeout_seconds:
            break

        await sleep(delay)
        status = await fetch_status(job_id)
        checks = attempt + 1
        status.attempts = checks

        if status.state != state:
            logger.debug(f"Job {job_id}: {state.value} -> {status.state.value}")
            state = status.state

        if status.state.is_terminal:
            if status.state == TranscriptionJobState.COMPLETED:
                logger.info(f"Job {job_id} completed after {status.attempts} checks")
            else:
                logger.warning(f"Job {job_id} ended in {status.state.value}: {status.error}")
            return status

    elapsed = clock() - started
    logger.warning(f"Job {job_id} timed out after {elapsed:.0f}s")
    return TranscriptionJobStatus(
        job_id=job_id,
        state=TranscriptionJobState.TIMEOUT,
        error=f"Transcription did not finish within {policy.timeout_seconds:.0f}s",
        attempts=checks,
    )

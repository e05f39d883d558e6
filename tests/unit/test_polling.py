"""Unit tests for the transcription backoff policy and polling loop."""

import pytest

from models.transcript import TranscriptionJobState, TranscriptionJobStatus
from services.polling import BackoffPolicy, poll_transcription


class FakeClock:
    """Monotonic clock advanced only by the fake sleep."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def status_sequence(*states, text="done", error=None):
    """Build a fetch_status coroutine that walks through ``states``."""
    remaining = list(states)
    calls = []

    async def fetch(job_id):
        calls.append(job_id)
        state = remaining.pop(0) if len(remaining) > 1 else remaining[0]
        return TranscriptionJobStatus(
            job_id=job_id,
            state=state,
            text=text if state == TranscriptionJobState.COMPLETED else None,
            error=error if state == TranscriptionJobState.ERROR else None,
        )

    fetch.calls = calls
    return fetch


@pytest.mark.unit
class TestBackoffPolicy:
    """Tests for BackoffPolicy.delay_for_attempt()."""

    def test_delays_grow_then_cap(self):
        """Delays grow geometrically and never exceed max_delay."""
        policy = BackoffPolicy(initial_delay=2.0, factor=1.5, max_delay=5.0)

        delays = [policy.delay_for_attempt(n) for n in range(5)]

        assert delays == [2.0, 3.0, 4.5, 5.0, 5.0]

    def test_large_attempt_numbers_stay_capped(self):
        """Very large attempt numbers neither overflow nor exceed the cap."""
        policy = BackoffPolicy(initial_delay=1.0, factor=2.0, max_delay=30.0)

        assert policy.delay_for_attempt(10_000) == 30.0

    def test_negative_attempt_rejected(self):
        with pytest.raises(ValueError):
            BackoffPolicy().delay_for_attempt(-1)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"initial_delay": -1.0},
            {"factor": 0.5},
            {"max_attempts": 0},
        ],
    )
    def test_invalid_policy(self, kwargs):
        with pytest.raises(ValueError):
            BackoffPolicy(**kwargs)

    def test_from_config(self, sample_config):
        """Policy fields come from the TRANSCRIPTION_POLL_* settings."""
        sample_config["transcription_poll_max_attempts"] = 7
        policy = BackoffPolicy.from_config(sample_config)

        assert policy.initial_delay == 2.0
        assert policy.max_attempts == 7
        assert policy.timeout_seconds == 600.0


@pytest.mark.unit
class TestPollTranscription:
    """Tests for the poll_transcription() state machine."""

    @pytest.mark.asyncio
    async def test_completes_after_processing(self):
        """Queued and processing states are polled through to completion."""
        clock = FakeClock()
        fetch = status_sequence(
            TranscriptionJobState.QUEUED,
            TranscriptionJobState.PROCESSING,
            TranscriptionJobState.COMPLETED,
        )

        status = await poll_transcription(
            fetch, "job-1", BackoffPolicy(), sleep=clock.sleep, clock=clock
        )

        assert status.state == TranscriptionJobState.COMPLETED
        assert status.text == "done"
        assert status.attempts == 3
        assert clock.sleeps == [2.0, 3.0, 4.5]

    @pytest.mark.asyncio
    async def test_error_is_terminal(self):
        """An error state stops polling immediately."""
        clock = FakeClock()
        fetch = status_sequence(
            TranscriptionJobState.PROCESSING,
            TranscriptionJobState.ERROR,
            error="audio too short",
        )

        status = await poll_transcription(
            fetch, "job-2", BackoffPolicy(), sleep=clock.sleep, clock=clock
        )

        assert status.state == TranscriptionJobState.ERROR
        assert status.error == "audio too short"
        assert len(fetch.calls) == 2

    @pytest.mark.asyncio
    async def test_stops_at_max_attempts(self):
        """A job that never finishes is checked at most max_attempts times."""
        clock = FakeClock()
        fetch = status_sequence(TranscriptionJobState.PROCESSING)
        policy = BackoffPolicy(max_attempts=4, timeout_seconds=10_000)

        status = await poll_transcription(fetch, "job-3", policy, sleep=clock.sleep, clock=clock)

        assert status.state == TranscriptionJobState.TIMEOUT
        assert status.attempts == 4
        assert len(fetch.calls) == 4

    @pytest.mark.asyncio
    async def test_stops_before_timeout(self):
        """Total waiting never exceeds timeout_seconds."""
        clock = FakeClock()
        fetch = status_sequence(TranscriptionJobState.PROCESSING)
        policy = BackoffPolicy(
            initial_delay=2.0, factor=1.5, max_delay=5.0, max_attempts=1000, timeout_seconds=20
        )

        status = await poll_transcription(fetch, "job-4", policy, sleep=clock.sleep, clock=clock)

        assert status.state == TranscriptionJobState.TIMEOUT
        assert sum(clock.sleeps) <= 20
        # 2 + 3 + 4.5 + 5 + 5 = 19.5; one more 5s wait would pass the limit
        assert status.attempts == 5
        assert "20s" in status.error

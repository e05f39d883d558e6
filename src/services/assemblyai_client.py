"""AssemblyAI transcription client (job submission and status polling)."""

import json
import logging
from typing import Optional

import httpx

from models.transcript import TranscriptionJobState, TranscriptionJobStatus
from services.errors import UpstreamUnavailableError
from services.polling import BackoffPolicy, poll_transcription

logger = logging.getLogger(__name__)

ASSEMBLYAI_BASE_URL = "https://api.assemblyai.com/v2"

_STATE_MAP = {
    "queued": TranscriptionJobState.QUEUED,
    "processing": TranscriptionJobState.PROCESSING,
    "completed": TranscriptionJobState.COMPLETED,
    "error": TranscriptionJobState.ERROR,
}


class AssemblyAIClient:
    """Thin async wrapper over the AssemblyAI v2 REST API."""

    def __init__(
        self,
        api_key: Optional[str],
        policy: Optional[BackoffPolicy] = None,
        language_code: str = "en_us",
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client.

        Args:
            api_key: AssemblyAI API key (None leaves the client unconfigured)
            policy: Backoff policy for wait_for_completion
            language_code: Language hint sent with each job
            client: Optional pre-built httpx client (tests pass a MockTransport)
        """
        self.api_key = api_key
        self.policy = policy or BackoffPolicy()
        self.language_code = language_code
        self.client = client or httpx.AsyncClient(base_url=ASSEMBLYAI_BASE_URL, timeout=30.0)

    def is_configured(self) -> bool:
        """Check if an AssemblyAI API key is configured."""
        return bool(self.api_key)

    def _headers(self) -> dict:
        if not self.is_configured():
            raise UpstreamUnavailableError(
                "AssemblyAI API key not configured",
                details="Set the ASSEMBLYAI_API_KEY environment variable.",
            )
        return {"Authorization": self.api_key, "Content-Type": "application/json"}

    @staticmethod
    def _error_detail(error: httpx.HTTPStatusError) -> str:
        try:
            return json.dumps(error.response.json())
        except ValueError:
            return error.response.text or str(error)

    async def submit(self, audio_url: str) -> str:
        """Submit a transcription job.

        Args:
            audio_url: Publicly reachable audio URL

        Returns:
            The job id used for status polling
        """
        headers = self._headers()
        payload = {"audio_url": audio_url, "language_code": self.language_code}

        try:
            response = await self.client.post("/transcript", headers=headers, json=payload)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise UpstreamUnavailableError("AssemblyAI request timed out") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailableError(
                f"AssemblyAI request failed: {e.response.status_code}",
                details=self._error_detail(e),
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError("AssemblyAI request failed", details=str(e)) from e

        job_id = response.json().get("id")
        if not job_id:
            raise UpstreamUnavailableError("AssemblyAI response did not include a job id")

        logger.info(f"Submitted AssemblyAI job {job_id}")
        return job_id

    async def get_status(self, job_id: str) -> TranscriptionJobStatus:
        """Fetch the current status of a transcription job."""
        headers = self._headers()
        headers.pop("Content-Type")

        try:
            response = await self.client.get(f"/transcript/{job_id}", headers=headers)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise UpstreamUnavailableError("AssemblyAI status check timed out") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailableError(
                f"Status check failed: {e.response.status_code}",
                details=self._error_detail(e),
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError("Status check failed", details=str(e)) from e

        data = response.json()
        raw_status = str(data.get("status", "")).lower()
        state = _STATE_MAP.get(raw_status)
        if state is None:
            raise UpstreamUnavailableError(
                "Unexpected AssemblyAI job status", details=raw_status or "missing"
            )

        return TranscriptionJobStatus(
            job_id=job_id,
            state=state,
            text=data.get("text"),
            error=data.get("error"),
        )

    async def wait_for_completion(self, job_id: str, sleep=None) -> TranscriptionJobStatus:
        """Block until the job completes, fails, or the policy times out."""
        kwargs = {"sleep": sleep} if sleep is not None else {}
        return await poll_transcription(self.get_status, job_id, self.policy, **kwargs)

    async def close(self) -> None:
        await self.client.aclose()

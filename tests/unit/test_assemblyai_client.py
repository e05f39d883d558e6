"""Unit tests for the AssemblyAI REST client."""

import json

import httpx
import pytest

from models.transcript import TranscriptionJobState
from services.assemblyai_client import ASSEMBLYAI_BASE_URL, AssemblyAIClient
from services.errors import UpstreamUnavailableError
from services.polling import BackoffPolicy


def make_client(handler, api_key="aai-key", policy=None):
    """AssemblyAIClient whose HTTP traffic is served by ``handler``."""
    http = httpx.AsyncClient(base_url=ASSEMBLYAI_BASE_URL, transport=httpx.MockTransport(handler))
    return AssemblyAIClient(api_key, policy=policy, client=http)


async def no_sleep(_seconds):
    return None


@pytest.mark.unit
class TestAssemblyAIClient:
    """Tests for AssemblyAIClient."""

    @pytest.mark.asyncio
    async def test_submit(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["auth"] = request.headers["authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "job-1", "status": "queued"})

        client = make_client(handler)

        job_id = await client.submit("https://cdn.example/audio.m4a")

        assert job_id == "job-1"
        assert seen["method"] == "POST"
        assert seen["path"].endswith("/transcript")
        assert seen["auth"] == "aai-key"
        assert seen["body"] == {"audio_url": "https://cdn.example/audio.m4a", "language_code": "en_us"}

    @pytest.mark.asyncio
    async def test_submit_http_error(self):
        def handler(request):
            return httpx.Response(401, json={"error": "Invalid API key"})

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await make_client(handler).submit("https://cdn.example/audio.m4a")

        assert "401" in exc_info.value.error
        assert "Invalid API key" in exc_info.value.details

    @pytest.mark.asyncio
    async def test_submit_without_key(self):
        def handler(request):
            raise AssertionError("no request expected")

        client = make_client(handler, api_key=None)

        assert not client.is_configured()
        with pytest.raises(UpstreamUnavailableError):
            await client.submit("https://cdn.example/audio.m4a")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw, state",
        [
            ("queued", TranscriptionJobState.QUEUED),
            ("processing", TranscriptionJobState.PROCESSING),
            ("completed", TranscriptionJobState.COMPLETED),
            ("error", TranscriptionJobState.ERROR),
        ],
    )
    async def test_get_status(self, raw, state):
        def handler(request):
            assert request.url.path.endswith("/transcript/job-1")
            return httpx.Response(200, json={"id": "job-1", "status": raw, "text": "hi", "error": None})

        status = await make_client(handler).get_status("job-1")

        assert status.job_id == "job-1"
        assert status.state == state

    @pytest.mark.asyncio
    async def test_get_status_unknown(self):
        def handler(request):
            return httpx.Response(200, json={"id": "job-1", "status": "teleported"})

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await make_client(handler).get_status("job-1")

        assert exc_info.value.details == "teleported"

    @pytest.mark.asyncio
    async def test_wait_for_completion(self):
        """Polling follows the job to completion."""
        responses = iter(["queued", "processing", "completed"])

        def handler(request):
            status = next(responses)
            body = {"id": "job-1", "status": status}
            if status == "completed":
                body["text"] = "the transcript"
            return httpx.Response(200, json=body)

        client = make_client(handler, policy=BackoffPolicy(initial_delay=0.0))

        status = await client.wait_for_completion("job-1", sleep=no_sleep)

        assert status.state == TranscriptionJobState.COMPLETED
        assert status.text == "the transcript"
        assert status.attempts == 3

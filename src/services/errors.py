"""Error taxonomy shared by the pipeline stages and the API layer."""

from typing import Optional


class AnalyzerError(Exception):
    """Base error for a failed analysis request.

    ``error`` is the user-facing message; ``details`` carries the upstream
    detail when there is one.
    """

    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None):
        super().__init__(error if not details else f"{error}: {details}")
        self.error = error
        self.details = details

    def to_dict(self) -> dict:
        body = {"success": False, "error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class InvalidInputError(AnalyzerError):
    """Missing or malformed request input."""

    status_code = 400


class UpstreamUnavailableError(AnalyzerError):
    """A required upstream service is unconfigured or failed."""

    status_code = 500


class TranscriptUnavailableError(AnalyzerError):
    """No transcript could be acquired for the video."""

    status_code = 400
    suggestion = (
        "Try a video with captions enabled, or set ASSEMBLYAI_API_KEY "
        "to transcribe videos without captions."
    )

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["status"] = "unavailable"
        body["suggestion"] = self.suggestion
        return body


class SchemaMismatchError(AnalyzerError):
    """The LLM response did not contain the required fields."""

    status_code = 500

"""Ordered fallback chain for transcript acquisition."""

import logging
from typing import Sequence

from models.transcript import (
    TranscriptOutcome,
    TranscriptPending,
    TranscriptReady,
    TranscriptUnavailable,
)
from models.video import VideoReference
from services.transcript_sources.base import TranscriptSource

logger = logging.getLogger(__name__)


class TranscriptResolver:
    """Tries each transcript source in order until one succeeds.

    The first source to return Ready or Pending wins; there is no quality
    comparison between sources. Exceptions raised by a source are logged
    and recorded as that source's failure reason.
    """

    def __init__(self, sources: Sequence[TranscriptSource]):
        self.sources = list(sources)

    async def resolve(self, reference: VideoReference) -> TranscriptOutcome:
        """Run the chain for one video.

        Returns:
            TranscriptReady or TranscriptPending from the first source that
            produced one, otherwise TranscriptUnavailable listing why each
            source failed
        """
        failures: list[str] = []

        for source in self.sources:
            name = source.get_source_name()

            if not source.is_configured():
                logger.debug(f"[{name}] not configured, skipping")
                failures.append(f"{name}: not configured")
                continue

            logger.info(f"[{name}] trying transcript source for {reference.video_id}")
            try:
                outcome = await source.fetch(reference)
            except Exception as e:
                logger.warning(f"[{name}] failed with {type(e).__name__}: {e}")
                failures.append(f"{name}: {e}")
                continue

            if isinstance(outcome, TranscriptReady):
                logger.info(f"[{name}] transcript ready ({len(outcome.text)} characters)")
                return outcome
            if isinstance(outcome, TranscriptPending):
                logger.info(f"[{name}] transcription job {outcome.job_id} pending")
                return outcome

            logger.info(f"[{name}] unavailable: {outcome.reason}")
            failures.append(f"{name}: {outcome.reason}")

        reason = "No transcript available. " + (
            "; ".join(failures) if failures else "no transcript sources configured"
        )
        logger.warning(f"All transcript sources failed for {reference.video_id}")
        return TranscriptUnavailable(reason=reason)

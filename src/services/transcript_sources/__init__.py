"""Transcript sources package: the ordered strategies of the fallback chain."""

from services.transcript_sources.base import TranscriptSource, clean_subtitle_text
from services.transcript_sources.official_captions import OfficialCaptionsSource
from services.transcript_sources.caption_scraper import CaptionScraperSource
from services.transcript_sources.assemblyai import AssemblyAISource
from services.transcript_sources.local_whisper import LocalWhisperSource

__all__ = [
    "TranscriptSource",
    "clean_subtitle_text",
    "OfficialCaptionsSource",
    "CaptionScraperSource",
    "AssemblyAISource",
    "LocalWhisperSource",
]

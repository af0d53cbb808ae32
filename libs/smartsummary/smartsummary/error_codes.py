"""Canonical error codes surfaced to API clients."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN = "UNKNOWN"
    INVALID_ARTIFACT = "INVALID_ARTIFACT"
    INVALID_INPUT = "INVALID_INPUT"

    TRANSCRIPTION_FAILED = "TRANSCRIPTION_FAILED"
    SUMMARIZATION_FAILED = "SUMMARIZATION_FAILED"

    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"

    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"

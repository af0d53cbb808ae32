"""Core data models for SmartSummary."""

from smartsummary.models.artifact import UploadedArtifact
from smartsummary.models.note import (
    ANONYMOUS_EMAIL,
    DEFAULT_DURATION,
    DEFAULT_TITLE,
    MAX_SCORE,
    MIN_SCORE,
    Note,
)

__all__ = [
    "ANONYMOUS_EMAIL",
    "DEFAULT_DURATION",
    "DEFAULT_TITLE",
    "MAX_SCORE",
    "MIN_SCORE",
    "Note",
    "UploadedArtifact",
]

"""Reusable services (upload validation, notification)."""

from smartsummary.services.artifact_validator import ArtifactValidator
from smartsummary.services.notifier import (
    Notifier,
    get_notifier,
    init_notifier,
    shutdown_notifier,
)

__all__ = ["ArtifactValidator", "Notifier", "get_notifier", "init_notifier", "shutdown_notifier"]

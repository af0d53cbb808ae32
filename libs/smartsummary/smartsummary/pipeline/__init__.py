"""Pipeline orchestration."""

from smartsummary.pipeline.orchestrator import (
    PipelineOrchestrator,
    PipelineOutcome,
    PipelineRun,
    PipelineState,
    SummaryRequest,
)

__all__ = [
    "PipelineOrchestrator",
    "PipelineOutcome",
    "PipelineRun",
    "PipelineState",
    "SummaryRequest",
]

"""External engine adapters."""

from smartsummary.providers.engines import (
    EngineCommand,
    SummarizationEngine,
    TranscriptionEngine,
    build_engines,
)

__all__ = ["EngineCommand", "SummarizationEngine", "TranscriptionEngine", "build_engines"]

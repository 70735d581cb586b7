"""Protocol for pipeline stages."""

from __future__ import annotations

from typing import Protocol

from appendsw.core.schema import PipelineContext, StageResult


class PipelineStage(Protocol):
    """Protocol for pipeline stages.

    Attributes:
        name: Unique identifier for this stage.
        depends_on: Stages that must run before this one.  The pipeline
            engine runs stages in the order given by ``config.stages``;
            this list documents the expected ordering.
    """

    name: str
    depends_on: list[str]

    def execute(self, context: PipelineContext) -> StageResult:
        """Run the stage and return a result."""
        ...

    def can_skip(self, context: PipelineContext) -> bool:
        """Return True if this stage can be skipped given the context."""
        ...

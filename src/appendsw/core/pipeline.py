"""Pipeline engine: run stages in order, stop at the first failure."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from appendsw.core.exceptions import AppendSwError, PipelineError
from appendsw.core.registry import ComponentRegistry
from appendsw.core.schema import PipelineContext, PipelineResult, StageResult

log = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for pipeline execution."""

    stages: list[str]
    skip_stages: list[str] = field(default_factory=list)


class PipelineEngine:
    """Executes pipeline stages with skip support.

    Every stage is gated on the success of the one before it: the first
    failed result ends the run, and no later stage is attempted.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        config: PipelineConfig,
    ) -> None:
        self._registry = registry
        self._config = config

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def registry(self) -> ComponentRegistry:
        return self._registry

    def run(self, context: PipelineContext) -> PipelineResult:
        """Run all non-skipped stages and return the final result."""
        for stage_name in self._config.stages:
            if stage_name in self._config.skip_stages:
                continue
            stage = self._registry.get_stage(stage_name)

            if getattr(stage, "can_skip", None) and stage.can_skip(context):
                log.debug("Skipping stage %s", stage_name)
                continue

            try:
                result = stage.execute(context)
            except AppendSwError as e:
                result = StageResult(
                    stage_name=stage_name,
                    success=False,
                    message=str(e),
                    error_kind=e.label,
                )
            except Exception as e:
                raise PipelineError(f"Stage {stage_name} failed: {e}") from e

            context.update(result)
            if not result.success:
                break

        return context.finalize()

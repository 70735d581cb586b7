"""Place stage: write or append the source text to the mode's target file."""

from __future__ import annotations

import logging

from appendsw.build.placement import place
from appendsw.core.schema import Mode, PipelineContext, StageResult

log = logging.getLogger(__name__)


class PlaceStage:
    """Pipeline stage that merges the entry text into the target file."""

    name = "place"
    depends_on: list[str] = ["read"]

    def execute(self, context: PipelineContext) -> StageResult:
        """Write the source text; set context.target_path on success."""
        if context.source_text is None:
            return StageResult(
                stage_name=self.name,
                success=False,
                message="No source text in context (run read stage first).",
            )

        mode = context.invocation.mode
        target = place(
            context.source_text,
            context.invocation.entry_file,
            mode,
            root=context.project_root,
        )
        verb = "Appended to" if mode is Mode.DEFAULT else "Wrote"
        log.info("%s %s (mode: %s)", verb, target, mode.value)
        return StageResult(
            stage_name=self.name,
            success=True,
            data={"target_path": target},
        )

    def can_skip(self, context: PipelineContext) -> bool:
        return False

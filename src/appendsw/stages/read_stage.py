"""Read stage: load the entry file's source text."""

from __future__ import annotations

import logging

from appendsw.build.placement import read_text
from appendsw.core.schema import PipelineContext, StageResult
from appendsw.utils import resolve_path

log = logging.getLogger(__name__)


class ReadStage:
    """Pipeline stage that reads the entry file as UTF-8 text."""

    name = "read"
    depends_on: list[str] = []

    def execute(self, context: PipelineContext) -> StageResult:
        entry = resolve_path(context, context.invocation.entry_file)
        log.info("Reading %s", context.invocation.entry_file)
        text = read_text(entry)
        return StageResult(
            stage_name=self.name,
            success=True,
            data={"source_text": text},
        )

    def can_skip(self, context: PipelineContext) -> bool:
        return False

"""Compile stage: bundle the placed target file and overwrite it with the bundle."""

from __future__ import annotations

import logging

from appendsw.build.placement import write_text
from appendsw.core.exceptions import CompileError
from appendsw.core.schema import BundleResult, PipelineContext, StageResult
from appendsw.utils import get_registry_and_config

log = logging.getLogger(__name__)


def _diagnostics_message(result: BundleResult) -> str:
    """Full formatted bundler output, or the collected messages when there is none."""
    if result.diagnostics.strip():
        return result.diagnostics
    lines = [f"error: {e}" for e in result.errors] + [f"warning: {w}" for w in result.warnings]
    return "\n".join(lines) or "Bundler failed without diagnostics."


class CompileStage:
    """Pipeline stage that runs the bundler over the target file.

    Warnings are fatal: a bundle that reports any warning is rejected and
    the target file keeps its pre-compile content.
    """

    name = "compile"
    depends_on: list[str] = ["place"]

    def execute(self, context: PipelineContext) -> StageResult:
        """Bundle context.target_path and write the bundle back to it."""
        target = context.target_path
        if target is None:
            return StageResult(
                stage_name=self.name,
                success=False,
                message="No target path in context (run place stage first).",
            )

        bundler = context.config.get("bundler")
        if bundler is None:
            registry, config_manager, err = get_registry_and_config(context, self.name)
            if err:
                return err
            cfg = config_manager.config
            bundler = registry.get_bundler(cfg.bundler, esbuild_bin=cfg.esbuild_bin)

        build = context.build
        log.info("Compiling %s with %s (%s)", target, bundler.name, build.node_env)
        result = bundler.compile(target, build)
        if not result.ok:
            log.debug(
                "Bundle rejected: %d error(s), %d warning(s)",
                len(result.errors),
                len(result.warnings),
            )
            raise CompileError(_diagnostics_message(result))

        write_text(target, result.code)
        log.info("Wrote bundle to %s (%d chars)", target, len(result.code))
        return StageResult(
            stage_name=self.name,
            success=True,
            data={"bundle": result.code},
        )

    def can_skip(self, context: PipelineContext) -> bool:
        """Skip when --skip-compile was given."""
        return context.invocation.skip_compile

"""Shared utilities for pipeline stages."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from appendsw.core.schema import PipelineContext, StageResult


def get_registry_and_config(
    context: PipelineContext,
    stage_name: str,
) -> tuple[Any, Any, StageResult | None]:
    """Extract registry and config_manager from pipeline context.

    Returns:
        (registry, config_manager, None) on success.
        (None, None, StageResult) on failure; the caller should return the StageResult.
    """
    registry = context.config.get("registry")
    config_manager = context.config.get("config_manager")
    if not registry or not config_manager:
        return None, None, StageResult(
            stage_name=stage_name,
            success=False,
            message="registry or config_manager not set in context.config",
        )
    return registry, config_manager, None


def resolve_path(context: PipelineContext, path: Path) -> Path:
    """Resolve a path given on the command line against the project root."""
    path = Path(path)
    if path.is_absolute():
        return path
    return context.project_root / path

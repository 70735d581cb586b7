"""Framework core: registry, pipeline, schema, config."""

from appendsw.core.config import ConfigManager, ToolConfig
from appendsw.core.pipeline import PipelineConfig, PipelineEngine
from appendsw.core.registry import ComponentRegistry
from appendsw.core.schema import (
    BuildConfig,
    BundleResult,
    InvocationConfig,
    Mode,
    PipelineContext,
    PipelineResult,
    StageResult,
)

__all__ = [
    "BuildConfig",
    "BundleResult",
    "ComponentRegistry",
    "ConfigManager",
    "InvocationConfig",
    "Mode",
    "PipelineConfig",
    "PipelineContext",
    "PipelineEngine",
    "PipelineResult",
    "StageResult",
    "ToolConfig",
]

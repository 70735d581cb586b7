"""Pydantic models and data structures for the framework."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from appendsw.core.exceptions import UsageError

DEFAULT_ENV_FILE = "./.env"
BUNDLE_FILE_NAME = "bundle.js"


class Mode(str, Enum):
    """File placement mode selected with ``--mode``."""

    DEFAULT = "default"
    DEV = "dev"
    BUILD = "build"
    REPLACE = "replace"

    @classmethod
    def parse(cls, value: str | None) -> Mode:
        """Map a ``--mode`` value to a Mode; anything unrecognised appends (default)."""
        if value in (cls.DEV.value, cls.BUILD.value, cls.REPLACE.value):
            return cls(value)
        return cls.DEFAULT


class InvocationConfig(BaseModel):
    """Options of one command-line invocation. Immutable once built."""

    model_config = {"frozen": True}

    entry_file: Path
    skip_compile: bool = False
    env_file: Path = Path(DEFAULT_ENV_FILE)
    mode: Mode = Mode.DEFAULT
    logs_enabled: bool = True

    @classmethod
    def from_cli(
        cls,
        entry_file: str | None,
        *,
        skip_compile: bool = False,
        env_file: str | None = None,
        mode: str | None = None,
        no_logs: bool = False,
    ) -> InvocationConfig:
        """Build the invocation config from raw CLI values."""
        if not entry_file or not str(entry_file).strip():
            raise UsageError("Missing required argument <entry-file>.")
        return cls(
            entry_file=Path(entry_file),
            skip_compile=skip_compile,
            env_file=Path(env_file or DEFAULT_ENV_FILE),
            mode=Mode.parse(mode),
            logs_enabled=not no_logs,
        )


class BuildConfig(BaseModel):
    """Settings handed to the bundler for one compilation."""

    model_config = {"frozen": True}

    node_env: str = "production"
    env_file: Path = Path(DEFAULT_ENV_FILE)
    defines: dict[str, str] = Field(default_factory=dict)
    bundle_filename: str = BUNDLE_FILE_NAME
    target: str = "es2015"
    minify: bool = True
    timeout: int = 120

    @property
    def is_development(self) -> bool:
        return self.node_env == "development"

    @classmethod
    def from_invocation(
        cls,
        invocation: InvocationConfig,
        defines: dict[str, str] | None = None,
        *,
        target: str = "es2015",
        timeout: int = 120,
    ) -> BuildConfig:
        """Derive the build config: ``dev`` builds for development, every other mode for production."""
        node_env = "development" if invocation.mode is Mode.DEV else "production"
        return cls(
            node_env=node_env,
            env_file=invocation.env_file,
            defines=dict(defines or {}),
            target=target,
            minify=node_env == "production",
            timeout=timeout,
        )


class BundleResult(BaseModel):
    """Outcome of a bundler run."""

    success: bool = True
    code: str = ""
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    diagnostics: str = ""

    @property
    def ok(self) -> bool:
        """True only when the bundle succeeded with neither errors nor warnings."""
        return self.success and not self.errors and not self.warnings


class StageResult(BaseModel):
    """Result produced by a pipeline stage."""

    stage_name: str
    success: bool = True
    message: str = ""
    error_kind: str = ""
    data: dict[str, Any] = Field(default_factory=dict)


class PipelineContext(BaseModel):
    """Mutable context passed between pipeline stages."""

    model_config = {"arbitrary_types_allowed": True}

    invocation: InvocationConfig
    build: BuildConfig = Field(default_factory=BuildConfig)
    project_root: Path = Field(default_factory=Path.cwd)
    source_text: str | None = None
    target_path: Path | None = None
    bundle: str | None = None
    stage_results: list[StageResult] = Field(default_factory=list)
    config: dict[str, Any] = Field(default_factory=dict)

    def update(self, result: StageResult) -> None:
        """Append a stage result and merge its data into context."""
        self.stage_results.append(result)
        if result.data:
            if "source_text" in result.data:
                self.source_text = result.data["source_text"]
            if "target_path" in result.data:
                self.target_path = result.data["target_path"]
            if "bundle" in result.data:
                self.bundle = result.data["bundle"]

    def finalize(self) -> PipelineResult:
        """Build final pipeline result from context."""
        failed = next((r for r in self.stage_results if not r.success), None)
        return PipelineResult(
            success=failed is None,
            stage_results=self.stage_results,
            target_path=self.target_path,
            compiled=self.bundle is not None,
            failed_stage=failed,
        )


class PipelineResult(BaseModel):
    """Final result of a pipeline run."""

    model_config = {"arbitrary_types_allowed": True}

    success: bool = True
    stage_results: list[StageResult] = Field(default_factory=list)
    target_path: Path | None = None
    compiled: bool = False
    failed_stage: StageResult | None = None

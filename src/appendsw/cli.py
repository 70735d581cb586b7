"""CLI entry point for appendsw."""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import NoReturn

import click

from appendsw import __version__
from appendsw.build import register_builtin_bundlers
from appendsw.build.build_log import configure_console, get_logger, log_success, run_log_context
from appendsw.core.config import ConfigManager
from appendsw.core.exceptions import AppendSwError, UsageError
from appendsw.core.pipeline import PipelineConfig, PipelineEngine
from appendsw.core.registry import ComponentRegistry
from appendsw.core.schema import (
    DEFAULT_ENV_FILE,
    BuildConfig,
    InvocationConfig,
    PipelineContext,
    PipelineResult,
)
from appendsw.stages import register_builtin_stages


def _load_registry() -> ComponentRegistry:
    """Registry with the built-in stages and bundlers."""
    registry = ComponentRegistry()
    register_builtin_stages(registry)
    register_builtin_bundlers(registry)
    return registry


def _report_failure(label: str, message: str) -> NoReturn:
    """Log the error label and every line of the message, then exit non-zero."""
    log = get_logger()
    log.error("%s", label)
    for line in message.splitlines() or [""]:
        log.error("%s", line)
    raise SystemExit(1)


def run_pipeline(
    invocation: InvocationConfig,
    project_root: Path | None = None,
    config_path: Path | None = None,
) -> PipelineResult:
    """Load configuration, then read, place and (optionally) compile the entry file."""
    root = Path(project_root or Path.cwd()).resolve()
    env_path = invocation.env_file if invocation.env_file.is_absolute() else root / invocation.env_file
    config = ConfigManager(project_root=root, env_path=env_path, config_path=config_path)
    cfg = config.load()
    registry = _load_registry()

    build = BuildConfig.from_invocation(
        invocation,
        config.env,
        target=cfg.target,
        timeout=cfg.compile_timeout,
    )
    ctx = PipelineContext(
        invocation=invocation,
        build=build,
        project_root=root,
        config={
            "registry": registry,
            "config_manager": config,
        },
    )
    engine = PipelineEngine(
        registry,
        PipelineConfig(stages=cfg.pipeline.stages, skip_stages=cfg.pipeline.skip_stages),
    )
    return engine.run(ctx)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__)
@click.argument("entry_file")
@click.option("--skip-compile", "-s", is_flag=True, help="Skip compilation; place the raw entry file.")
@click.option(
    "--env",
    "-e",
    "env_file",
    is_flag=False,
    flag_value=DEFAULT_ENV_FILE,
    default=DEFAULT_ENV_FILE,
    show_default=True,
    help="Path to the environment variables file used for build-time substitution.",
)
@click.option("--mode", "-m", default=None, help="Placement mode: dev, build or replace (default: append to build/service-worker.js).")
@click.option("--no-logs", "-n", is_flag=True, help="Suppress info and success output (errors are always shown).")
@click.option("--log-file", "log_file", type=click.Path(path_type=Path), help="Also write a timestamped log of this run to the given file.")
@click.option("--verbose", "-v", is_flag=True, help="Verbose log file (DEBUG level, includes the bundler command).")
@click.option("--config", "config_path", type=click.Path(path_type=Path, exists=True, dir_okay=False), help="YAML tool config (default: ./appendsw.yaml if present).")
def main(
    entry_file: str,
    skip_compile: bool,
    env_file: str,
    mode: str | None,
    no_logs: bool,
    log_file: Path | None,
    verbose: bool,
    config_path: Path | None,
) -> None:
    """Bundle ENTRY_FILE and merge it into the service worker."""
    try:
        invocation = InvocationConfig.from_cli(
            entry_file,
            skip_compile=skip_compile,
            env_file=env_file,
            mode=mode,
            no_logs=no_logs,
        )
    except UsageError as e:
        raise click.UsageError(str(e)) from e

    configure_console(invocation.logs_enabled)
    with ExitStack() as stack:
        try:
            if log_file is not None:
                stack.enter_context(run_log_context(log_file.resolve(), verbose=verbose))
            result = run_pipeline(invocation, config_path=config_path)
        except AppendSwError as e:
            _report_failure(e.label, str(e))

        failed = result.failed_stage
        if failed is not None:
            _report_failure(failed.error_kind or "Error", failed.message or f"Stage {failed.stage_name} failed.")

        if result.compiled:
            log_success("Compiled and wrote %s", result.target_path)
        else:
            log_success("Wrote %s (compilation skipped)", result.target_path)


if __name__ == "__main__":
    main()

"""esbuild bundler: bundle an entry file through the esbuild CLI.

Register as "esbuild". The bundle is written into a temporary directory and
read back, so nothing but the final text outlives the run.
"""

from __future__ import annotations

import json
import logging
import os
import re
import subprocess
import tempfile
from pathlib import Path

from appendsw.core.exceptions import CompileError
from appendsw.core.schema import BuildConfig, BundleResult

log = logging.getLogger(__name__)

# esbuild prints "▲ [WARNING] text" and "✘ [ERROR] text" with --color=false
_RE_DIAGNOSTIC = re.compile(r"\[(WARNING|ERROR)\]\s*(.*)")

#: Loader overrides so JSX in plain .js files is transpiled too.
SCRIPT_LOADERS = {".js": "jsx", ".mjs": "js", ".jsx": "jsx"}


def parse_diagnostics(stderr: str) -> tuple[list[str], list[str]]:
    """Split esbuild output into (errors, warnings) message lines."""
    errors: list[str] = []
    warnings: list[str] = []
    for line in stderr.splitlines():
        match = _RE_DIAGNOSTIC.search(line)
        if not match:
            continue
        kind, text = match.groups()
        (errors if kind == "ERROR" else warnings).append(text.strip())
    return errors, warnings


def define_args(build: BuildConfig) -> list[str]:
    """``--define`` flags for env-file values plus NODE_ENV/BABEL_ENV."""
    values = dict(build.defines)
    values["NODE_ENV"] = build.node_env
    values["BABEL_ENV"] = build.node_env
    return [f"--define:process.env.{key}={json.dumps(value)}" for key, value in values.items()]


class EsbuildBundler:
    """Bundler implementation backed by the esbuild executable."""

    name = "esbuild"

    def __init__(self, esbuild_bin: str = "esbuild", **kwargs: object) -> None:
        self._esbuild_bin = esbuild_bin

    def command(self, entry: Path, outfile: Path, build: BuildConfig) -> list[str]:
        """Return the esbuild argv for one bundle."""
        cmd = [
            self._esbuild_bin,
            str(entry),
            "--bundle",
            f"--outfile={outfile}",
            "--platform=browser",
            f"--target={build.target}",
            "--log-level=warning",
            "--color=false",
        ]
        cmd.extend(f"--loader:{ext}={loader}" for ext, loader in SCRIPT_LOADERS.items())
        if build.minify:
            cmd.extend(["--minify", "--legal-comments=none", "--charset=ascii"])
        cmd.extend(define_args(build))
        return cmd

    def compile(self, entry: Path, build: BuildConfig) -> BundleResult:
        """Bundle ``entry``; errors and warnings are both reported in the result."""
        entry = Path(entry).resolve()
        env = os.environ.copy()
        env["NODE_ENV"] = build.node_env
        env["BABEL_ENV"] = build.node_env

        with tempfile.TemporaryDirectory(prefix="appendsw-") as tmp:
            outfile = Path(tmp) / build.bundle_filename
            cmd = self.command(entry, outfile, build)
            log.debug("Running esbuild: %s", " ".join(cmd))
            try:
                proc = subprocess.run(
                    cmd,
                    env=env,
                    capture_output=True,
                    encoding="utf-8",
                    errors="replace",
                    timeout=build.timeout,
                )
            except FileNotFoundError as e:
                raise CompileError(
                    f"Bundler executable not found: {self._esbuild_bin}\n"
                    "Install esbuild (npm install -g esbuild) or set ESBUILD_BIN."
                ) from e
            except subprocess.TimeoutExpired as e:
                raise CompileError(f"esbuild timed out after {build.timeout}s bundling {entry}") from e

            diagnostics = (proc.stderr or "").strip()
            errors, warnings = parse_diagnostics(diagnostics)
            if proc.returncode != 0 and not errors:
                errors.append(diagnostics or f"esbuild exited with code {proc.returncode}")
            if proc.returncode != 0 or not outfile.is_file():
                if not errors:
                    errors.append(f"esbuild produced no {build.bundle_filename}")
                return BundleResult(
                    success=False,
                    errors=errors,
                    warnings=warnings,
                    diagnostics=diagnostics or "\n".join(errors),
                )
            code = outfile.read_text(encoding="utf-8")

        return BundleResult(
            success=True,
            code=code,
            errors=errors,
            warnings=warnings,
            diagnostics=diagnostics,
        )

"""Tests for the esbuild bundler."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from appendsw.build.esbuild_bundler import EsbuildBundler, define_args, parse_diagnostics
from appendsw.core.exceptions import CompileError
from appendsw.core.schema import BuildConfig


def _fake_run(code: str | None = "(()=>{})();\n", stderr: str = "", returncode: int = 0):
    """subprocess.run replacement that writes ``code`` to the --outfile."""
    calls: list[dict] = []

    def run(cmd, **kwargs):
        calls.append({"cmd": cmd, **kwargs})
        if code is not None and returncode == 0:
            outfile = next(a.split("=", 1)[1] for a in cmd if a.startswith("--outfile="))
            Path(outfile).write_text(code, encoding="utf-8")
        return subprocess.CompletedProcess(cmd, returncode, stdout="", stderr=stderr)

    run.calls = calls  # type: ignore[attr-defined]
    return run


class TestParseDiagnostics:
    def test_splits_errors_and_warnings(self) -> None:
        stderr = (
            '✘ [ERROR] Could not resolve "workbox-core"\n'
            "\n"
            "    build/service-worker.js:1:7:\n"
            '▲ [WARNING] Comparison using the "===" operator here is always false [equals-nan]\n'
            "\n"
            "1 warning and 1 error\n"
        )
        errors, warnings = parse_diagnostics(stderr)
        assert errors == ['Could not resolve "workbox-core"']
        assert warnings == ['Comparison using the "===" operator here is always false [equals-nan]']

    def test_empty(self) -> None:
        assert parse_diagnostics("") == ([], [])


class TestDefineArgs:
    def test_defines_env_values_and_node_env(self) -> None:
        build = BuildConfig(node_env="development", defines={"API_URL": 'https://x.test/"q"'})
        args = define_args(build)
        assert '--define:process.env.API_URL="https://x.test/\\"q\\""' in args
        assert '--define:process.env.NODE_ENV="development"' in args
        assert '--define:process.env.BABEL_ENV="development"' in args

    def test_mode_wins_over_env_file_node_env(self) -> None:
        build = BuildConfig(node_env="production", defines={"NODE_ENV": "development"})
        assert define_args(build).count('--define:process.env.NODE_ENV="production"') == 1


class TestCommand:
    def test_production_minifies(self, tmp_path: Path) -> None:
        cmd = EsbuildBundler().command(tmp_path / "sw.js", tmp_path / "bundle.js", BuildConfig())
        assert cmd[0] == "esbuild"
        assert "--bundle" in cmd
        assert "--minify" in cmd
        assert "--target=es2015" in cmd
        assert "--loader:.js=jsx" in cmd
        assert f"--outfile={tmp_path / 'bundle.js'}" in cmd

    def test_development_does_not_minify(self, tmp_path: Path) -> None:
        build = BuildConfig(node_env="development", minify=False)
        cmd = EsbuildBundler(esbuild_bin="/opt/esbuild").command(tmp_path / "sw.js", tmp_path / "b.js", build)
        assert cmd[0] == "/opt/esbuild"
        assert "--minify" not in cmd


class TestCompile:
    def test_success_returns_bundle(self, tmp_path: Path) -> None:
        entry = tmp_path / "sw.js"
        entry.write_text("self.skipWaiting()", encoding="utf-8")
        run = _fake_run(code="self.skipWaiting();\n")
        with patch("appendsw.build.esbuild_bundler.subprocess.run", side_effect=run):
            result = EsbuildBundler().compile(entry, BuildConfig(node_env="development"))
        assert result.ok
        assert result.code == "self.skipWaiting();\n"
        call = run.calls[0]
        assert call["env"]["NODE_ENV"] == "development"
        assert call["env"]["BABEL_ENV"] == "development"
        assert call["timeout"] == 120
        assert call["encoding"] == "utf-8"
        assert call["errors"] == "replace"
        assert "text" not in call

    def test_output_directory_is_temporary(self, tmp_path: Path) -> None:
        run = _fake_run()
        with patch("appendsw.build.esbuild_bundler.subprocess.run", side_effect=run):
            EsbuildBundler().compile(tmp_path / "sw.js", BuildConfig())
        outfile = next(a.split("=", 1)[1] for a in run.calls[0]["cmd"] if a.startswith("--outfile="))
        assert Path(outfile).name == "bundle.js"
        assert not Path(outfile).exists()

    def test_warning_reported_but_not_ok(self, tmp_path: Path) -> None:
        stderr = '▲ [WARNING] Duplicate key "a" in object literal [duplicate-object-key]\n\n1 warning\n'
        with patch("appendsw.build.esbuild_bundler.subprocess.run", side_effect=_fake_run(stderr=stderr)):
            result = EsbuildBundler().compile(tmp_path / "sw.js", BuildConfig())
        assert result.success is True
        assert result.warnings == ['Duplicate key "a" in object literal [duplicate-object-key]']
        assert not result.ok
        assert "1 warning" in result.diagnostics

    def test_failure_returns_errors(self, tmp_path: Path) -> None:
        stderr = '✘ [ERROR] Could not resolve "./missing"\n\n1 error\n'
        run = _fake_run(stderr=stderr, returncode=1)
        with patch("appendsw.build.esbuild_bundler.subprocess.run", side_effect=run):
            result = EsbuildBundler().compile(tmp_path / "sw.js", BuildConfig())
        assert result.success is False
        assert result.errors == ['Could not resolve "./missing"']
        assert result.code == ""

    def test_failure_without_diagnostics(self, tmp_path: Path) -> None:
        with patch("appendsw.build.esbuild_bundler.subprocess.run", side_effect=_fake_run(returncode=3)):
            result = EsbuildBundler().compile(tmp_path / "sw.js", BuildConfig())
        assert result.success is False
        assert result.errors == ["esbuild exited with code 3"]

    def test_missing_output_is_failure(self, tmp_path: Path) -> None:
        with patch("appendsw.build.esbuild_bundler.subprocess.run", side_effect=_fake_run(code=None)):
            result = EsbuildBundler().compile(tmp_path / "sw.js", BuildConfig())
        assert result.success is False
        assert "bundle.js" in result.errors[0]

    def test_missing_executable_raises(self, tmp_path: Path) -> None:
        with patch("appendsw.build.esbuild_bundler.subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(CompileError, match="not found: esbuild"):
                EsbuildBundler().compile(tmp_path / "sw.js", BuildConfig())

    def test_timeout_raises(self, tmp_path: Path) -> None:
        exc = subprocess.TimeoutExpired(cmd="esbuild", timeout=1)
        with patch("appendsw.build.esbuild_bundler.subprocess.run", side_effect=exc):
            with pytest.raises(CompileError, match="timed out after 1s"):
                EsbuildBundler().compile(tmp_path / "sw.js", BuildConfig(timeout=1))

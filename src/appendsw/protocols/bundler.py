"""Protocol for JavaScript bundlers."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from appendsw.core.schema import BuildConfig, BundleResult


class Bundler(Protocol):
    """Protocol for bundlers (esbuild, or a fake in tests)."""

    name: str

    def compile(self, entry: Path, build: BuildConfig) -> BundleResult:
        """Bundle ``entry`` and return the bundle text or the diagnostics."""
        ...

"""Central registry for pipeline stages and bundlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from appendsw.core.exceptions import RegistryError

if TYPE_CHECKING:
    from appendsw.protocols import Bundler, PipelineStage

log = logging.getLogger(__name__)


class ComponentRegistry:
    """Central registry for all pluggable components."""

    def __init__(self) -> None:
        self._bundlers: dict[str, type[Bundler]] = {}
        self._stages: dict[str, type[PipelineStage]] = {}
        self._bundler_options: dict[str, dict[str, Any]] = {}

    def register_bundler(self, name: str, cls: type[Bundler], **options: Any) -> None:
        """Register a bundler class."""
        if name in self._bundlers:
            log.warning("Overwriting bundler registration: %s", name)
        self._bundlers[name] = cls
        if options:
            self._bundler_options[name] = options

    def register_stage(self, name: str, cls: type[PipelineStage]) -> None:
        """Register a pipeline stage class."""
        if name in self._stages:
            log.warning("Overwriting stage registration: %s", name)
        self._stages[name] = cls

    def get_bundler(self, name: str, **kwargs: Any) -> Bundler:
        """Get a bundler instance by name."""
        if name not in self._bundlers:
            raise RegistryError(f"Unknown bundler: {name}")
        cls = self._bundlers[name]
        opts = {**self._bundler_options.get(name, {}), **kwargs}
        return cls(**opts)  # type: ignore[call-arg]

    def get_stage(self, name: str) -> PipelineStage:
        """Get a pipeline stage instance by name."""
        if name not in self._stages:
            raise RegistryError(f"Unknown pipeline stage: {name}")
        cls = self._stages[name]
        return cls()  # type: ignore[call-arg]

    def list_available(self) -> dict[str, list[str]]:
        """Return all registered component names by category."""
        return {
            "bundlers": list(self._bundlers),
            "stages": list(self._stages),
        }

"""Configuration loading from .env and YAML."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, Field, ValidationError

from appendsw.core.exceptions import ConfigError
from appendsw.core.schema import DEFAULT_ENV_FILE

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "appendsw.yaml"

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class PipelineConfigModel(BaseModel):
    """Pipeline section of config."""

    stages: list[str] = Field(default_factory=lambda: ["read", "place", "compile"])
    skip_stages: list[str] = Field(default_factory=list)


class ToolConfig(BaseModel):
    """Full tool configuration."""

    bundler: str = "esbuild"
    esbuild_bin: str = "esbuild"
    target: str = "es2015"
    compile_timeout: int = 120
    pipeline: PipelineConfigModel = Field(default_factory=PipelineConfigModel)


def build_defines(env: dict[str, str | None]) -> dict[str, str]:
    """Keep env entries usable as ``process.env.<KEY>`` substitutions.

    Keys that are not JavaScript identifiers are dropped; valueless keys
    become empty strings.
    """
    defines: dict[str, str] = {}
    for key, value in env.items():
        if not _JS_IDENTIFIER.match(key):
            log.warning("Ignoring env key %r: not a valid identifier", key)
            continue
        defines[key] = value if value is not None else ""
    return defines


class ConfigManager:
    """Load and merge configuration from .env and YAML."""

    def __init__(
        self,
        project_root: Path | None = None,
        env_path: Path | None = None,
        config_path: Path | None = None,
    ) -> None:
        self._root = Path(project_root or Path.cwd()).resolve()
        self._env_path = Path(env_path) if env_path else self._root / DEFAULT_ENV_FILE
        self._config_path = Path(config_path) if config_path else self._root / CONFIG_FILE_NAME
        self._config: ToolConfig | None = None
        self._env: dict[str, str] = {}

    def load_env(self) -> dict[str, str]:
        """Load the .env file into a dict (without modifying os.environ).

        A missing file yields an empty dict.
        """
        if not self._env_path.is_file():
            log.debug("No env file at %s", self._env_path)
            self._env = {}
            return self._env
        try:
            self._env = build_defines(dict(dotenv_values(self._env_path, encoding="utf-8")))
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Failed to read .env file %s: %s", self._env_path, e)
            self._env = {}
        return self._env

    def load_yaml(self) -> dict[str, Any]:
        """Load YAML config file if it exists."""
        if not self._config_path.exists():
            return {}
        try:
            with open(self._config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            log.warning("Failed to read config file %s: %s", self._config_path, e)
            return {}
        except yaml.YAMLError as e:
            log.warning("Malformed YAML in %s: %s", self._config_path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring config file %s: top level is not a mapping", self._config_path)
            return {}
        return data

    def load(self) -> ToolConfig:
        """Load .env and YAML, merge with defaults, return ToolConfig."""
        env = self.load_env()
        yaml_data = self.load_yaml()

        config_dict: dict[str, Any] = {
            key: yaml_data[key]
            for key in ("bundler", "esbuild_bin", "target", "compile_timeout")
            if yaml_data.get(key) is not None
        }
        # Process environment, then the env file, override YAML values
        env_mapping = {
            "APPENDSW_BUNDLER": "bundler",
            "ESBUILD_BIN": "esbuild_bin",
        }
        for env_key, config_key in env_mapping.items():
            value = os.environ.get(env_key) or env.get(env_key)
            if value:
                config_dict[config_key] = value

        try:
            if yaml_data.get("pipeline"):
                config_dict["pipeline"] = PipelineConfigModel(**yaml_data["pipeline"])
            self._config = ToolConfig(**config_dict)
        except (TypeError, ValidationError) as e:
            raise ConfigError(f"Invalid configuration in {self._config_path}: {e}") from e
        return self._config

    @property
    def config(self) -> ToolConfig:
        """Return loaded config; load if not yet loaded."""
        if self._config is None:
            self.load()
        if self._config is None:
            raise RuntimeError("ConfigManager.load() failed to produce a config")
        return self._config

    @property
    def env(self) -> dict[str, str]:
        """Return loaded env dict."""
        if not self._env and self._env_path.exists():
            self.load_env()
        return self._env

    @property
    def env_path(self) -> Path:
        return self._env_path

    @property
    def project_root(self) -> Path:
        return self._root

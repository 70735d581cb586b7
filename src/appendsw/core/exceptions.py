"""Custom exception hierarchy for appendsw."""

from __future__ import annotations


class AppendSwError(Exception):
    """Base exception for appendsw.

    ``label`` is the category printed in front of the message when the CLI
    reports a failure.
    """

    label = "Error"


class UsageError(AppendSwError):
    """Raised when command-line input is missing or invalid."""

    label = "UsageError"


class FileIOError(AppendSwError):
    """Raised when reading or writing a file fails."""

    label = "IOError"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class CompileError(AppendSwError):
    """Raised when the bundler reports errors or warnings."""

    label = "CompileError"


class ConfigError(AppendSwError):
    """Raised when configuration loading or validation fails."""

    label = "ConfigError"


class RegistryError(AppendSwError):
    """Raised when a component is not found or registration fails."""

    label = "RegistryError"


class PipelineError(AppendSwError):
    """Raised when a pipeline stage fails unexpectedly."""

    label = "PipelineError"

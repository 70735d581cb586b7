"""Built-in pipeline stages."""

from appendsw.stages.compile_stage import CompileStage
from appendsw.stages.place_stage import PlaceStage
from appendsw.stages.read_stage import ReadStage


def register_builtin_stages(registry) -> None:
    """Register built-in pipeline stages on the given registry."""
    registry.register_stage("read", ReadStage)
    registry.register_stage("place", PlaceStage)
    registry.register_stage("compile", CompileStage)


__all__ = [
    "CompileStage",
    "PlaceStage",
    "ReadStage",
    "register_builtin_stages",
]

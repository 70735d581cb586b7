"""Protocol interfaces for pluggable components."""

from appendsw.protocols.bundler import Bundler
from appendsw.protocols.pipeline_stage import PipelineStage

__all__ = [
    "Bundler",
    "PipelineStage",
]

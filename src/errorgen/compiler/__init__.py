"""Error declaration expansion pipeline for errorgen."""

from errorgen.compiler.pipeline import ExpansionPipeline, ExpansionResult

__all__ = [
    "ExpansionPipeline",
    "ExpansionResult",
]

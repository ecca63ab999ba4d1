"""Entry points for building pipelines of operations."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from .agent_ops import Extract, Lookup, Prompt
from .op import Map, Op, Then

_STAGE_MESSAGES = {
    "prompt": "Failed to prompt agent",
    "lookup": "Failed to lookup documents",
}


class ChainError(Exception):
    """Failure of a pipeline stage: either prompting an agent or looking up documents."""

    def __init__(self, stage: str, error: Any) -> None:
        if stage not in _STAGE_MESSAGES:
            raise ValueError(
                f"unknown pipeline stage {stage!r}; expected one of {sorted(_STAGE_MESSAGES)}"
            )
        super().__init__(f"{_STAGE_MESSAGES[stage]}: {error}")
        self.stage = stage
        self.error = error


class PipelineBuilder:
    """Starting point of a pipeline; each method returns the pipeline's first op."""

    def __init__(self, error_type: type = ChainError) -> None:
        self.error_type = error_type

    def map(self, f: Callable[[Any], Any]) -> Map:
        """Start the pipeline with the plain function ``f``."""
        return Map(f)

    def then(self, f: Callable[[Any], Awaitable[Any]]) -> Then:
        """Start the pipeline with the async function ``f``."""
        return Then(f)

    def chain(self, op: Op) -> Op:
        """Start the pipeline with an arbitrary op."""
        return op

    def lookup(self, index: Any, n: int) -> Lookup:
        """Start the pipeline with a lookup of the top ``n`` documents of ``index``."""
        return Lookup(index, n)

    def prompt(self, agent: Any) -> Prompt:
        """Start the pipeline by prompting ``agent`` with the input."""
        return Prompt(agent)

    def extract(self, extractor: Any) -> Extract:
        """Start the pipeline by extracting structured data from the input."""
        return Extract(extractor)


def new() -> PipelineBuilder:
    """Create a pipeline builder whose error type is :class:`ChainError`."""
    return PipelineBuilder(ChainError)


def with_error(error_type: type) -> PipelineBuilder:
    """Create a pipeline builder with a custom error type."""
    return PipelineBuilder(error_type)
"""Operations that call out to vector-store indexes, prompt models and extractors."""

from __future__ import annotations

from typing import Any

from .op import Op
from .result import Err, Ok


class Lookup(Op):
    """Semantic search: return the top ``n`` documents of ``index`` closest to the input.

    ``index`` must provide ``async top_n(query, n)`` returning
    ``(score, id, document)`` triples. Failures of the index become ``Err``.
    """

    def __init__(self, index: Any, n: int) -> None:
        self.index = index
        self.n = n

    async def call(self, input: Any) -> Ok | Err:
        query = str(input)
        try:
            docs = await self.index.top_n(query, self.n)
        except Exception as exc:
            return Err(exc)
        return Ok(list(docs))


class Prompt(Op):
    """Prompt ``model`` with the input and return its response.

    ``model`` must provide ``async prompt(text)``. Failures become ``Err``.
    """

    def __init__(self, model: Any) -> None:
        self.model = model

    async def call(self, input: Any) -> Ok | Err:
        try:
            response = await self.model.prompt(str(input))
        except Exception as exc:
            return Err(exc)
        return Ok(response)


class Extract(Op):
    """Extract structured data from the input with ``extractor``.

    ``extractor`` must provide ``async extract(text)``. Failures become ``Err``.
    """

    def __init__(self, extractor: Any) -> None:
        self.extractor = extractor

    async def call(self, input: Any) -> Ok | Err:
        try:
            data = await self.extractor.extract(str(input))
        except Exception as exc:
            return Err(exc)
        return Ok(data)


def lookup(index: Any, n: int) -> Lookup:
    """Create a lookup op returning the top ``n`` results of ``index`` for the input."""
    return Lookup(index, n)


def prompt(model: Any) -> Prompt:
    """Create an op that prompts ``model`` with the input and returns the response."""
    return Prompt(model)


def extract(extractor: Any) -> Extract:
    """Create an op that extracts structured data from the input with ``extractor``."""
    return Extract(extractor)
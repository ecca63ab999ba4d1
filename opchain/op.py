"""Core asynchronous operations and their sequential combinators."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections import deque
from contextlib import aclosing
from typing import Any, AsyncIterator, Awaitable, Callable, Iterable

from .result import Err, Ok


async def _buffered(
    n: int, inputs: Iterable[Any], fn: Callable[[Any], Awaitable[Any]]
) -> AsyncIterator[Any]:
    """Run ``fn`` over ``inputs`` with at most ``n`` in flight, yielding in input order."""
    if n < 1:
        raise ValueError("concurrency limit must be at least 1")
    pending: deque[asyncio.Future] = deque()
    try:
        for item in inputs:
            pending.append(asyncio.ensure_future(fn(item)))
            if len(pending) >= n:
                yield await pending.popleft()
        while pending:
            yield await pending.popleft()
    finally:
        for task in pending:
            task.cancel()


class Op(ABC):
    """An asynchronous operation taking one input and producing one output.

    Operations whose output is an :class:`Ok` or :class:`Err` are fallible and
    can also be driven with :meth:`try_call` and the ``*_ok``/``*_err`` combinators.
    """

    @abstractmethod
    async def call(self, input: Any) -> Any:
        """Run the operation on ``input``."""

    async def batch_call(self, n: int, inputs: Iterable[Any]) -> list[Any]:
        """Run the operation on every input, at most ``n`` at a time, keeping order."""
        async with aclosing(_buffered(n, inputs, self.call)) as results:
            return [output async for output in results]

    def map(self, f: Callable[[Any], Any]) -> Sequential:
        """Feed this op's output through the plain function ``f``."""
        return Sequential(self, Map(f))

    def then(self, f: Callable[[Any], Awaitable[Any]]) -> Sequential:
        """Feed this op's output through the async function ``f``."""
        return Sequential(self, Then(f))

    def chain(self, op: Op) -> Sequential:
        """Feed this op's output into ``op``."""
        return Sequential(self, op)

    def lookup(self, index: Any, n: int) -> Sequential:
        """Use this op's output as a query for the top ``n`` documents of ``index``."""
        from .agent_ops import Lookup

        return Sequential(self, Lookup(index, n))

    def prompt(self, prompt: Any) -> Sequential:
        """Use this op's output to prompt ``prompt`` and return its response."""
        from .agent_ops import Prompt

        return Sequential(self, Prompt(prompt))

    async def try_call(self, input: Any) -> Ok | Err:
        """Run the operation and return its result, which must be ``Ok`` or ``Err``."""
        result = await self.call(input)
        if not isinstance(result, (Ok, Err)):
            raise TypeError(
                f"{type(self).__name__} produced {type(result).__name__}, expected Ok or Err"
            )
        return result

    async def try_batch_call(self, n: int, inputs: Iterable[Any]) -> Ok | Err:
        """Run the operation on every input, at most ``n`` at a time.

        Returns ``Ok`` with all success values in input order, or the first
        ``Err`` in input order, in which case the remaining work is cancelled.
        """
        values = []
        async with aclosing(_buffered(n, inputs, self.try_call)) as results:
            async for result in results:
                if isinstance(result, Err):
                    return result
                values.append(result.value)
        return Ok(values)

    def map_ok(self, f: Callable[[Any], Any]) -> Op:
        """Transform the success value with ``f``."""
        from .try_op import MapOk

        return MapOk(self, Map(f))

    def map_err(self, f: Callable[[Any], Any]) -> Op:
        """Transform the error value with ``f``."""
        from .try_op import MapErr

        return MapErr(self, Map(f))

    def and_then(self, f: Callable[[Any], Awaitable[Any]]) -> Op:
        """On success, continue with async ``f`` which itself returns ``Ok`` or ``Err``."""
        from .try_op import AndThen

        return AndThen(self, Then(f))

    def or_else(self, f: Callable[[Any], Awaitable[Any]]) -> Op:
        """On failure, recover with async ``f`` which itself returns ``Ok`` or ``Err``."""
        from .try_op import OrElse

        return OrElse(self, Then(f))

    def chain_ok(self, op: Op) -> Op:
        """On success, feed the success value into ``op``."""
        from .try_op import TrySequential

        return TrySequential(self, op)


class Sequential(Op):
    """Run ``prev`` and then ``op`` on its output."""

    def __init__(self, prev: Op, op: Op) -> None:
        self.prev = prev
        self.op = op

    async def call(self, input: Any) -> Any:
        return await self.op.call(await self.prev.call(input))


class Map(Op):
    """Apply a plain function to the input."""

    def __init__(self, f: Callable[[Any], Any]) -> None:
        self.f = f

    async def call(self, input: Any) -> Any:
        return self.f(input)


class Passthrough(Op):
    """Return the input unchanged."""

    async def call(self, input: Any) -> Any:
        return input


class Then(Op):
    """Apply an async function to the input and await its result."""

    def __init__(self, f: Callable[[Any], Awaitable[Any]]) -> None:
        self.f = f

    async def call(self, input: Any) -> Any:
        return await self.f(input)


def map(f: Callable[[Any], Any]) -> Map:
    """Create a standalone op applying the plain function ``f``."""
    return Map(f)


def passthrough() -> Passthrough:
    """Create an op that returns its input unchanged."""
    return Passthrough()


def then(f: Callable[[Any], Awaitable[Any]]) -> Then:
    """Create a standalone op applying the async function ``f``."""
    return Then(f)
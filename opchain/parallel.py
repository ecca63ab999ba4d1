"""Running operations concurrently on the same input."""

from __future__ import annotations

import asyncio
from typing import Any

from .op import Op
from .result import Err, Ok


class Parallel(Op):
    """Run ``op1`` and ``op2`` concurrently on the same input and pair their outputs."""

    def __init__(self, op1: Op, op2: Op) -> None:
        self.op1 = op1
        self.op2 = op2

    async def call(self, input: Any) -> tuple[Any, Any]:
        first, second = await asyncio.gather(self.op1.call(input), self.op2.call(input))
        return first, second

    async def try_call(self, input: Any) -> Ok | Err:
        """Run both ops as fallible ops.

        Returns ``Ok`` with the pair of success values, or the first ``Err``
        to arrive, in which case the other op is cancelled.
        """
        tasks = [
            asyncio.ensure_future(self.op1.try_call(input)),
            asyncio.ensure_future(self.op2.try_call(input)),
        ]
        try:
            pending = set(tasks)
            while pending:
                done, pending = await asyncio.wait(
                    pending, return_when=asyncio.FIRST_COMPLETED
                )
                for task in tasks:
                    if task in done:
                        result = task.result()
                        if isinstance(result, Err):
                            return result
            first, second = (task.result() for task in tasks)
            return Ok((first.value, second.value))
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()


def _nest(ops: tuple[Op, ...]) -> Parallel:
    if len(ops) < 2:
        raise ValueError("at least two operations are required")
    nested = Parallel(ops[-2], ops[-1])
    for op in reversed(ops[:-2]):
        nested = Parallel(op, nested)
    return nested


def _flattener(count: int):
    def flatten(output: Any) -> tuple[Any, ...]:
        values = []
        for _ in range(count - 1):
            head, output = output
            values.append(head)
        values.append(output)
        return tuple(values)

    return flatten


def parallel(*args: Op) -> Op:
    """Run all ``args`` concurrently on the same input; output a flat tuple of their outputs."""
    return _nest(args).map(_flattener(len(args)))


def try_parallel(*args: Op) -> Op:
    """Run fallible ``args`` concurrently; output ``Ok`` of a flat tuple, or the first ``Err``."""
    return _nest(args).map_ok(_flattener(len(args)))
"""Combinators over fallible operations whose outputs are ``Ok`` or ``Err``."""

from __future__ import annotations

from typing import Any

from .op import Op
from .result import Err, Ok


class _Pair(Op):
    """An op built from a fallible ``prev`` op and a follow-up ``op``."""

    def __init__(self, prev: Op, op: Op) -> None:
        self.prev = prev
        self.op = op


class MapOk(_Pair):
    """Pass the success value of ``prev`` through ``op``; errors are kept as they are."""

    async def call(self, input: Any) -> Ok | Err:
        result = await self.prev.try_call(input)
        if isinstance(result, Err):
            return result
        return Ok(await self.op.call(result.value))


class MapErr(_Pair):
    """Pass the error value of ``prev`` through ``op``; successes are kept as they are."""

    async def call(self, input: Any) -> Ok | Err:
        result = await self.prev.try_call(input)
        if isinstance(result, Ok):
            return result
        return Err(await self.op.call(result.error))


class AndThen(_Pair):
    """On success of ``prev``, run the fallible ``op`` on the success value."""

    async def call(self, input: Any) -> Ok | Err:
        result = await self.prev.try_call(input)
        if isinstance(result, Err):
            return result
        return await self.op.try_call(result.value)


class OrElse(_Pair):
    """On failure of ``prev``, run the fallible ``op`` on the error value."""

    async def call(self, input: Any) -> Ok | Err:
        result = await self.prev.try_call(input)
        if isinstance(result, Ok):
            return result
        return await self.op.try_call(result.error)


class TrySequential(_Pair):
    """On success of ``prev``, feed the success value into the infallible ``op``."""

    async def call(self, input: Any) -> Ok | Err:
        result = await self.prev.try_call(input)
        if isinstance(result, Err):
            return result
        return Ok(await self.op.call(result.value))
"""A non-empty sequence: one item, optionally followed by more."""

from __future__ import annotations

from itertools import chain
from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class EmptyListError(ValueError):
    """Raised when a :class:`OneOrMany` would be built from no items."""

    def __init__(self) -> None:
        super().__init__("Cannot create OneOrMany with an empty vector.")


class OneOrMany(Generic[T]):
    """Either a single item or a list of items, but never empty.

    Build instances with :meth:`one`, :meth:`many` or :meth:`merge`.
    """

    __slots__ = ("_first", "_rest")

    def __init__(self, first: T, rest: Iterable[T] = ()) -> None:
        self._first = first
        self._rest = list(rest)

    @classmethod
    def one(cls, item: T) -> OneOrMany[T]:
        """Create an instance holding the single ``item``."""
        return cls(item)

    @classmethod
    def many(cls, items: Iterable[T]) -> OneOrMany[T]:
        """Create an instance from ``items``; raise :class:`EmptyListError` if there are none."""
        iterator = iter(items)
        try:
            first = next(iterator)
        except StopIteration:
            raise EmptyListError() from None
        return cls(first, iterator)

    @classmethod
    def merge(cls, groups: Iterable[OneOrMany[T]]) -> OneOrMany[T]:
        """Concatenate several instances into one; raise :class:`EmptyListError` if given none."""
        return cls.many(chain.from_iterable(groups))

    def first(self) -> T:
        """Return the first item."""
        return self._first

    def rest(self) -> list[T]:
        """Return a copy of the items after the first."""
        return list(self._rest)

    def push(self, item: T) -> None:
        """Append ``item`` at the end."""
        self._rest.append(item)

    def __len__(self) -> int:
        return 1 + len(self._rest)

    def __iter__(self) -> Iterator[T]:
        yield self._first
        yield from self._rest

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OneOrMany):
            return NotImplemented
        return self._first == other._first and self._rest == other._rest

    def __repr__(self) -> str:
        return f"OneOrMany({list(self)!r})"
"""Nested pairs that represent an ordered list of values, built from and turned into tuples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar, Union

V = TypeVar("V")


@dataclass(frozen=True)
class NoneMore:
    """The end of a recursive list; holds no value."""

    def into_tuple(self) -> tuple:
        """An empty list becomes the empty tuple."""
        return ()


@dataclass(frozen=True)
class Recursive(Generic[V]):
    """A list node: every value before this one lives in `inner`, this one in `value`."""

    inner: Union["Recursive[Any]", NoneMore]
    value: V

    def into_tuple(self) -> tuple:
        """The values of this list in order, the innermost first."""
        return into_tuple(self)


def into_recursive(values: Iterable[Any] | Recursive[Any] | NoneMore) -> Recursive[Any] | NoneMore:
    """Build a recursive list whose outermost value is the last of `values`.

    A value that already is a recursive list is returned as it is.
    """
    if isinstance(values, (NoneMore, Recursive)):
        return values

    node: Recursive[Any] | NoneMore = NoneMore()
    for value in values:
        node = Recursive(node, value)
    return node


def into_tuple(recursive: Recursive[Any] | NoneMore) -> tuple:
    """Flatten a recursive list into a tuple, the innermost value first."""
    values = []
    node: Any = recursive
    while isinstance(node, Recursive):
        values.append(node.value)
        node = node.inner

    if not isinstance(node, NoneMore):
        raise TypeError(f"expected a recursive list ending in NoneMore, found {node!r}")

    values.reverse()
    return tuple(values)
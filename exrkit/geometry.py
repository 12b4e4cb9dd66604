"""Two-dimensional vectors and integer rounding helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Iterator, TypeVar

from .binio import InvalidError

T = TypeVar("T")

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Vec2(Generic[T]):
    """A pair of numbers, used as a position or a size."""

    x: T
    y: T

    def __iter__(self) -> Iterator[T]:
        yield self.x
        yield self.y

    def max(self, other: "Vec2[T]") -> "Vec2[T]":
        """Component-wise maximum."""
        return Vec2(max(self.x, other.x), max(self.y, other.y))

    def min(self, other: "Vec2[T]") -> "Vec2[T]":
        """Component-wise minimum."""
        return Vec2(min(self.x, other.x), min(self.y, other.y))

    def area(self) -> Any:
        """Width times height."""
        return self.x * self.y

    def width(self) -> T:
        return self.x

    def height(self) -> T:
        return self.y

    def flat_index_for_size(self, resolution: "Vec2[int]") -> int:
        """Index of this position in a row-major array of the given resolution."""
        if not (0 <= self.x < resolution.x and 0 <= self.y < resolution.y):
            raise IndexError(f"{self} is invalid for resolution {resolution}")
        return self.y * resolution.x + self.x

    def to_usize(self, error_message: str) -> "Vec2[int]":
        """Return this vector, raising InvalidError if a component is negative."""
        if self.x < 0 or self.y < 0:
            raise InvalidError(error_message)
        return Vec2(int(self.x), int(self.y))

    def to_i32(self) -> "Vec2[int]":
        """Return this vector, raising OverflowError if it does not fit 32-bit integers."""
        if not _I32_MIN <= self.x <= _I32_MAX:
            raise OverflowError("vector x coordinate too large")
        if not _I32_MIN <= self.y <= _I32_MAX:
            raise OverflowError("vector y coordinate too large")
        return Vec2(int(self.x), int(self.y))

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x * other.x, self.y * other.y)

    def __floordiv__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x // other.x, self.y // other.y)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)


def floor_log_2(number: int) -> int:
    """floor(log2(number)), or 0 for 0."""
    if number < 0:
        raise ValueError("number must not be negative")
    return number.bit_length() - 1 if number > 1 else 0


def ceil_log_2(number: int) -> int:
    """ceil(log2(number)), or 0 for 0."""
    if number < 0:
        raise ValueError("number must not be negative")
    return (number - 1).bit_length() if number > 1 else 0


class RoundingMode(Enum):
    """Whether to round down or up in level calculations."""

    DOWN = "down"
    UP = "up"

    def log2(self, number: int) -> int:
        return ceil_log_2(number) if self is RoundingMode.UP else floor_log_2(number)

    def divide(self, dividend: int, divisor: int) -> int:
        """Integer division rounding in this mode; intended for positive numbers."""
        if self is RoundingMode.UP:
            return (dividend + divisor - 1) // divisor
        return dividend // divisor
"""Integer and float rectangles in two-dimensional space."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .binio import InvalidError, Primitive
from .geometry import Vec2

_MAX_BOX_COORDINATE = (2**31 - 1) // 2


def _as_vec2(value: Any) -> Vec2:
    if isinstance(value, Vec2):
        return value
    x, y = value
    return Vec2(x, y)


def _validate_min_max(min_x: int, min_y: int, max_x: int, max_y: int) -> None:
    if (
        max_x >= _MAX_BOX_COORDINATE
        or max_y >= _MAX_BOX_COORDINATE
        or min_x <= -_MAX_BOX_COORDINATE
        or min_y <= -_MAX_BOX_COORDINATE
    ):
        raise InvalidError("window size exceeding integer maximum")


@dataclass(frozen=True)
class IntegerBounds:
    """A rectangle of pixels: a top-left position and a non-negative size."""

    position: Vec2 = field(default_factory=lambda: Vec2(0, 0))
    size: Vec2 = field(default_factory=lambda: Vec2(0, 0))

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_vec2(self.position))
        object.__setattr__(self, "size", _as_vec2(self.size))

    @staticmethod
    def zero() -> "IntegerBounds":
        """An empty rectangle at the origin."""
        return IntegerBounds(Vec2(0, 0), Vec2(0, 0))

    @staticmethod
    def from_dimensions(size: Any) -> "IntegerBounds":
        """A rectangle of the given size at the origin."""
        return IntegerBounds(Vec2(0, 0), _as_vec2(size))

    def end(self) -> Vec2:
        """The first coordinate past the rectangle, in both directions."""
        return self.position + self.size.to_i32()

    def max(self) -> Vec2:
        """The largest coordinate inside the rectangle."""
        return self.end() - Vec2(1, 1)

    def validate(self, max_size: Any = None) -> None:
        """Raise InvalidError if the rectangle is too large or out of range."""
        if max_size is not None:
            max_size = _as_vec2(max_size)
            if self.size.x > max_size.x or self.size.y > max_size.y:
                raise InvalidError("window attribute dimension value")

        _validate_min_max(
            self.position.x,
            self.position.y,
            self.position.x + self.size.x,
            self.position.y + self.size.y,
        )

    def write(self, stream: Any) -> None:
        """Write minimum and inclusive maximum coordinates as four i32."""
        max_x, max_y = self.max()
        Primitive.I32.write_many(stream, (self.position.x, self.position.y, max_x, max_y))

    @staticmethod
    def read(stream: Any) -> "IntegerBounds":
        """Read four i32 coordinates; swapped corners are put in order."""
        x_min, y_min, x_max, y_max = Primitive.I32.read_many(stream, 4)
        min_x, max_x = sorted((x_min, x_max))
        min_y, max_y = sorted((y_min, y_max))

        _validate_min_max(min_x, min_y, max_x, max_y)

        size = Vec2(max_x + 1 - min_x, max_y + 1 - min_y).to_usize("box coordinates")
        return IntegerBounds(Vec2(min_x, min_y), size)

    def with_origin(self, origin: Any) -> "IntegerBounds":
        """This rectangle moved by `origin`."""
        return replace(self, position=self.position + _as_vec2(origin))

    def contains(self, subset: "IntegerBounds") -> bool:
        """Whether `subset` lies entirely within this rectangle."""
        own_end = self.end()
        subset_end = subset.end()
        return (
            subset.position.x >= self.position.x
            and subset.position.y >= self.position.y
            and subset_end.x <= own_end.x
            and subset_end.y <= own_end.y
        )


@dataclass(frozen=True)
class FloatRect:
    """A rectangle in float space, both corners inclusive."""

    min: Vec2
    max: Vec2

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", _as_vec2(self.min))
        object.__setattr__(self, "max", _as_vec2(self.max))

    def write(self, stream: Any) -> None:
        """Write the four corner coordinates as f32."""
        Primitive.F32.write_many(stream, (self.min.x, self.min.y, self.max.x, self.max.y))

    @staticmethod
    def read(stream: Any) -> "FloatRect":
        """Read four f32 corner coordinates."""
        x_min, y_min, x_max, y_max = Primitive.F32.read_many(stream, 4)
        return FloatRect(Vec2(x_min, y_min), Vec2(x_max, y_max))
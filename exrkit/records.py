"""Fixed-size attribute records: film key codes and color space chromaticities."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import Any, ClassVar

from .binio import Primitive
from .geometry import Vec2


def _as_vec2(value: Any) -> Vec2:
    if isinstance(value, Vec2):
        return value
    x, y = value
    return Vec2(x, y)


@dataclass(frozen=True)
class KeyCode:
    """Uniquely identifies a motion picture film frame."""

    BYTE_SIZE: ClassVar[int] = 7 * 4

    film_manufacturer_code: int
    film_type: int
    film_roll_prefix: int
    count: int
    perforation_offset: int
    perforations_per_frame: int
    perforations_per_count: int

    def write(self, stream: Any) -> None:
        """Write all fields as i32, without validating."""
        Primitive.I32.write_many(stream, astuple(self))

    @staticmethod
    def read(stream: Any) -> "KeyCode":
        """Read all fields as i32, without validating."""
        return KeyCode(*Primitive.I32.read_many(stream, 7))


@dataclass(frozen=True)
class Chromaticities:
    """Primaries and white point on the CIE xy chromaticity diagram."""

    BYTE_SIZE: ClassVar[int] = 8 * 4

    red: Vec2
    green: Vec2
    blue: Vec2
    white: Vec2

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "white"):
            object.__setattr__(self, name, _as_vec2(getattr(self, name)))

    def write(self, stream: Any) -> None:
        """Write the four points as eight f32, without validating."""
        Primitive.F32.write_many(
            stream, (*self.red, *self.green, *self.blue, *self.white)
        )

    @staticmethod
    def read(stream: Any) -> "Chromaticities":
        """Read eight f32 as four points, without validating."""
        values = Primitive.F32.read_many(stream, 8)
        points = [Vec2(values[i], values[i + 1]) for i in range(0, 8, 2)]
        return Chromaticities(*points)
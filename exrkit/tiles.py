"""Tile layouts, resolution level modes and preview images."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from .binio import InvalidError, Primitive
from .geometry import RoundingMode, Vec2

_MAX_TILE_SIZE = (2**31 - 1) // 2
_PREVIEW_SOFT_MAX = 1024 * 1024 * 4

_ROUNDING_CODES = {RoundingMode.DOWN: 0, RoundingMode.UP: 1}
_ROUNDING_BY_CODE = {code: mode for mode, code in _ROUNDING_CODES.items()}


def _as_vec2(value: Any) -> Vec2:
    if isinstance(value, Vec2):
        return value
    x, y = value
    return Vec2(x, y)


class LevelMode(Enum):
    """Whether smaller versions of the image are stored as well."""

    SINGULAR = 0
    MIP_MAP = 1
    RIP_MAP = 2


@dataclass(frozen=True)
class TileDescription:
    """How a layer is divided into tiles, and which resolution levels it holds."""

    BYTE_SIZE: ClassVar[int] = 2 * 4 + 1

    tile_size: Vec2
    level_mode: LevelMode = LevelMode.SINGULAR
    rounding_mode: RoundingMode = RoundingMode.DOWN

    def __post_init__(self) -> None:
        object.__setattr__(self, "tile_size", _as_vec2(self.tile_size))

    def write(self, stream: Any) -> None:
        """Write the tile size and the combined level and rounding mode byte."""
        Primitive.U32.write(stream, self.tile_size.x)
        Primitive.U32.write(stream, self.tile_size.y)
        mode = self.level_mode.value + _ROUNDING_CODES[self.rounding_mode] * 16
        Primitive.U8.write(stream, mode)

    @staticmethod
    def read(stream: Any) -> "TileDescription":
        """Read a tile description without validating the tile size."""
        x_size = Primitive.U32.read(stream)
        y_size = Primitive.U32.read(stream)
        mode = Primitive.U8.read(stream)

        try:
            level_mode = LevelMode(mode & 0x0F)
        except ValueError:
            raise InvalidError("tile description level mode") from None

        rounding_mode = _ROUNDING_BY_CODE.get(mode >> 4)
        if rounding_mode is None:
            raise InvalidError("tile description rounding mode")

        return TileDescription(Vec2(x_size, y_size), level_mode, rounding_mode)

    def validate(self) -> None:
        """Raise InvalidError if the tile size is zero or too large."""
        width, height = self.tile_size
        if width == 0 or height == 0 or width >= _MAX_TILE_SIZE or height >= _MAX_TILE_SIZE:
            raise InvalidError("tile size")


@dataclass(frozen=True)
class Preview:
    """A small rgba image of signed bytes approximating the real image."""

    size: Vec2
    pixel_data: tuple = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", _as_vec2(self.size))
        object.__setattr__(self, "pixel_data", tuple(self.pixel_data))

    def __repr__(self) -> str:
        return f"Preview ({self.size.x}x{self.size.y} px)"

    def byte_size(self) -> int:
        """Number of bytes this preview occupies in a file."""
        return 2 * Primitive.U32.byte_size() + len(self.pixel_data)

    def write(self, stream: Any) -> None:
        """Write the size and the pixel bytes, without validating."""
        Primitive.U32.write(stream, self.size.x)
        Primitive.U32.write(stream, self.size.y)
        Primitive.I8.write_many(stream, self.pixel_data)

    @staticmethod
    def read(stream: Any) -> "Preview":
        """Read the size, then four bytes for each pixel."""
        width = Primitive.U32.read(stream)
        height = Primitive.U32.read(stream)
        pixel_data = Primitive.I8.read_vec(
            stream, width * height * 4, _PREVIEW_SOFT_MAX, None, "preview attribute pixel count"
        )
        return Preview(Vec2(width, height), pixel_data)

    def validate(self, strict: bool) -> None:
        """If strict, raise InvalidError when the data length does not match the size."""
        if strict and self.size.area() * 4 != len(self.pixel_data):
            raise InvalidError("preview dimensions do not match content length")
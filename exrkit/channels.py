"""Descriptions of the channels in a layer and their sample types."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator

from .binio import InvalidError, PeekRead, Primitive, UnsupportedError
from .bounds import IntegerBounds
from .geometry import Vec2
from .text import Text, has_sequence_end, write_sequence_end

_SAMPLE_TYPE_BYTE_SIZE = 4
_LUMINANCE_NAMES = ("R", "G", "B", "L", "Y", "X", "Z")


class SampleType(Enum):
    """The number type of the samples in a channel."""

    U32 = 0
    F16 = 1
    F32 = 2

    def bytes_per_sample(self) -> int:
        """How many bytes a single sample takes up."""
        return 2 if self is SampleType.F16 else 4

    def write(self, stream: Any) -> None:
        Primitive.I32.write(stream, self.value)

    @staticmethod
    def read(stream: Any) -> "SampleType":
        value = Primitive.I32.read(stream)
        try:
            return SampleType(value)
        except ValueError:
            raise InvalidError("pixel type attribute value") from None


def _as_text(name: Any) -> Text:
    return name if isinstance(name, Text) else Text(name)


def _as_vec2(value: Any) -> Vec2:
    if isinstance(value, Vec2):
        return value
    x, y = value
    return Vec2(x, y)


@dataclass(frozen=True)
class ChannelDescription:
    """Describes one channel of a layer, without its pixel data."""

    name: Text
    sample_type: SampleType
    quantize_linearly: bool
    sampling: Vec2 = field(default_factory=lambda: Vec2(1, 1))

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _as_text(self.name))
        object.__setattr__(self, "sampling", _as_vec2(self.sampling))

    @staticmethod
    def guess_quantization_linearity(name: Any) -> bool:
        """False for luminance-like channel names such as R, G or B, True otherwise."""
        name = _as_text(name)
        return not any(name.eq_case_insensitive(candidate) for candidate in _LUMINANCE_NAMES)

    @staticmethod
    def named(name: Any, sample_type: SampleType) -> "ChannelDescription":
        """A channel with linearity guessed from its name and a sampling of (1, 1)."""
        name = _as_text(name)
        return ChannelDescription(
            name, sample_type, ChannelDescription.guess_quantization_linearity(name)
        )

    def subsampled_pixels(self, dimensions: Any) -> int:
        """The number of samples this channel holds for the given layer size."""
        return self.subsampled_resolution(dimensions).area()

    def subsampled_resolution(self, dimensions: Any) -> Vec2:
        """The resolution of this channel for the given layer size."""
        return _as_vec2(dimensions) // self.sampling

    def byte_size(self) -> int:
        """Number of bytes this description occupies in a file."""
        return (
            self.name.null_terminated_byte_size()
            + _SAMPLE_TYPE_BYTE_SIZE
            + 1  # linearity
            + 3  # reserved
            + 2 * Primitive.U32.byte_size()
        )

    def write(self, stream: Any) -> None:
        self.name.write_null_terminated(stream)
        self.sample_type.write(stream)
        Primitive.U8.write(stream, 1 if self.quantize_linearly else 0)
        Primitive.I8.write_many(stream, (0, 0, 0))
        Primitive.I32.write(stream, self.sampling.x)
        Primitive.I32.write(stream, self.sampling.y)

    @staticmethod
    def read(stream: Any) -> "ChannelDescription":
        name = Text.read_null_terminated(stream, 256)
        sample_type = SampleType.read(stream)

        linearity = Primitive.U8.read(stream)
        if linearity not in (0, 1):
            raise InvalidError("channel linearity attribute value")

        Primitive.I8.read_many(stream, 3)

        x_sampling = Primitive.I32.read(stream)
        if x_sampling < 0:
            raise InvalidError("x channel sampling")
        y_sampling = Primitive.I32.read(stream)
        if y_sampling < 0:
            raise InvalidError("y channel sampling")

        return ChannelDescription(
            name, sample_type, linearity == 1, Vec2(x_sampling, y_sampling)
        )

    def validate(self, allow_sampling: bool, data_window: IntegerBounds, strict: bool) -> None:
        """Raise if this channel is invalid for the given data window."""
        self.name.validate(True, False)

        if self.sampling.x == 0 or self.sampling.y == 0:
            raise InvalidError("zero sampling factor")

        if strict and not allow_sampling and self.sampling != Vec2(1, 1):
            raise InvalidError("subsampling is only allowed in flat scan line images")

        if (
            data_window.position.x % self.sampling.x != 0
            or data_window.position.y % self.sampling.y != 0
        ):
            raise InvalidError("channel sampling factor not dividing data window position")

        if data_window.size.x % self.sampling.x != 0 or data_window.size.y % self.sampling.y != 0:
            raise InvalidError("channel sampling factor not dividing data window size")

        if self.sampling != Vec2(1, 1):
            raise UnsupportedError("channel subsampling not supported yet")


@dataclass(frozen=True)
class ChannelList:
    """The channels of a layer, expected in alphabetical order."""

    channels: tuple
    bytes_per_pixel: int = field(init=False, compare=False)
    uniform_sample_type: SampleType | None = field(init=False, compare=False)

    def __init__(self, channels: Iterable[ChannelDescription]) -> None:
        channels = tuple(channels)
        object.__setattr__(self, "channels", channels)
        object.__setattr__(
            self, "bytes_per_pixel", sum(c.sample_type.bytes_per_sample() for c in channels)
        )
        sample_types = {c.sample_type for c in channels}
        object.__setattr__(
            self,
            "uniform_sample_type",
            channels[0].sample_type if len(sample_types) == 1 else None,
        )

    def __iter__(self) -> Iterator[ChannelDescription]:
        return iter(self.channels)

    def __len__(self) -> int:
        return len(self.channels)

    def channels_with_byte_offset(self) -> Iterator[tuple[int, ChannelDescription]]:
        """Yield each channel with the byte offset of its sample within a pixel."""
        offset = 0
        for channel in self.channels:
            yield offset, channel
            offset += channel.sample_type.bytes_per_sample()

    def find_index_of_channel(self, exact_name: Any) -> int | None:
        """Index of the channel with exactly this name, or None; assumes sorted order."""
        key = _as_text(exact_name).data
        index = bisect_left(self.channels, key, key=lambda channel: channel.name.data)
        if index < len(self.channels) and self.channels[index].name.data == key:
            return index
        return None

    def byte_size(self) -> int:
        """Number of bytes this list occupies in a file."""
        return sum(channel.byte_size() for channel in self.channels) + 1

    def write(self, stream: Any) -> None:
        for channel in self.channels:
            channel.write(stream)
        write_sequence_end(stream)

    @staticmethod
    def read(stream: Any) -> "ChannelList":
        """Read channel descriptions until the terminating zero byte."""
        if not isinstance(stream, PeekRead):
            stream = PeekRead(stream)

        channels = []
        while not has_sequence_end(stream):
            channels.append(ChannelDescription.read(stream))
        return ChannelList(channels)

    def validate(self, allow_sampling: bool, data_window: IntegerBounds, strict: bool) -> None:
        """Raise if a channel is invalid or the names are not sorted (and unique, if strict)."""
        if not self.channels:
            raise InvalidError("at least one channel is required")

        first, *rest = self.channels
        first.validate(allow_sampling, data_window, strict)
        previous = first.name

        for channel in rest:
            channel.validate(allow_sampling, data_window, strict)
            name = channel.name
            if strict and previous == name:
                raise InvalidError("channel names are not unique")
            if previous > name:
                raise InvalidError("channel names are not sorted alphabetically")
            previous = name
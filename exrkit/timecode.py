"""SMPTE time codes and their packed 32-bit encodings."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .binio import InvalidError, Primitive

BYTE_SIZE = 2 * 4


def _get_bit(value: int, index: int) -> bool:
    return bool((value >> index) & 1)


def _set_bit(value: int, index: int, flag: bool) -> int:
    if flag:
        return value | (1 << index)
    return value & ~(1 << index)


def _get_bits(value: int, start: int, end: int) -> int:
    return (value >> start) & ((1 << (end - start)) - 1)


def _set_bits(value: int, start: int, end: int, bits: int) -> int:
    width = end - start
    if bits >> width:
        raise ValueError(f"value {bits} does not fit into {width} bits")
    mask = ((1 << width) - 1) << start
    return (value & ~mask) | (bits << start)


def _to_decimal_code(binary: int) -> int:
    units = binary % 10
    tens = (binary // 10) % 10
    return units | (tens << 4)


def _from_decimal_code(coded: int) -> int:
    return (coded & 0x0F) + 10 * ((coded >> 4) & 0x0F)


def _user_data_bits(group_index: int) -> tuple[int, int]:
    start = 4 * group_index
    return start, start + 4


def _unpack_user_data(user_data: int) -> tuple[int, ...]:
    return tuple(_get_bits(user_data, *_user_data_bits(index)) for index in range(8))


@dataclass(frozen=True)
class TimeCode:
    """Time information of a frame within a sequence."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    frame: int = 0
    drop_frame: bool = False
    color_frame: bool = False
    field_phase: bool = False
    binary_group_flags: tuple = field(default=(False, False, False))
    binary_groups: tuple = field(default=(0,) * 8)

    def __post_init__(self) -> None:
        flags = tuple(bool(flag) for flag in self.binary_group_flags)
        groups = tuple(int(group) for group in self.binary_groups)
        if len(flags) != 3:
            raise ValueError("a time code has exactly 3 binary group flags")
        if len(groups) != 8:
            raise ValueError("a time code has exactly 8 binary groups")
        object.__setattr__(self, "binary_group_flags", flags)
        object.__setattr__(self, "binary_groups", groups)

    def validate(self, strict: bool) -> None:
        """Raise InvalidError if strict and a field is out of its range."""
        if not strict:
            return
        if self.frame > 29:
            raise InvalidError("time code frame larger than 29")
        if self.seconds > 59:
            raise InvalidError("time code seconds larger than 59")
        if self.minutes > 59:
            raise InvalidError("time code minutes larger than 59")
        if self.hours > 23:
            raise InvalidError("time code hours larger than 23")
        if any(group > 15 for group in self.binary_groups):
            raise InvalidError("time code binary group value too large for 3 bits")
        if min(self.frame, self.seconds, self.minutes, self.hours, *self.binary_groups) < 0:
            raise InvalidError("time code values must not be negative")

    def pack_time_as_tv60_u32(self) -> int:
        """Pack the time into a u32 using TV60 packing."""
        self.validate(True)

        packed = 0
        packed = _set_bits(packed, 0, 6, _to_decimal_code(self.frame))
        packed = _set_bit(packed, 6, self.drop_frame)
        packed = _set_bit(packed, 7, self.color_frame)
        packed = _set_bits(packed, 8, 15, _to_decimal_code(self.seconds))
        packed = _set_bit(packed, 15, self.field_phase)
        packed = _set_bits(packed, 16, 23, _to_decimal_code(self.minutes))
        packed = _set_bit(packed, 23, self.binary_group_flags[0])
        packed = _set_bits(packed, 24, 30, _to_decimal_code(self.hours))
        packed = _set_bit(packed, 30, self.binary_group_flags[1])
        packed = _set_bit(packed, 31, self.binary_group_flags[2])
        return packed

    @staticmethod
    def from_tv60_time(tv60_time: int, user_data: int) -> "TimeCode":
        """Unpack a TV60 packed time and the packed user data."""
        return TimeCode(
            frame=_from_decimal_code(_get_bits(tv60_time, 0, 6)),
            drop_frame=_get_bit(tv60_time, 6),
            color_frame=_get_bit(tv60_time, 7),
            seconds=_from_decimal_code(_get_bits(tv60_time, 8, 15)),
            field_phase=_get_bit(tv60_time, 15),
            minutes=_from_decimal_code(_get_bits(tv60_time, 16, 23)),
            hours=_from_decimal_code(_get_bits(tv60_time, 24, 30)),
            binary_group_flags=(
                _get_bit(tv60_time, 23),
                _get_bit(tv60_time, 30),
                _get_bit(tv60_time, 31),
            ),
            binary_groups=_unpack_user_data(user_data),
        )

    def pack_time_as_tv50_u32(self) -> int:
        """Pack the time using TV50 packing; the drop frame flag is lost."""
        packed = self.pack_time_as_tv60_u32()
        packed = _set_bit(packed, 6, False)
        packed = _set_bit(packed, 15, self.binary_group_flags[0])
        packed = _set_bit(packed, 30, self.binary_group_flags[1])
        packed = _set_bit(packed, 23, self.binary_group_flags[2])
        packed = _set_bit(packed, 31, self.field_phase)
        return packed

    @staticmethod
    def from_tv50_time(tv50_time: int, user_data: int) -> "TimeCode":
        """Unpack a TV50 packed time; the drop frame flag is always false."""
        return replace(
            TimeCode.from_tv60_time(tv50_time, user_data),
            drop_frame=False,
            field_phase=_get_bit(tv50_time, 31),
            binary_group_flags=(
                _get_bit(tv50_time, 15),
                _get_bit(tv50_time, 30),
                _get_bit(tv50_time, 23),
            ),
        )

    def pack_time_as_film24_u32(self) -> int:
        """Pack the time using FILM24 packing; drop and color frame flags are lost."""
        packed = self.pack_time_as_tv60_u32()
        packed = _set_bit(packed, 6, False)
        return _set_bit(packed, 7, False)

    @staticmethod
    def from_film24_time(film24_time: int, user_data: int) -> "TimeCode":
        """Unpack a FILM24 packed time; drop and color frame flags are always false."""
        return replace(
            TimeCode.from_tv60_time(film24_time, user_data),
            drop_frame=False,
            color_frame=False,
        )

    def pack_user_data_as_u32(self) -> int:
        """Pack the binary groups into a u32, clamping each to 15."""
        packed = 0
        for index, group in enumerate(self.binary_groups):
            packed = _set_bits(packed, *_user_data_bits(index), min(max(group, 0), 15))
        return packed

    def write(self, stream: Any) -> None:
        """Write as TV60 time and user data; raises InvalidError for invalid fields."""
        Primitive.U32.write(stream, self.pack_time_as_tv60_u32())
        Primitive.U32.write(stream, self.pack_user_data_as_u32())

    @staticmethod
    def read(stream: Any) -> "TimeCode":
        """Read a TV60 time and user data, without validating."""
        time_and_flags = Primitive.U32.read(stream)
        user_data = Primitive.U32.read(stream)
        return TimeCode.from_tv60_time(time_and_flags, user_data)
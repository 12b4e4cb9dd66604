"""Byte strings as stored in image attributes, where every byte is one character."""

from __future__ import annotations

from functools import total_ordering
from typing import Any, Iterable, Iterator

from .binio import InvalidError, Primitive

_SEQUENCE_END = 0


def write_sequence_end(stream: Any) -> None:
    """Write the zero byte that ends a sequence."""
    Primitive.U8.write(stream, _SEQUENCE_END)


def has_sequence_end(stream: Any) -> bool:
    """Consume the sequence-ending zero byte if it is next in the peekable stream."""
    return stream.skip_if_eq(_SEQUENCE_END)


@total_ordering
class Text:
    """A string of single-byte characters (code points 0 to 255)."""

    __slots__ = ("_data",)

    def __init__(self, value: str | bytes | bytearray = "") -> None:
        if isinstance(value, str):
            try:
                data = value.encode("latin-1")
            except UnicodeEncodeError as error:
                raise ValueError(f"text contains unsupported characters: {value!r}") from error
        else:
            data = bytes(value)
        self._data = data

    @staticmethod
    def new_or_none(string: str) -> "Text | None":
        """Create a text from a string, or None if a character does not fit a byte."""
        try:
            return Text(string)
        except ValueError:
            return None

    @staticmethod
    def from_bytes(data: Iterable[int] | bytes) -> "Text":
        """Create a text from bytes without checking them."""
        return Text(bytes(data))

    @property
    def data(self) -> bytes:
        """The bytes this text is made of."""
        return self._data

    @staticmethod
    def validate_bytes(data: bytes, null_terminated: bool, check_long_names: bool) -> bool:
        """Check text bytes; return whether they need long-name support.

        Length is only checked when `check_long_names` is set.
        """
        if null_terminated and not data:
            raise InvalidError("text must not be empty")

        if check_long_names:
            if len(data) >= 256:
                raise InvalidError("text must not be longer than 255")
            return len(data) >= 32

        return False

    def validate(self, null_terminated: bool, check_long_names: bool) -> bool:
        """Check this text; return whether it needs long-name support."""
        return Text.validate_bytes(self._data, null_terminated, check_long_names)

    def null_terminated_byte_size(self) -> int:
        return len(self._data) + 1

    def i32_sized_byte_size(self) -> int:
        return len(self._data) + Primitive.I32.byte_size()

    def write_i32_sized(self, stream: Any) -> None:
        """Write the length as i32, then the bytes."""
        Primitive.I32.write(stream, len(self._data))
        stream.write(self._data)

    @staticmethod
    def read_i32_sized(stream: Any, max_size: int) -> "Text":
        """Read an i32 length, then that many bytes, at most `max_size`."""
        size = Primitive.I32.read(stream)
        if size < 0:
            raise InvalidError("vector size")
        data = Primitive.U8.read_vec(stream, size, 1024, max_size, "text attribute length")
        return Text(bytes(data))

    @staticmethod
    def read_sized(stream: Any, size: int) -> "Text":
        """Read exactly `size` bytes."""
        data = Primitive.U8.read_vec(stream, size, 1024, None, "text attribute length")
        return Text(bytes(data))

    def write_null_terminated(self, stream: Any) -> None:
        """Write the bytes followed by a zero byte."""
        if not self._data:
            raise InvalidError("text must not be empty")
        stream.write(self._data)
        write_sequence_end(stream)

    @staticmethod
    def read_null_terminated(stream: Any, max_len: int) -> "Text":
        """Read bytes up to a zero byte, consuming it.

        The first byte is always part of the text.
        """
        data = bytearray([Primitive.U8.read(stream)])
        while True:
            byte = Primitive.U8.read(stream)
            if byte == 0:
                break
            data.append(byte)
            if len(data) > max_len:
                raise InvalidError("text too long")
        return Text(bytes(data))

    @staticmethod
    def read_vec_of_i32_sized(stream: Any, total_byte_size: int) -> list["Text"]:
        """Read size-prefixed texts until `total_byte_size` bytes are consumed."""
        result = []
        processed = 0
        while processed < total_byte_size:
            text = Text.read_i32_sized(stream, total_byte_size)
            processed += text.i32_sized_byte_size()
            result.append(text)

        if processed != total_byte_size:
            raise InvalidError("text array byte size")
        return result

    @staticmethod
    def write_vec_of_i32_sized(stream: Any, texts: Iterable["Text"]) -> None:
        """Write each text with its i32 length prefix."""
        for text in texts:
            text.write_i32_sized(stream)

    def eq_case_insensitive(self, string: str) -> bool:
        """Compare with a string, ignoring capitalization."""
        return self._data.lower().decode("latin-1") == string.lower()

    def __str__(self) -> str:
        return self._data.decode("latin-1")

    def __repr__(self) -> str:
        return f"Text({str(self)!r})"

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(str(self))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Text):
            return self._data == other._data
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Text):
            return self._data < other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))
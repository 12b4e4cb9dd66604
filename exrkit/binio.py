"""Little-endian binary reading and writing with peeking and position tracking."""

from __future__ import annotations

import struct
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Callable, Iterable, TypeVar

_SKIP_CHUNK = 64 * 1024
_I32_MAX = 2**31 - 1

_R = TypeVar("_R")


class ExrError(Exception):
    """Base class of all errors raised while handling image data."""


class InvalidError(ExrError, ValueError):
    """The data is malformed or a value is out of its allowed range."""


class UnsupportedError(ExrError):
    """The data is valid but uses a feature that is not supported."""


def _read_exact(stream: Any, count: int) -> bytes:
    """Read exactly `count` bytes, raising EOFError if the stream ends early."""
    parts = []
    remaining = count
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise EOFError(
                f"expected {count} bytes, but the stream ended after {count - remaining}"
            )
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def skip_bytes(stream: Any, count: int) -> None:
    """Consume `count` bytes from the stream without keeping them."""
    if count < 0:
        raise ValueError("cannot skip a negative number of bytes")

    remaining = count
    while remaining > 0:
        chunk = stream.read(min(remaining, _SKIP_CHUNK))
        if not chunk:
            raise EOFError("cannot skip more bytes than exist")
        remaining -= len(chunk)


def attempt_delete_file_on_write_error(
    path: str | Path, write: Callable[["LateFile"], _R]
) -> _R:
    """Call `write` with a lazily created file; delete the file if `write` fails."""
    path = Path(path)
    late_file = LateFile(path)
    try:
        result = write(late_file)
    except Exception:
        late_file.close()
        try:
            path.unlink()
        except OSError:
            pass
        raise
    late_file.close()
    return result


class LateFile:
    """A writable file that is only created on the first write or seek."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._file: BinaryIO | None = None
        self._closed = False

    def _handle(self) -> BinaryIO:
        if self._closed:
            raise ValueError("I/O operation on closed file")
        if self._file is None:
            self._file = open(self.path, "wb")
        return self._file

    def write(self, data: bytes) -> int:
        return self._handle().write(data)

    def flush(self) -> None:
        if self._file is not None:
            self._file.flush()

    def seek(self, offset: int, whence: int = 0) -> int:
        return self._handle().seek(offset, whence)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        self._closed = True

    def __enter__(self) -> "LateFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class PeekRead:
    """Wraps a readable stream so that a single byte can be peeked."""

    def __init__(self, inner: Any) -> None:
        self._inner = inner
        self._peeked: int | BaseException | None = None

    def peek_u8(self) -> int:
        """Return the next byte without consuming it."""
        if self._peeked is None:
            try:
                self._peeked = _read_exact(self._inner, 1)[0]
            except (EOFError, OSError) as error:
                self._peeked = error

        if isinstance(self._peeked, BaseException):
            raise self._peeked
        return self._peeked

    def skip_if_eq(self, value: int) -> bool:
        """Consume the next byte if it equals `value`; report whether it did."""
        try:
            peeked = self.peek_u8()
        except (EOFError, OSError):
            self._peeked = None
            raise

        if peeked == value:
            self._peeked = None
            return True
        return False

    def read(self, size: int = -1) -> bytes:
        if size == 0:
            return b""

        peeked, self._peeked = self._peeked, None
        if peeked is None:
            return self._inner.read(size)
        if isinstance(peeked, BaseException):
            raise peeked

        rest = self._inner.read(size - 1 if size > 0 else -1)
        return bytes([peeked]) + rest

    def skip_to(self, position: int) -> None:
        """Move the underlying tracking reader to `position`, dropping any peeked byte."""
        self._inner.seek_read_to(position)
        self._peeked = None

    def byte_position(self) -> int:
        """Number of bytes read from the underlying tracking reader."""
        return self._inner.byte_position()


class Tracking:
    """Wraps a stream and counts the bytes read or written through it."""

    def __init__(self, inner: Any) -> None:
        self._inner = inner
        self._position = 0

    def read(self, size: int = -1) -> bytes:
        data = self._inner.read(size)
        self._position += len(data)
        return data

    def write(self, data: bytes) -> int:
        count = self._inner.write(data)
        if count is None:
            count = len(data)
        self._position += count
        return count

    def flush(self) -> None:
        self._inner.flush()

    def byte_position(self) -> int:
        return self._position

    def seek_read_to(self, target_position: int) -> None:
        """Move the reading cursor, skipping a few bytes instead of seeking when close."""
        delta = target_position - self._position
        if 0 < delta < 16:
            skip_bytes(self, delta)
            self._position = target_position
        elif delta != 0:
            self._inner.seek(target_position)
            self._position = target_position

    def seek_write_to(self, target_position: int) -> None:
        """Move the writing cursor; moving forward writes zero bytes."""
        if target_position < self._position:
            self._inner.seek(target_position)
        elif target_position > self._position:
            self.write(bytes(target_position - self._position))
        self._position = target_position


class Primitive(Enum):
    """A little-endian primitive number type."""

    U8 = "B"
    I8 = "b"
    U16 = "H"
    I16 = "h"
    U32 = "I"
    I32 = "i"
    U64 = "Q"
    I64 = "q"
    F16 = "e"
    F32 = "f"
    F64 = "d"

    def byte_size(self) -> int:
        """Number of bytes one value occupies."""
        return _STRUCTS[self].size

    def read(self, stream: Any) -> Any:
        return _STRUCTS[self].unpack(_read_exact(stream, self.byte_size()))[0]

    def write(self, stream: Any, value: Any) -> None:
        try:
            data = _STRUCTS[self].pack(value)
        except struct.error as error:
            raise InvalidError(f"value {value!r} does not fit into {self.name}") from error
        stream.write(data)

    def read_many(self, stream: Any, count: int) -> list:
        """Read exactly `count` values."""
        data = _read_exact(stream, count * self.byte_size())
        return list(struct.unpack(f"<{count}{self.value}", data))

    def write_many(self, stream: Any, values: Iterable[Any]) -> None:
        values = list(values)
        try:
            data = struct.pack(f"<{len(values)}{self.value}", *values)
        except struct.error as error:
            raise InvalidError(f"values do not fit into {self.name}") from error
        stream.write(data)

    def read_vec(
        self,
        stream: Any,
        data_size: int,
        soft_max: int,
        hard_max: int | None,
        purpose: str,
    ) -> list:
        """Read `data_size` values, allocating at most `soft_max` at once.

        Raises InvalidError if `data_size` exceeds `hard_max`.
        """
        if hard_max is not None and data_size > hard_max:
            raise InvalidError(purpose)

        chunk = max(1, min(soft_max, hard_max) if hard_max is not None else soft_max)
        result: list = []
        while len(result) < data_size:
            count = min(chunk, data_size - len(result))
            result.extend(self.read_many(stream, count))
        return result

    def write_i32_sized_slice(self, stream: Any, values: Iterable[Any]) -> None:
        """Write the number of values as i32, then the values."""
        values = list(values)
        if len(values) > _I32_MAX:
            raise InvalidError("slice too long for an i32 size")
        Primitive.I32.write(stream, len(values))
        self.write_many(stream, values)

    def read_i32_sized_vec(
        self, stream: Any, soft_max: int, hard_max: int | None, purpose: str
    ) -> list:
        """Read an i32 element count, then that many values."""
        size = Primitive.I32.read(stream)
        if size < 0:
            raise InvalidError(f"negative size for {purpose}")
        return self.read_vec(stream, size, soft_max, hard_max, purpose)


_STRUCTS = {primitive: struct.Struct("<" + primitive.value) for primitive in Primitive}
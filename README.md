# exrkit

`exrkit` reads and writes the value types found in the headers of OpenEXR images.
Each value is stored in the little-endian layout an EXR header uses. The package uses
only the standard library.

## Modules

- `exrkit.binio`: `Primitive` covers the little-endian number types (`U8` to `F64`,
  including `F16`). Each can read or write one value, many values, or a list with an
  i32 size prefix. The module also has these wrappers:
  - `PeekRead`, a stream wrapper that can look at the next byte without consuming it.
  - `Tracking`, a stream wrapper that counts the bytes passed through it.
  - `LateFile`, a file that is only created on its first write or seek.

  It also has `skip_bytes` and `attempt_delete_file_on_write_error`, which removes a
  partly written file when writing raises. Its errors are `ExrError`, `InvalidError` and
  `UnsupportedError`.
- `exrkit.geometry`: `Vec2` and `RoundingMode`, with the integer log helpers
  `floor_log_2` and `ceil_log_2`.
- `exrkit.recursive`: `Recursive` and `NoneMore`, with `into_recursive` and `into_tuple`
  to convert between tuples and nested lists.
- `exrkit.text`: `Text`, the single-byte strings used in EXR files. A `Text` is written
  either null-terminated or with an i32 size prefix. The module also has
  `write_sequence_end` and `has_sequence_end`.
- `exrkit.bounds`: `IntegerBounds` and `FloatRect`.
- `exrkit.channels`: `SampleType`, `ChannelDescription` and `ChannelList`.
- `exrkit.timecode`: SMPTE `TimeCode`, packed as TV60, TV50 or FILM24.
- `exrkit.tiles`: `LevelMode`, `TileDescription` and `Preview`.
- `exrkit.records`: `KeyCode` and `Chromaticities`.

## Example

```python
import io

from exrkit.binio import PeekRead
from exrkit.channels import ChannelDescription, ChannelList, SampleType

channels = ChannelList([
    ChannelDescription.named("B", SampleType.F16),
    ChannelDescription.named("G", SampleType.F32),
])

buffer = io.BytesIO()
channels.write(buffer)
assert len(buffer.getvalue()) == channels.byte_size()

parsed = ChannelList.read(PeekRead(io.BytesIO(buffer.getvalue())))
assert parsed == channels
assert parsed.bytes_per_pixel == 6
```

When the bytes are malformed, the read functions raise `InvalidError`. When a value uses
a feature this package does not handle, they raise `UnsupportedError`. Both are
subclasses of `ExrError`. A stream that ends too early raises `EOFError`.

## What it does not do

- It works on single header values only. It does not read or write a whole named
  attribute, that is a name, a type name, a size and then a value.
- It has no types for the block type, compression method, environment map or line
  order values.
- It does not read or write image files or pixel data. There is also no command-line
  tool.

## Running the tests

```
pip install -e .[test]
pytest
```
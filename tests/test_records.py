import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from exrkit.geometry import Vec2
from exrkit.records import Chromaticities, KeyCode

i32s = st.integers(min_value=-(2**31), max_value=2**31 - 1)


@given(st.tuples(i32s, i32s, i32s, i32s, i32s, i32s, i32s))
def test_key_code_roundtrip(fields):
    code = KeyCode(*fields)
    buffer = io.BytesIO()
    code.write(buffer)
    assert len(buffer.getvalue()) == KeyCode.BYTE_SIZE
    assert KeyCode.read(io.BytesIO(buffer.getvalue())) == code


def test_key_code_wire_order():
    code = KeyCode(1, 2, 3, 4, 5, 6, 7)
    buffer = io.BytesIO()
    code.write(buffer)
    data = buffer.getvalue()
    assert data[:4] == (1).to_bytes(4, "little")
    assert data[-4:] == (7).to_bytes(4, "little")


def test_key_code_truncated():
    with pytest.raises(EOFError):
        KeyCode.read(io.BytesIO(bytes(12)))


def test_chromaticities_roundtrip():
    chroma = Chromaticities((0.5, 0.25), (0.125, 0.75), (1.0, 0.0), (0.375, 0.625))
    buffer = io.BytesIO()
    chroma.write(buffer)
    assert len(buffer.getvalue()) == Chromaticities.BYTE_SIZE
    decoded = Chromaticities.read(io.BytesIO(buffer.getvalue()))
    assert decoded == chroma
    assert decoded.green == Vec2(0.125, 0.75)


def test_chromaticities_truncated():
    with pytest.raises(EOFError):
        Chromaticities.read(io.BytesIO(bytes(20)))
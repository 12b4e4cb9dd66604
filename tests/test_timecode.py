import io
from dataclasses import replace

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from exrkit.binio import InvalidError
from exrkit.timecode import TimeCode

time_codes = st.builds(
    TimeCode,
    hours=st.integers(0, 23),
    minutes=st.integers(0, 59),
    seconds=st.integers(0, 59),
    frame=st.integers(0, 28),
    drop_frame=st.booleans(),
    color_frame=st.booleans(),
    field_phase=st.booleans(),
    binary_group_flags=st.tuples(st.booleans(), st.booleans(), st.booleans()),
    binary_groups=st.tuples(*[st.integers(0, 15)] * 8),
)


@settings(max_examples=200)
@given(time_codes)
def test_tv60_round_trip(code):
    packed = code.pack_time_as_tv60_u32()
    user = code.pack_user_data_as_u32()
    assert TimeCode.from_tv60_time(packed, user) == code


@settings(max_examples=200)
@given(time_codes)
def test_bytes_round_trip(code):
    buffer = io.BytesIO()
    code.write(buffer)
    assert len(buffer.getvalue()) == 8
    buffer.seek(0)
    assert TimeCode.read(buffer) == code


@settings(max_examples=200)
@given(time_codes)
def test_tv50_round_trip(code):
    packed = code.pack_time_as_tv50_u32()
    user = code.pack_user_data_as_u32()
    assert TimeCode.from_tv50_time(packed, user) == replace(code, drop_frame=False)


@settings(max_examples=200)
@given(time_codes)
def test_film24_round_trip(code):
    packed = code.pack_time_as_film24_u32()
    user = code.pack_user_data_as_u32()
    expected = replace(code, drop_frame=False, color_frame=False)
    assert TimeCode.from_film24_time(packed, user) == expected


def test_tv60_packs_decimal_digits():
    code = TimeCode(hours=23, minutes=56, seconds=34, frame=12)
    assert code.pack_time_as_tv60_u32() == 0x23563412


def test_drop_frame_bit():
    code = TimeCode(drop_frame=True)
    assert code.pack_time_as_tv60_u32() == 0x40
    assert code.pack_time_as_film24_u32() == 0


def test_user_data_packing():
    code = TimeCode(binary_groups=(1, 2, 3, 4, 5, 6, 7, 8))
    assert code.pack_user_data_as_u32() == 0x87654321


@pytest.mark.parametrize(
    "fields",
    [
        {"frame": 30},
        {"seconds": 60},
        {"minutes": 60},
        {"hours": 24},
        {"binary_groups": (0, 0, 16, 0, 0, 0, 0, 0)},
    ],
)
def test_invalid_fields_rejected(fields):
    code = TimeCode(**fields)
    with pytest.raises(InvalidError):
        code.validate(True)
    with pytest.raises(InvalidError):
        code.pack_time_as_tv60_u32()
    with pytest.raises(InvalidError):
        code.write(io.BytesIO())


def test_read_short_stream():
    with pytest.raises(EOFError):
        TimeCode.read(io.BytesIO(b"\x00\x00\x00\x00\x00"))
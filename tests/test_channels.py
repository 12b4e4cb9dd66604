import io

import pytest

from exrkit.binio import InvalidError, Primitive, UnsupportedError
from exrkit.bounds import IntegerBounds
from exrkit.channels import ChannelDescription, ChannelList, SampleType
from exrkit.geometry import Vec2
from exrkit.text import Text


def _source_channel_list():
    return ChannelList(
        [
            ChannelDescription(Text("Green"), SampleType.F16, False, Vec2(1, 2)),
            ChannelDescription(Text("Red"), SampleType.F32, True, Vec2(1, 2)),
            ChannelDescription(Text("Purple"), SampleType.U32, False, Vec2(0, 0)),
        ]
    )


def test_sample_type_sizes():
    assert SampleType.F16.bytes_per_sample() == 2
    assert SampleType.F32.bytes_per_sample() == 4
    assert SampleType.U32.bytes_per_sample() == 4


@pytest.mark.parametrize("sample_type,code", [(SampleType.U32, 0), (SampleType.F16, 1), (SampleType.F32, 2)])
def test_sample_type_encoding(sample_type, code):
    buffer = io.BytesIO()
    sample_type.write(buffer)
    assert buffer.getvalue() == code.to_bytes(4, "little")
    assert SampleType.read(io.BytesIO(buffer.getvalue())) is sample_type


def test_sample_type_read_unknown():
    with pytest.raises(InvalidError):
        SampleType.read(io.BytesIO((3).to_bytes(4, "little")))


@pytest.mark.parametrize("name", ["R", "g", "B", "l", "Y", "x", "Z"])
def test_luminance_channels_are_not_linear(name):
    assert ChannelDescription.guess_quantization_linearity(Text(name)) is False


@pytest.mark.parametrize("name", ["A", "alpha", "RG", "depth"])
def test_other_channels_are_linear(name):
    assert ChannelDescription.guess_quantization_linearity(name) is True


def test_named():
    channel = ChannelDescription.named("A", SampleType.F16)
    assert channel == ChannelDescription(Text("A"), SampleType.F16, True, Vec2(1, 1))


def test_subsampling():
    channel = ChannelDescription(Text("Y"), SampleType.F16, False, Vec2(2, 4))
    assert channel.subsampled_resolution(Vec2(10, 20)) == Vec2(5, 5)
    assert channel.subsampled_pixels(Vec2(10, 20)) == 25


def test_channel_description_roundtrip_and_size():
    channel = ChannelDescription(Text("Red"), SampleType.F32, True, Vec2(1, 2))
    buffer = io.BytesIO()
    channel.write(buffer)
    assert len(buffer.getvalue()) == channel.byte_size() == 4 + 4 + 1 + 3 + 8
    assert ChannelDescription.read(io.BytesIO(buffer.getvalue())) == channel


def test_channel_description_rejects_bad_linearity():
    buffer = io.BytesIO()
    ChannelDescription(Text("R"), SampleType.F32, False).write(buffer)
    data = bytearray(buffer.getvalue())
    data[2 + 4] = 7
    with pytest.raises(InvalidError):
        ChannelDescription.read(io.BytesIO(bytes(data)))


def test_channel_description_rejects_negative_sampling():
    buffer = io.BytesIO()
    Text("R").write_null_terminated(buffer)
    SampleType.F32.write(buffer)
    Primitive.U8.write(buffer, 0)
    Primitive.I8.write_many(buffer, (0, 0, 0))
    Primitive.I32.write_many(buffer, (-1, 1))
    with pytest.raises(InvalidError):
        ChannelDescription.read(io.BytesIO(buffer.getvalue()))


def test_channel_list_roundtrip_and_byte_size():
    channels = _source_channel_list()
    buffer = io.BytesIO()
    channels.write(buffer)
    assert len(buffer.getvalue()) == channels.byte_size()
    assert ChannelList.read(io.BytesIO(buffer.getvalue())) == channels


def test_channel_list_derived_fields():
    channels = _source_channel_list()
    assert channels.bytes_per_pixel == 10
    assert channels.uniform_sample_type is None

    uniform = ChannelList([ChannelDescription.named(n, SampleType.F16) for n in "BGR"])
    assert uniform.bytes_per_pixel == 6
    assert uniform.uniform_sample_type is SampleType.F16

    assert ChannelList([]).uniform_sample_type is None


def test_channels_with_byte_offset():
    channels = ChannelList(
        [
            ChannelDescription.named("A", SampleType.F16),
            ChannelDescription.named("B", SampleType.F32),
            ChannelDescription.named("G", SampleType.U32),
        ]
    )
    offsets = [(offset, c.name) for offset, c in channels.channels_with_byte_offset()]
    assert offsets == [(0, Text("A")), (2, Text("B")), (6, Text("G"))]


def test_find_index_of_channel():
    channels = ChannelList([ChannelDescription.named(n, SampleType.F32) for n in ["A", "B", "G", "R"]])
    assert channels.find_index_of_channel(Text("G")) == 2
    assert channels.find_index_of_channel("A") == 0
    assert channels.find_index_of_channel("g") is None
    assert channels.find_index_of_channel("Z") is None


def test_validate_accepts_sorted_list():
    channels = ChannelList([ChannelDescription.named(n, SampleType.F16) for n in "BGR"])
    channels.validate(False, IntegerBounds.from_dimensions((4, 4)), True)
    assert len(channels) == 3


def test_validate_requires_a_channel():
    with pytest.raises(InvalidError):
        ChannelList([]).validate(False, IntegerBounds.zero(), True)


def test_validate_rejects_unsorted():
    channels = ChannelList([ChannelDescription.named(n, SampleType.F16) for n in "RGB"])
    with pytest.raises(InvalidError, match="sorted"):
        channels.validate(False, IntegerBounds.zero(), False)


def test_validate_duplicates_only_in_strict_mode():
    channels = ChannelList([ChannelDescription.named(n, SampleType.F16) for n in "GG"])
    with pytest.raises(InvalidError, match="unique"):
        channels.validate(False, IntegerBounds.zero(), True)
    channels.validate(False, IntegerBounds.zero(), False)
    assert channels.channels[0] == channels.channels[1]


def test_validate_rejects_zero_sampling():
    channel = ChannelDescription(Text("R"), SampleType.F16, False, Vec2(0, 1))
    with pytest.raises(InvalidError, match="zero sampling"):
        channel.validate(True, IntegerBounds.zero(), False)


def test_validate_rejects_sampling_when_not_allowed():
    channel = ChannelDescription(Text("R"), SampleType.F16, False, Vec2(2, 2))
    with pytest.raises(InvalidError, match="subsampling"):
        channel.validate(False, IntegerBounds.from_dimensions((4, 4)), True)


def test_validate_rejects_non_dividing_sampling():
    channel = ChannelDescription(Text("R"), SampleType.F16, False, Vec2(2, 2))
    with pytest.raises(InvalidError, match="size"):
        channel.validate(True, IntegerBounds.from_dimensions((3, 4)), True)
    with pytest.raises(InvalidError, match="position"):
        channel.validate(True, IntegerBounds(Vec2(1, 0), Vec2(4, 4)), True)


def test_validate_subsampling_unsupported():
    channel = ChannelDescription(Text("R"), SampleType.F16, False, Vec2(2, 2))
    with pytest.raises(UnsupportedError):
        channel.validate(True, IntegerBounds.from_dimensions((4, 4)), True)


def test_validate_rejects_empty_name():
    channel = ChannelDescription(Text(""), SampleType.F16, False)
    with pytest.raises(InvalidError):
        channel.validate(True, IntegerBounds.zero(), False)
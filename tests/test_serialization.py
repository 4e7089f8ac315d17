import io
import struct
import uuid

import pytest

from fbsdkstate.serialization import (
    PropertyType,
    SerializationError,
    StreamType,
    TypedValue,
    dumps,
    loads,
    read_object,
    write_object,
)


def test_null_is_single_type_byte():
    assert dumps(None) == bytes([StreamType.NULL])
    assert loads(dumps(None)) is None


def test_string_wire_format():
    data = dumps("ab")
    assert data == bytes([StreamType.STRING]) + struct.pack(">I", 2) + b"ab"


def test_empty_map_wire_format():
    data = dumps({})
    assert data == (
        bytes([StreamType.STRING_TO_OBJECT_MAP])
        + struct.pack(">I", 0)
        + bytes([StreamType.MAP_END_MARKER])
    )


def test_string_length_counts_utf8_bytes():
    text = "héllo ✓"
    data = dumps(text)
    (length,) = struct.unpack(">I", data[1:5])
    assert length == len(text.encode("utf-8"))
    assert loads(data) == text


@pytest.mark.parametrize("value", [True, False, 0, -7, 123456, 2.5, "", "state"])
def test_scalar_round_trip(value):
    result = loads(dumps(value))
    assert result == value
    assert type(result) is type(value)


def test_plain_int_widths():
    assert dumps(5)[0] == StreamType.INT32
    assert dumps(2**40)[0] == StreamType.INT64
    assert dumps(2**63)[0] == StreamType.UINT64
    assert loads(dumps(2**63)) == 2**63
    assert loads(dumps(-(2**40))) == -(2**40)


def test_int_too_large_raises():
    with pytest.raises(SerializationError):
        dumps(2**64)


@pytest.mark.parametrize(
    "ptype, value",
    [
        (PropertyType.UINT8, 200),
        (PropertyType.UINT16, 60000),
        (PropertyType.UINT32, 4000000000),
        (PropertyType.UINT64, 2**64 - 1),
        (PropertyType.INT16, -300),
        (PropertyType.INT32, -100000),
        (PropertyType.INT64, -(2**62)),
        (PropertyType.SINGLE, 0.5),
        (PropertyType.DOUBLE, 1.25),
        (PropertyType.STRING, "text"),
    ],
)
def test_typed_value_round_trip(ptype, value):
    data = dumps(TypedValue(ptype, value))
    assert data[0] == ptype.value
    assert loads(data) == value


def test_typed_boolean_round_trip():
    assert loads(dumps(TypedValue(PropertyType.BOOLEAN, True))) is True
    assert loads(dumps(TypedValue(PropertyType.BOOLEAN, False))) is False


def test_nonzero_boolean_byte_reads_true():
    assert loads(bytes([StreamType.BOOLEAN, 2])) is True


def test_char16_round_trip():
    assert loads(dumps(TypedValue(PropertyType.CHAR16, "Ω"))) == "Ω"
    assert loads(dumps(TypedValue(PropertyType.CHAR16, ord("x")))) == "x"


def test_char16_outside_range_raises():
    with pytest.raises(SerializationError):
        dumps(TypedValue(PropertyType.CHAR16, 0x10000))
    with pytest.raises(SerializationError):
        dumps(TypedValue(PropertyType.CHAR16, "ab"))


def test_guid_round_trip():
    guid = uuid.uuid4()
    data = dumps(guid)
    assert data[0] == StreamType.GUID
    assert data[1:] == guid.bytes
    assert loads(data) == guid


def test_typed_guid_from_string():
    guid = uuid.uuid4()
    assert loads(dumps(TypedValue(PropertyType.GUID, str(guid)))) == guid


@pytest.mark.parametrize(
    "ptype, value",
    [
        (PropertyType.UINT8, 256),
        (PropertyType.UINT8, -1),
        (PropertyType.INT16, 40000),
        (PropertyType.UINT32, 1.5),
        (PropertyType.SINGLE, 1e300),
        (PropertyType.STRING, 5),
        (PropertyType.GUID, "not-a-guid"),
    ],
)
def test_typed_value_out_of_range_raises(ptype, value):
    with pytest.raises(SerializationError):
        dumps(TypedValue(ptype, value))


def test_nested_map_round_trip():
    state = {
        "Navigation": "1,2,Page,0",
        "count": 3,
        "ratio": 0.75,
        "flag": True,
        "nothing": None,
        "inner": {"deep": {"name": "value"}, "n": -1},
    }
    assert loads(dumps(state)) == state


def test_map_preserves_order():
    state = {"z": 1, "a": 2, "m": 3}
    assert list(loads(dumps(state))) == ["z", "a", "m"]


def test_unsupported_type_raises():
    with pytest.raises(SerializationError):
        dumps([1, 2, 3])
    with pytest.raises(SerializationError):
        dumps({"items": object()})


def test_non_string_key_raises_on_write():
    with pytest.raises(SerializationError):
        dumps({1: "one"})


def test_non_string_key_raises_on_read():
    data = (
        bytes([StreamType.STRING_TO_OBJECT_MAP])
        + struct.pack(">I", 1)
        + dumps(TypedValue(PropertyType.UINT8, 1))
        + dumps(None)
        + bytes([StreamType.MAP_END_MARKER])
    )
    with pytest.raises(SerializationError):
        loads(data)


def test_bad_end_marker_raises():
    data = dumps({"a": 1})[:-1] + bytes([StreamType.NULL])
    with pytest.raises(SerializationError, match="Invalid stream"):
        loads(data)


@pytest.mark.parametrize(
    "code", [StreamType.MAP_END_MARKER, 16, 255]
)
def test_unknown_type_code_raises(code):
    with pytest.raises(SerializationError, match="Unsupported property type"):
        loads(bytes([code]))


def test_truncated_stream_raises():
    data = dumps({"key": "value"})
    with pytest.raises(SerializationError):
        loads(data[:-3])
    with pytest.raises(SerializationError):
        loads(b"")


def test_serialization_error_is_value_error():
    with pytest.raises(ValueError):
        dumps(set())


def test_stream_holds_consecutive_values():
    stream = io.BytesIO()
    write_object(stream, "first")
    write_object(stream, {"second": 2})
    write_object(stream, None)
    stream.seek(0)
    assert read_object(stream) == "first"
    assert read_object(stream) == {"second": 2}
    assert read_object(stream) is None
    assert stream.read() == b""
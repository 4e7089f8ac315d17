"""Binary serialization for session state.

Supported values are ``None``, booleans, integers, floats, strings, UUIDs and
string-keyed mappings whose values obey the same rules. A value may be wrapped
in :class:`TypedValue` to choose its exact wire type. Numbers are big-endian,
strings are UTF-8 with a 32-bit byte-length prefix.
"""

from __future__ import annotations

import io
import struct
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, BinaryIO


class SerializationError(ValueError):
    """Raised when a value cannot be written or a stream cannot be read."""


class StreamType(IntEnum):
    """Type codes that prefix every serialized value."""

    NULL = 0
    UINT8 = 1
    UINT16 = 2
    UINT32 = 3
    UINT64 = 4
    INT16 = 5
    INT32 = 6
    INT64 = 7
    SINGLE = 8
    DOUBLE = 9
    BOOLEAN = 10
    CHAR16 = 11
    GUID = 12
    STRING = 13
    STRING_TO_OBJECT_MAP = 14
    MAP_END_MARKER = 15


class PropertyType(IntEnum):
    """Scalar wire types that a :class:`TypedValue` may request."""

    UINT8 = StreamType.UINT8
    UINT16 = StreamType.UINT16
    UINT32 = StreamType.UINT32
    UINT64 = StreamType.UINT64
    INT16 = StreamType.INT16
    INT32 = StreamType.INT32
    INT64 = StreamType.INT64
    SINGLE = StreamType.SINGLE
    DOUBLE = StreamType.DOUBLE
    BOOLEAN = StreamType.BOOLEAN
    CHAR16 = StreamType.CHAR16
    GUID = StreamType.GUID
    STRING = StreamType.STRING


@dataclass(frozen=True)
class TypedValue:
    """A scalar paired with the exact wire type it is written as."""

    type: PropertyType
    value: Any


_NUMERIC_FORMATS: dict[StreamType, str] = {
    StreamType.UINT8: ">B",
    StreamType.UINT16: ">H",
    StreamType.UINT32: ">I",
    StreamType.UINT64: ">Q",
    StreamType.INT16: ">h",
    StreamType.INT32: ">i",
    StreamType.INT64: ">q",
    StreamType.SINGLE: ">f",
    StreamType.DOUBLE: ">d",
}

_INTEGER_TYPES = frozenset(
    {
        StreamType.UINT8,
        StreamType.UINT16,
        StreamType.UINT32,
        StreamType.UINT64,
        StreamType.INT16,
        StreamType.INT32,
        StreamType.INT64,
    }
)

_INT32_RANGE = range(-(2**31), 2**31)
_INT64_RANGE = range(-(2**63), 2**63)
_UINT64_RANGE = range(0, 2**64)


def _write_type(stream: BinaryIO, code: StreamType) -> None:
    stream.write(bytes([code]))


def _write_string(stream: BinaryIO, text: str) -> None:
    encoded = text.encode("utf-8")
    _write_type(stream, StreamType.STRING)
    stream.write(struct.pack(">I", len(encoded)))
    stream.write(encoded)


def _write_property(stream: BinaryIO, ptype: PropertyType, value: Any) -> None:
    code = StreamType(ptype.value)
    if code in _NUMERIC_FORMATS:
        if code in _INTEGER_TYPES and (
            not isinstance(value, int) or isinstance(value, bool)
        ):
            raise SerializationError(f"{ptype.name} requires an integer")
        if code not in _INTEGER_TYPES and not isinstance(value, (int, float)):
            raise SerializationError(f"{ptype.name} requires a number")
        try:
            payload = struct.pack(_NUMERIC_FORMATS[code], value)
        except (struct.error, OverflowError) as exc:
            raise SerializationError(
                f"Value {value!r} does not fit in {ptype.name}"
            ) from exc
        _write_type(stream, code)
        stream.write(payload)
    elif code is StreamType.BOOLEAN:
        _write_type(stream, code)
        stream.write(struct.pack(">?", bool(value)))
    elif code is StreamType.CHAR16:
        if isinstance(value, str) and len(value) == 1:
            unit = ord(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            unit = value
        else:
            raise SerializationError("CHAR16 requires a single character")
        if not 0 <= unit <= 0xFFFF:
            raise SerializationError("CHAR16 value is outside the 16-bit range")
        _write_type(stream, code)
        stream.write(struct.pack(">H", unit))
    elif code is StreamType.GUID:
        try:
            guid = value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
        except ValueError as exc:
            raise SerializationError(f"Invalid GUID {value!r}") from exc
        _write_type(stream, code)
        stream.write(guid.bytes)
    elif code is StreamType.STRING:
        if not isinstance(value, str):
            raise SerializationError("STRING requires a str")
        _write_string(stream, value)
    else:
        raise SerializationError("Unsupported property type")


def _write_int(stream: BinaryIO, value: int) -> None:
    if value in _INT32_RANGE:
        ptype = PropertyType.INT32
    elif value in _INT64_RANGE:
        ptype = PropertyType.INT64
    elif value in _UINT64_RANGE:
        ptype = PropertyType.UINT64
    else:
        raise SerializationError(f"Integer {value} is too large to serialize")
    _write_property(stream, ptype, value)


def _write_map(stream: BinaryIO, mapping: Mapping[Any, Any]) -> None:
    _write_type(stream, StreamType.STRING_TO_OBJECT_MAP)
    stream.write(struct.pack(">I", len(mapping)))
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise SerializationError("Map keys must be strings")
        write_object(stream, key)
        write_object(stream, value)
    _write_type(stream, StreamType.MAP_END_MARKER)


def write_object(stream: BinaryIO, obj: Any) -> None:
    """Write ``obj`` to the binary ``stream``."""
    if obj is None:
        _write_type(stream, StreamType.NULL)
    elif isinstance(obj, TypedValue):
        _write_property(stream, PropertyType(obj.type), obj.value)
    elif isinstance(obj, bool):
        _write_property(stream, PropertyType.BOOLEAN, obj)
    elif isinstance(obj, int):
        _write_int(stream, obj)
    elif isinstance(obj, float):
        _write_property(stream, PropertyType.DOUBLE, obj)
    elif isinstance(obj, str):
        _write_string(stream, obj)
    elif isinstance(obj, uuid.UUID):
        _write_property(stream, PropertyType.GUID, obj)
    elif isinstance(obj, Mapping):
        _write_map(stream, obj)
    else:
        raise SerializationError("Unsupported data type")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise SerializationError("Unexpected end of stream")
    return data


def _read_byte(stream: BinaryIO) -> int:
    return _read_exact(stream, 1)[0]


def _unpack(stream: BinaryIO, fmt: str) -> Any:
    return struct.unpack(fmt, _read_exact(stream, struct.calcsize(fmt)))[0]


def _read_string(stream: BinaryIO) -> str:
    length = _unpack(stream, ">I")
    try:
        return _read_exact(stream, length).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SerializationError("Invalid string data") from exc


def _read_map(stream: BinaryIO) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for _ in range(_unpack(stream, ">I")):
        key = read_object(stream)
        if not isinstance(key, str):
            raise SerializationError("Map keys must be strings")
        result[key] = read_object(stream)
    if _read_byte(stream) != StreamType.MAP_END_MARKER:
        raise SerializationError("Invalid stream")
    return result


def read_object(stream: BinaryIO) -> Any:
    """Read one value from the binary ``stream``.

    Integers and floats of every width come back as ``int`` and ``float``,
    a CHAR16 as a one-character ``str`` and a GUID as a ``uuid.UUID``.
    """
    code = _read_byte(stream)
    try:
        kind = StreamType(code)
    except ValueError:
        raise SerializationError("Unsupported property type") from None

    if kind is StreamType.NULL:
        return None
    if kind in _NUMERIC_FORMATS:
        return _unpack(stream, _NUMERIC_FORMATS[kind])
    if kind is StreamType.BOOLEAN:
        return _read_byte(stream) != 0
    if kind is StreamType.CHAR16:
        return chr(_unpack(stream, ">H"))
    if kind is StreamType.GUID:
        return uuid.UUID(bytes=_read_exact(stream, 16))
    if kind is StreamType.STRING:
        return _read_string(stream)
    if kind is StreamType.STRING_TO_OBJECT_MAP:
        return _read_map(stream)
    raise SerializationError("Unsupported property type")


def dumps(obj: Any) -> bytes:
    """Serialize ``obj`` to bytes."""
    buffer = io.BytesIO()
    write_object(buffer, obj)
    return buffer.getvalue()


def loads(data: bytes) -> Any:
    """Deserialize the first value held in ``data``."""
    return read_object(io.BytesIO(data))
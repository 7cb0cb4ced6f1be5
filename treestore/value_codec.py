"""Encoding and decoding of values stored inline in records."""

from __future__ import annotations

from treestore.errors import StorageEngineError
from treestore.reader import RecordRepositoryReader
from treestore.values import DataType, DataTypeModifier, PrimitiveDataType, Value
from treestore.writer import RecordRepositoryWriter

_UNICODE_STRING_CODE = 18

_DECODED_TYPES = {
    0: PrimitiveDataType.NULL,
    1: PrimitiveDataType.BINARY,
    2: PrimitiveDataType.BOOLEAN,
    _UNICODE_STRING_CODE: PrimitiveDataType.UNICODE_STRING,
}

_ENCODED_TYPES = {
    PrimitiveDataType.NULL: 0,
    PrimitiveDataType.BINARY: 1,
    PrimitiveDataType.BOOLEAN: 2,
    PrimitiveDataType.UNICODE_STRING: _UNICODE_STRING_CODE,
}


def read_inline_value(reader: RecordRepositoryReader) -> Value:
    """Read a value preceded by its data type."""
    data_type = read_data_type(reader)
    primitive = data_type.primitive_type
    if primitive is PrimitiveDataType.BINARY:
        return Value.binary(_read_bytes(reader))
    if primitive is PrimitiveDataType.BOOLEAN:
        return Value.boolean(read_boolean(reader))
    if primitive is PrimitiveDataType.UNICODE_STRING:
        return Value.utf8_string(read_string(reader))
    return Value()


def write_inline_value(writer: RecordRepositoryWriter, value: Value) -> None:
    """Write a value preceded by its data type."""
    write_data_type(writer, value.data_type)
    primitive = value.data_type.primitive_type
    if primitive is PrimitiveDataType.BINARY:
        write_string(writer, value.as_binary())
    elif primitive is PrimitiveDataType.BOOLEAN:
        write_boolean(writer, value.as_boolean())
    elif primitive is PrimitiveDataType.UNICODE_STRING:
        write_string(writer, value.as_utf8_string())


def read_data_type(reader: RecordRepositoryReader) -> DataType:
    """Read a one-byte data type: six bits of type, two bits of modifier."""
    (byte,) = reader.read(1)
    code = byte & 0x3F
    primitive = _DECODED_TYPES.get(code)
    if primitive is None:
        raise StorageEngineError(f"unsupported data type code {code}")
    try:
        modifier = DataTypeModifier(byte >> 6)
    except ValueError:
        raise StorageEngineError(f"unsupported data type modifier {byte >> 6}") from None
    return DataType(primitive, modifier)


def write_data_type(writer: RecordRepositoryWriter, data_type: DataType) -> None:
    """Write a one-byte data type."""
    code = _ENCODED_TYPES.get(data_type.primitive_type)
    if code is None:
        raise StorageEngineError(f"unsupported data type {data_type.primitive_type!r}")
    byte = ((code & 0x3F) | (int(data_type.modifier) << 6)) & 0xFF
    writer.write(bytes([byte]))


def read_boolean(reader: RecordRepositoryReader) -> bool:
    """Read a one-byte boolean; any nonzero byte is true."""
    (byte,) = reader.read(1)
    return byte != 0


def write_boolean(writer: RecordRepositoryWriter, data: bool) -> None:
    """Write a boolean as a single byte, 1 or 0."""
    writer.write(b"\x01" if data else b"\x00")


def _read_bytes(reader: RecordRepositoryReader) -> bytes:
    size = reader.read_leb128()
    return reader.read(size)


def read_string(reader: RecordRepositoryReader) -> str:
    """Read a UTF-8 string preceded by its byte length in LEB128."""
    raw = _read_bytes(reader)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise StorageEngineError(f"string is not valid UTF-8: {exc}") from exc


def write_string(writer: RecordRepositoryWriter, data: str | bytes) -> None:
    """Write a string or bytes preceded by the byte length in LEB128."""
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    writer.write_leb128(len(raw))
    writer.write(raw)
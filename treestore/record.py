"""Records: the units in which node data is laid out in storage."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from treestore.errors import StorageEngineError
from treestore.node_id import NodeID
from treestore.reader import RecordRepositoryReader
from treestore.value_codec import read_inline_value, read_string, write_inline_value, write_string
from treestore.values import Value
from treestore.writer import RecordRepositoryWriter


class RecordType(enum.IntEnum):
    """The type of a record; the values are identifiers in the file format."""

    INVALID = 0x00
    MASTER_FILE_METADATA = 0x01
    DATA_START = 0x02
    DATA_END = 0x03
    SIBLING_NODES_START = 0x04
    SIBLING_NODES_END = 0x05
    PARENT_NODE_ID = 0x06
    NODE_NAME = 0x07
    NODE_ID = 0x08
    PERSISTENT_NODE_ID = 0x09
    DELETED_SIBLING_NODES_START = 0x0C
    DELETED_NODE_NAME = 0x0F
    INLINE_VALUE = 0x10
    PARTIAL_INLINE_VALUE = 0x11
    REMOTE_VALUE_MARKER = 0x12
    REMOTE_VALUE = 0x13
    FREE_BYTES = 0xFD
    FREE_BYTE = 0xFE
    EXTENSION = 0xFF


_MARKER_TYPES = frozenset(
    {
        RecordType.DATA_START,
        RecordType.DATA_END,
        RecordType.SIBLING_NODES_START,
        RecordType.SIBLING_NODES_END,
    }
)

_NODE_ID_TYPES = frozenset(
    {RecordType.PARENT_NODE_ID, RecordType.NODE_ID, RecordType.PERSISTENT_NODE_ID}
)

RecordData = Union[NodeID, str, Value, None]


@dataclass(frozen=True)
class Record:
    """A record in physical storage: a one-byte type followed by its data."""

    type: RecordType
    data: RecordData = None

    def _expect(self, kind: type) -> object:
        if not isinstance(self.data, kind):
            raise TypeError(f"{self.type.name} record does not hold a {kind.__name__}")
        return self.data

    def as_node_id(self) -> NodeID:
        """Return the node ID held by the record."""
        return self._expect(NodeID)  # type: ignore[return-value]

    def as_string(self) -> str:
        """Return the name held by the record."""
        return self._expect(str)  # type: ignore[return-value]

    def as_value(self) -> Value:
        """Return the value held by the record."""
        return self._expect(Value)  # type: ignore[return-value]

    @classmethod
    def read(cls, reader: RecordRepositoryReader) -> "Record":
        """Read the next record from the reader."""
        (code,) = reader.read(1)
        try:
            record_type = RecordType(code)
        except ValueError:
            raise StorageEngineError(f"invalid record type {code:#04x}") from None

        if record_type in _MARKER_TYPES:
            return cls(record_type)
        if record_type in _NODE_ID_TYPES:
            return cls(record_type, NodeID.read(reader))
        if record_type is RecordType.NODE_NAME:
            return cls(record_type, read_string(reader))
        if record_type is RecordType.INLINE_VALUE:
            return cls(record_type, read_inline_value(reader))
        if record_type is RecordType.MASTER_FILE_METADATA:
            raise StorageEngineError("master file metadata records are not supported")
        raise StorageEngineError(f"invalid record type {code:#04x}")

    def write(self, writer: RecordRepositoryWriter) -> None:
        """Write the record to the writer."""
        if self.type is RecordType.MASTER_FILE_METADATA:
            raise StorageEngineError("master file metadata records are not supported")
        writer.write(bytes([int(self.type)]))
        if self.type in _NODE_ID_TYPES:
            self.as_node_id().write(writer)
        elif self.type is RecordType.NODE_NAME:
            write_string(writer, self.as_string())
        elif self.type is RecordType.INLINE_VALUE:
            write_inline_value(writer, self.as_value())
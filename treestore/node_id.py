"""Identifiers of database nodes."""

from __future__ import annotations

from dataclasses import dataclass

from treestore.reader import RecordRepositoryReader
from treestore.writer import RecordRepositoryWriter


@dataclass(frozen=True, order=True)
class NodeID:
    """The ID of a node, unique within the database.

    The root node has ID 1. The value 0 means an invalid or absent ID.
    """

    value: int = 0

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("a node ID cannot be negative")

    def is_null(self) -> bool:
        """Return True when this is the invalid ID 0."""
        return self.value == 0

    @classmethod
    def read(cls, reader: RecordRepositoryReader) -> "NodeID":
        """Read a node ID stored as an unsigned LEB128 integer."""
        return cls(reader.read_leb128())

    def write(self, writer: RecordRepositoryWriter) -> None:
        """Write the node ID as an unsigned LEB128 integer."""
        writer.write_leb128(self.value)
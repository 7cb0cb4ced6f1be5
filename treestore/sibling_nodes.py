"""Groups of records describing nodes that share a parent."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from treestore.errors import StorageEngineError
from treestore.node_id import NodeID
from treestore.reader import RecordRepositoryReader
from treestore.record import Record, RecordType
from treestore.values import Value
from treestore.writer import RecordRepositoryWriter


@dataclass
class SiblingNodeRecordGroup:
    """The records of a single node: its name, optional ID and value."""

    name: str = ""
    value: Value = field(default_factory=Value)
    node_id: NodeID = field(default_factory=NodeID)

    def is_root(self) -> bool:
        """Return True for the root node, whose name is "/"."""
        return self.name == "/"


class SiblingNodesRecordGroup:
    """The series of records storing the nodes that have the same parent."""

    def __init__(
        self,
        parent_node_id: NodeID | None = None,
        node: SiblingNodeRecordGroup | None = None,
    ) -> None:
        self.parent_node_id = parent_node_id if parent_node_id is not None else NodeID()
        self._siblings: list[SiblingNodeRecordGroup] = []
        if node is not None:
            self._siblings.append(node)

    def __getitem__(self, pos: int) -> SiblingNodeRecordGroup:
        return self._siblings[pos]

    def __len__(self) -> int:
        return len(self._siblings)

    def __iter__(self) -> Iterator[SiblingNodeRecordGroup]:
        return iter(self._siblings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SiblingNodesRecordGroup):
            return NotImplemented
        return self.parent_node_id == other.parent_node_id and self._siblings == other._siblings

    def __repr__(self) -> str:
        return f"SiblingNodesRecordGroup({self.parent_node_id!r}, {self._siblings!r})"

    def append(self, node: SiblingNodeRecordGroup) -> None:
        """Add a node at the end of the group."""
        self._siblings.append(node)

    def find(self, name: str) -> SiblingNodeRecordGroup | None:
        """Return the first node with the given name, or None."""
        return next((node for node in self._siblings if node.name == name), None)

    def read_without_type(self, reader: RecordRepositoryReader) -> None:
        """Read the group's records after its start record, up to its end record."""
        while True:
            record = Record.read(reader)
            if record.type is RecordType.SIBLING_NODES_END:
                return
            if record.type is RecordType.PARENT_NODE_ID:
                self.parent_node_id = record.as_node_id()
            elif record.type is RecordType.NODE_NAME:
                self._siblings.append(SiblingNodeRecordGroup(record.as_string(), Value(), NodeID(0)))
            elif record.type is RecordType.INLINE_VALUE:
                if not self._siblings:
                    raise StorageEngineError("inline value record found before any node name")
                self._siblings[-1].value = record.as_value()

    def write(self, writer: RecordRepositoryWriter) -> None:
        """Write the group, from its start record to its end record."""
        Record(RecordType.SIBLING_NODES_START).write(writer)
        if not self.parent_node_id.is_null():
            Record(RecordType.PARENT_NODE_ID, self.parent_node_id).write(writer)
        for node in self._siblings:
            self._write_node(writer, node)
        Record(RecordType.SIBLING_NODES_END).write(writer)

    @staticmethod
    def _write_node(writer: RecordRepositoryWriter, node: SiblingNodeRecordGroup) -> None:
        Record(RecordType.NODE_NAME, node.name).write(writer)
        if not node.is_root() and not node.node_id.is_null():
            Record(RecordType.NODE_ID, node.node_id).write(writer)
        if not node.value.is_null:
            Record(RecordType.INLINE_VALUE, node.value).write(writer)


class SiblingNodesRecordGroupCache:
    """Sibling node groups kept in memory, keyed by parent node ID."""

    def __init__(self) -> None:
        self._groups: dict[NodeID, SiblingNodesRecordGroup] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def find(self, key: NodeID) -> SiblingNodesRecordGroup | None:
        """Return the cached group for the parent ID, or None."""
        return self._groups.get(key)

    def __getitem__(self, key: NodeID) -> SiblingNodesRecordGroup:
        """Return the group for the parent ID, creating an empty one if needed."""
        group = self._groups.get(key)
        if group is None:
            group = SiblingNodesRecordGroup(key)
            self._groups[key] = group
        return group

    def erase(self, key: NodeID) -> bool:
        """Remove the group for the parent ID; return whether one was removed."""
        return self._groups.pop(key, None) is not None
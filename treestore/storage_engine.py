"""The storage engine: finds groups of sibling nodes in the master file."""

from __future__ import annotations

import os

from treestore.errors import StorageEngineError
from treestore.node_id import NodeID
from treestore.reader import RecordRepositoryReader
from treestore.record import Record, RecordType
from treestore.record_file import RecordFile
from treestore.sibling_nodes import SiblingNodesRecordGroup, SiblingNodesRecordGroupCache
from treestore.working_set import RecordPageWorkingSet


class StorageEngine:
    """Gives access to the node records kept in a master file.

    Groups of sibling nodes that have been looked up are cached in memory by
    the ID of their parent node.
    """

    def __init__(self) -> None:
        self._cache = SiblingNodesRecordGroupCache()
        self._master_file = RecordFile()
        self._working_set = RecordPageWorkingSet(self._master_file)

    def __enter__(self) -> "StorageEngine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _reset(self) -> None:
        self._cache = SiblingNodesRecordGroupCache()
        self._working_set = RecordPageWorkingSet(self._master_file)

    def create_master_file(self, path: str | os.PathLike[str]) -> None:
        """Create a new, empty master file."""
        self._master_file.create(path)
        self._reset()

    def open_master_file(self, path: str | os.PathLike[str]) -> None:
        """Open an existing master file."""
        self._master_file.open(path)
        self._reset()

    def close(self) -> None:
        """Close the master file."""
        self._master_file.close()

    def find_sibling_nodes_record_group(
        self, parent_node_id: NodeID
    ) -> SiblingNodesRecordGroup | None:
        """Return the group of nodes whose parent has the given ID, or None.

        The group is looked up in the cache first, then in the master file.
        """
        cached = self._cache.find(parent_node_id)
        if cached is not None:
            return cached

        try:
            found = self.find_in_working_set(self._working_set, 0, parent_node_id)
        except StorageEngineError:
            self._cache.erase(parent_node_id)
            raise
        if found is None:
            return None

        group = self._cache[parent_node_id]
        group.parent_node_id = found.parent_node_id
        for node in found:
            group.append(node)
        return group

    @staticmethod
    def find_in_working_set(
        working_set: RecordPageWorkingSet, data_start_offset: int, parent_node_id: NodeID
    ) -> SiblingNodesRecordGroup | None:
        """Scan the data section for the group with the given parent ID.

        Reading starts on page 0 just after the data start record found at
        data_start_offset, and stops at the data end record.
        """
        reader = RecordRepositoryReader(working_set, 0, data_start_offset + 1)
        while True:
            record = Record.read(reader)
            if record.type is RecordType.SIBLING_NODES_START:
                group = SiblingNodesRecordGroup()
                group.read_without_type(reader)
                if group.parent_node_id == parent_node_id:
                    return group
            elif record.type is RecordType.DATA_END:
                return None
            else:
                raise StorageEngineError(
                    f"unexpected {record.type.name} record in the data section"
                )
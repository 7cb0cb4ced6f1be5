# treestore

`treestore` is the storage layer of a small embedded, tree-structured document
database. The nodes of the tree are stored as typed records in a file made of
fixed-size pages. The package needs only the Python standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Building blocks

- **`treestore.page_file`**: `PageFile` stores `Page`s of 4096 bytes one after
  another in a file. It can create, open and close a file, count its pages,
  load a page by number, append a zeroed page (`allocate_page`) and write a
  page back (`store`). `PageRepositoryPosition` is a page number with an
  offset, and `RecordMarker` wraps one.
- **`treestore.record_page`**: `RecordPage` holds record bytes between an
  8-byte start marker and an 8-byte end marker. The start marker stores the
  data size and the end marker stores `next_page`, the number of the following
  page, 0 meaning none. It supports `get`, `insert`, `erase` and `move_to`,
  and exposes `number`, `data_size`, `max_data_size` and `available_space`.
- **`treestore.record_file`**: `RecordRepository` is the abstract interface
  (`page`, `insert_page_after`, `store`). `RecordFile` implements it over a
  `PageFile` and adds `create`, `open`, `close`, `page_count` and
  `allocate_page`. `SecondaryFile` is a `RecordFile` subclass. `RecordFile`
  can be used as a context manager.
- **`treestore.working_set`**: `RecordPageWorkingSet` loads each page at most
  once and shares it between readers and writers. `save()` stores every page
  it holds, in page-number order.
- **`treestore.reader`** and **`treestore.writer`**:
  `RecordRepositoryReader.read(n)` returns bytes and follows the page chain
  when a page is used up. `RecordRepositoryWriter.write(data)` inserts bytes at
  its position. When a page is full, it moves existing data onto the next page
  and creates that page if there is none. Both handle unsigned LEB128 integers
  (`read_leb128`, `write_leb128`) and report `current_position()`.
- **`treestore.values`**: `Value` is a typed value: null by default, or built
  with `Value.binary`, `Value.boolean` or `Value.utf8_string`. `DataType`
  combines a `PrimitiveDataType` with a `DataTypeModifier`.
- **`treestore.value_codec`**: functions that read and write data types,
  booleans, length-prefixed strings and inline values.
- **`treestore.node_id`**: `NodeID` is an ordered, hashable node identifier.
  The value 0 is the null ID. It is stored as LEB128.
- **`treestore.record`**: a `Record` is a one-byte `RecordType` followed by its
  data. That data is a `NodeID` for parent, node and persistent node ID
  records, a `str` for node names, and a `Value` for inline values. The data
  start, data end and sibling-group start and end records carry no data.
- **`treestore.sibling_nodes`**: `SiblingNodeRecordGroup` is one node: a name,
  a value and a node ID. `SiblingNodesRecordGroup` is the list of nodes that
  share a parent, and it can be read from and written to a record stream.
  `SiblingNodesRecordGroupCache` keeps groups in memory by parent ID.
- **`treestore.storage_engine`**: `StorageEngine.find_sibling_nodes_record_group`
  looks for a group by parent ID, first in its cache and then in the data
  section of the master file, and returns the group or `None`. The data
  section starts with a data start record at offset 0 of page 0 and ends with
  a data end record.

All failures of the storage layer raise `treestore.errors.StorageEngineError`.
Each error carries an `ErrorCode`.

## Example

```python
from treestore.node_id import NodeID
from treestore.reader import RecordRepositoryReader
from treestore.record import Record, RecordType
from treestore.record_file import RecordFile
from treestore.sibling_nodes import SiblingNodeRecordGroup, SiblingNodesRecordGroup
from treestore.storage_engine import StorageEngine
from treestore.values import Value
from treestore.working_set import RecordPageWorkingSet
from treestore.writer import RecordRepositoryWriter

with RecordFile() as repository:
    repository.create("example.dpdb")
    working_set = RecordPageWorkingSet(repository)
    working_set.add(repository.allocate_page())

    writer = RecordRepositoryWriter(working_set, 0, 0)
    Record(RecordType.DATA_START).write(writer)
    group = SiblingNodesRecordGroup(
        NodeID(1), SiblingNodeRecordGroup("child", Value.utf8_string("text"))
    )
    group.write(writer)
    Record(RecordType.DATA_END).write(writer)
    working_set.save()

with RecordFile() as repository:
    repository.open("example.dpdb")
    reader = RecordRepositoryReader(RecordPageWorkingSet(repository), 0, 0)
    print(Record.read(reader).type.name)  # DATA_START

with StorageEngine() as engine:
    engine.open_master_file("example.dpdb")
    found = engine.find_sibling_nodes_record_group(NodeID(1))
    print(found[0].name)                     # child
    print(found[0].value.as_utf8_string())   # text
```

## What the package does not do

- It does not lay out a master file. `StorageEngine.create_master_file`
  creates an empty file with no pages. The engine only looks groups up. It
  cannot add, update or remove sibling groups, and it does not write data
  start or data end records itself.
- Master file metadata records cannot be read or written. Doing so raises
  `StorageEngineError`. Deleted, partial inline, remote value and free-space
  record types are defined in `RecordType`, but reading them raises
  `StorageEngineError`, and writing them writes only their type byte.
- Values are limited to null, binary, boolean and UTF-8 string.
- There is no tree-level database API, no transactions and no command-line
  tool.
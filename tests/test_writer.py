import pytest

from treestore.reader import RecordRepositoryReader
from treestore.record_file import RecordFile
from treestore.working_set import RecordPageWorkingSet
from treestore.writer import RecordRepositoryWriter


@pytest.fixture
def working_set(tmp_path):
    repo = RecordFile()
    repo.create(tmp_path / "db.dpdb")
    repo.allocate_page()
    yield RecordPageWorkingSet(repo)
    repo.close()


def _page_bytes(working_set, number):
    page = working_set.get(number)
    return page.get(0, page.data_size)


def test_write_small_data(working_set):
    writer = RecordRepositoryWriter(working_set, 0, 0)
    writer.write(b"value1")
    position = writer.current_position()
    assert (position.page, position.offset) == (0, 6)
    assert _page_bytes(working_set, 0) == b"value1"


def test_write_inserts_in_the_middle(working_set):
    RecordRepositoryWriter(working_set, 0, 0).write(b"abc")
    writer = RecordRepositoryWriter(working_set, 0, 1)
    writer.write(b"XY")
    assert _page_bytes(working_set, 0) == b"aXYbc"
    assert writer.current_position().offset == 3


def test_write_spanning_pages(working_set):
    data = bytes(range(256)) * 20
    writer = RecordRepositoryWriter(working_set, 0, 0)
    writer.write(data)
    first = working_set.get(0)
    position = writer.current_position()
    assert position.page == first.next_page
    assert position.page != 0
    assert position.offset == len(data) - first.data_size
    assert first.available_space == 0
    reader = RecordRepositoryReader(working_set, 0, 0)
    assert reader.read(len(data)) == data


def test_write_into_full_page_moves_tail(working_set):
    original = bytes(range(200)) * 20 + bytes(80)
    writer = RecordRepositoryWriter(working_set, 0, 0)
    writer.write(original)
    assert working_set.get(0).available_space == 0
    front = RecordRepositoryWriter(working_set, 0, 0)
    front.write(b"X" * 10)
    assert front.current_position().page == 0
    reader = RecordRepositoryReader(working_set, 0, 0)
    assert reader.read(len(original) + 10) == b"X" * 10 + original


def test_leb128_wire_bytes(working_set):
    writer = RecordRepositoryWriter(working_set, 0, 0)
    writer.write_leb128(128)
    assert _page_bytes(working_set, 0) == b"\x80\x01"


@pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 16384, 2**40])
def test_leb128_round_trip(working_set, value):
    writer = RecordRepositoryWriter(working_set, 0, 0)
    writer.write_leb128(value)
    reader = RecordRepositoryReader(working_set, 0, 0)
    assert reader.read_leb128() == value
    assert reader.current_position() == writer.current_position()


def test_leb128_negative_raises(working_set):
    writer = RecordRepositoryWriter(working_set, 0, 0)
    with pytest.raises(ValueError):
        writer.write_leb128(-1)


def test_written_data_survives_save(tmp_path):
    path = tmp_path / "saved.dpdb"
    data = b"0123456789" * 500
    repo = RecordFile()
    repo.create(path)
    repo.allocate_page()
    working_set = RecordPageWorkingSet(repo)
    RecordRepositoryWriter(working_set, 0, 0).write(data)
    working_set.save()
    repo.close()

    reopened = RecordFile()
    reopened.open(path)
    try:
        reader = RecordRepositoryReader(RecordPageWorkingSet(reopened), 0, 0)
        assert reader.read(len(data)) == data
    finally:
        reopened.close()
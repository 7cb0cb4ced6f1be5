import pytest

from treestore.errors import StorageEngineError
from treestore.page_file import PageRepositoryPosition
from treestore.reader import RecordRepositoryReader
from treestore.record_file import RecordFile
from treestore.working_set import RecordPageWorkingSet


def _make_file(path, contents):
    """Write a record file whose pages hold contents, chained in order."""
    repo = RecordFile()
    repo.create(path)
    pages = [repo.allocate_page() for _ in contents]
    for page, data in zip(pages, contents):
        page.insert(data, 0)
    for page, following in zip(pages, pages[1:]):
        page.next_page = following.number
    for page in pages:
        repo.store(page)
    repo.close()


@pytest.fixture
def open_file(tmp_path):
    repos = []

    def opener(contents):
        path = tmp_path / f"data{len(repos)}.dpdb"
        _make_file(path, contents)
        repo = RecordFile()
        repo.open(path)
        repos.append(repo)
        return RecordPageWorkingSet(repo)

    yield opener
    for repo in repos:
        repo.close()


TEN_DIGITS = b"0123456789"
FULL_PAGE = TEN_DIGITS * 408


def test_constructor(open_file):
    working_set = open_file([b""])
    reader = RecordRepositoryReader(working_set, 0, 0)
    assert reader.current_position() == PageRepositoryPosition(0, 0)


def test_read_1(open_file):
    working_set = open_file([b"value1"])
    reader = RecordRepositoryReader(working_set, 0, 0)
    assert reader.read(6) == b"value1"
    position = reader.current_position()
    assert position.page == 0
    assert position.offset == 6


def test_read_2(open_file):
    working_set = open_file([b"value1value2"])
    reader = RecordRepositoryReader(working_set, 0, 0)
    assert reader.read(6) == b"value1"
    assert reader.read(6) == b"value2"
    assert reader.current_position() == PageRepositoryPosition(0, 12)


def test_read_3(open_file):
    working_set = open_file([b"value1value2"])
    reader = RecordRepositoryReader(working_set, 0, 6)
    assert reader.read(6) == b"value2"
    assert reader.current_position() == PageRepositoryPosition(0, 12)


def test_read_4_last_byte_then_next_page(open_file):
    working_set = open_file([FULL_PAGE, TEN_DIGITS])
    reader = RecordRepositoryReader(working_set, 0, 0)
    for _ in range(409):
        assert reader.read(10) == b"0123456789"
    assert reader.current_position() == PageRepositoryPosition(1, 10)


def test_read_5_crosses_page_boundary(open_file):
    working_set = open_file([FULL_PAGE, TEN_DIGITS])
    reader = RecordRepositoryReader(working_set, 0, 4070)
    assert reader.read(15) == b"012345678901234"
    assert reader.current_position() == PageRepositoryPosition(1, 5)


@pytest.mark.parametrize(
    "encoded, expected",
    [
        (b"\x00", 0),
        (b"\x01", 1),
        (b"\x7f", 127),
        (b"\x80\x01", 128),
        (b"\x80\x80\x01", 16384),
    ],
)
def test_read_leb128(open_file, encoded, expected):
    working_set = open_file([encoded])
    reader = RecordRepositoryReader(working_set, 0, 0)
    assert reader.read_leb128() == expected
    assert reader.current_position() == PageRepositoryPosition(0, len(encoded))


def test_read_beyond_data_raises(open_file):
    working_set = open_file([b"abc"])
    reader = RecordRepositoryReader(working_set, 0, 0)
    with pytest.raises(StorageEngineError):
        reader.read(4)


def test_read_past_last_page_raises(open_file):
    working_set = open_file([FULL_PAGE])
    reader = RecordRepositoryReader(working_set, 0, 4075)
    with pytest.raises(StorageEngineError):
        reader.read(10)


def test_read_negative_count_raises(open_file):
    working_set = open_file([b"abc"])
    reader = RecordRepositoryReader(working_set, 0, 0)
    with pytest.raises(ValueError):
        reader.read(-1)
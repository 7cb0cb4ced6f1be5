import pytest

from treestore.errors import StorageEngineError
from treestore.record_file import RecordFile, RecordRepository, SecondaryFile


@pytest.fixture
def record_file(tmp_path):
    rf = RecordFile()
    rf.create(tmp_path / "records.dpdb")
    yield rf
    rf.close()


def test_allocate_pages(record_file):
    first = record_file.allocate_page()
    second = record_file.allocate_page()
    assert (first.number, second.number) == (0, 1)
    assert record_file.page_count() == 2


def test_store_and_reload_page(record_file):
    page = record_file.allocate_page()
    page.insert(b"value1value2", 0)
    record_file.store(page)
    loaded = record_file.page(0)
    assert loaded.get(0, 6) == b"value1"
    assert loaded.get(6, 6) == b"value2"


def test_insert_page_after_links_chain(record_file):
    first = record_file.allocate_page()
    last = record_file.allocate_page()
    first.next_page = last.number
    middle = record_file.insert_page_after(first)
    assert first.next_page == middle.number
    assert middle.next_page == last.number
    assert middle.data_size == 0


def test_insert_page_after_persists_links(record_file):
    first = record_file.allocate_page()
    second = record_file.insert_page_after(first)
    record_file.store(first)
    record_file.store(second)
    assert record_file.page(0).next_page == second.number
    assert record_file.page(second.number).next_page == 0


def test_missing_page_raises(record_file):
    with pytest.raises(StorageEngineError):
        record_file.page(0)


def test_reopen_file(tmp_path):
    path = tmp_path / "records.dpdb"
    with RecordFile() as rf:
        rf.create(path)
        page = rf.allocate_page()
        page.insert(b"0123456789", 0)
        rf.store(page)
    with RecordFile() as rf:
        rf.open(path)
        assert rf.page_count() == 1
        assert rf.page(0).get(0, 10) == b"0123456789"


def test_secondary_file_stores_pages(tmp_path):
    with SecondaryFile() as sf:
        sf.create(tmp_path / "secondary.dpdb")
        page = sf.allocate_page()
        page.insert(b"abc", 0)
        sf.store(page)
        assert isinstance(sf, RecordRepository)
        assert sf.page(0).get(0, 3) == b"abc"


def test_repository_is_abstract():
    with pytest.raises(TypeError):
        RecordRepository()
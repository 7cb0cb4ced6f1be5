"""Record repositories backed by page files."""

from __future__ import annotations

import abc
import os

from treestore.page_file import PageFile
from treestore.record_page import RecordPage


class RecordRepository(abc.ABC):
    """A source of record pages."""

    @abc.abstractmethod
    def page(self, index: int) -> RecordPage:
        """Load the record page with the given number."""

    @abc.abstractmethod
    def insert_page_after(self, page: RecordPage) -> RecordPage:
        """Create a new page and link it into the chain right after page."""

    @abc.abstractmethod
    def store(self, page: RecordPage) -> None:
        """Persist a record page."""


class RecordFile(RecordRepository):
    """A file of record pages."""

    def __init__(self) -> None:
        self._page_file = PageFile()

    def __enter__(self) -> "RecordFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def create(self, path: str | os.PathLike[str]) -> None:
        self._page_file.create(path)

    def open(self, path: str | os.PathLike[str]) -> None:
        self._page_file.open(path)

    def close(self) -> None:
        self._page_file.close()

    def page_count(self) -> int:
        return self._page_file.page_count()

    def page(self, index: int) -> RecordPage:
        return RecordPage.load(self._page_file.load(index))

    def allocate_page(self) -> RecordPage:
        """Append a new empty record page to the file."""
        return RecordPage.create(self._page_file.allocate_page())

    def insert_page_after(self, page: RecordPage) -> RecordPage:
        new_page = self.allocate_page()
        new_page.next_page = page.next_page
        page.next_page = new_page.number
        return new_page

    def store(self, page: RecordPage) -> None:
        page.store(self._page_file)


class SecondaryFile(RecordFile):
    """A record file holding data kept outside the master file."""
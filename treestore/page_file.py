"""A file made of fixed-size pages."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import BinaryIO

from treestore.errors import StorageEngineError

PAGE_SIZE = 4096


@dataclass(frozen=True)
class PageRepositoryPosition:
    """A position in a page repository: a page number and an offset in it."""

    page: int
    offset: int


@dataclass(frozen=True)
class RecordMarker:
    """Marks the position of a record."""

    position: PageRepositoryPosition


@dataclass
class Page:
    """A fixed-size page identified by its number in the file."""

    number: int
    data: bytearray = field(default_factory=lambda: bytearray(PAGE_SIZE))

    size = PAGE_SIZE

    def zero(self) -> None:
        """Set every byte of the page to zero."""
        self.data[:] = bytes(PAGE_SIZE)


class PageFile:
    """Stores pages of PAGE_SIZE bytes one after another in a file."""

    def __init__(self) -> None:
        self._file: BinaryIO | None = None
        self._page_count = 0

    def __enter__(self) -> "PageFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def create(self, path: str | os.PathLike[str]) -> None:
        """Create a new empty page file, replacing any existing one."""
        self.close()
        try:
            self._file = open(path, "w+b")
        except OSError as exc:
            raise StorageEngineError(f"cannot create page file {os.fspath(path)}: {exc}") from exc
        self._page_count = 0

    def open(self, path: str | os.PathLike[str]) -> None:
        """Open an existing page file."""
        self.close()
        try:
            self._file = open(path, "r+b")
        except OSError as exc:
            raise StorageEngineError(f"cannot open page file {os.fspath(path)}: {exc}") from exc
        self._page_count = os.fstat(self._file.fileno()).st_size // PAGE_SIZE

    def close(self) -> None:
        """Close the file; closing twice is harmless."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def _handle(self) -> BinaryIO:
        if self._file is None:
            raise StorageEngineError("page file is not open")
        return self._file

    def page_count(self) -> int:
        """Return the number of pages in the file."""
        return self._page_count

    def load(self, number: int) -> Page:
        """Read the page with the given number."""
        handle = self._handle()
        if not 0 <= number < self._page_count:
            raise StorageEngineError(
                f"page {number} does not exist (page count: {self._page_count})"
            )
        handle.seek(number * PAGE_SIZE)
        data = handle.read(PAGE_SIZE)
        if len(data) != PAGE_SIZE:
            raise StorageEngineError(f"page {number} is truncated")
        return Page(number, bytearray(data))

    def allocate_page(self) -> Page:
        """Append a new zeroed page to the file and return it."""
        handle = self._handle()
        page = Page(self._page_count)
        handle.seek(page.number * PAGE_SIZE)
        handle.write(page.data)
        handle.flush()
        self._page_count += 1
        return page

    def store(self, page: Page) -> None:
        """Write a page back to its place in the file."""
        handle = self._handle()
        if not 0 <= page.number < self._page_count:
            raise StorageEngineError(f"page {page.number} was not allocated")
        handle.seek(page.number * PAGE_SIZE)
        handle.write(page.data)
        handle.flush()
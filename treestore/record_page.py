"""Pages that hold a sequence of record bytes between two markers."""

from __future__ import annotations

import struct
from typing import Protocol

from treestore.errors import StorageEngineError
from treestore.page_file import PAGE_SIZE, Page

_START_MARKER = b"\xf0\x06\x00\x00\x00\x00"
_END_MARKER = b"\xf1\x06\x00\x00\x00\x00\x00\x00"


class PageStore(Protocol):
    def store(self, page: Page) -> None: ...


class RecordPage:
    """A page containing record data, framed by a start and an end marker.

    The start marker holds the size of the data; the end marker holds the
    number of the next page in the chain, 0 meaning none.
    """

    START_MARKER_SIZE = 8
    END_MARKER_SIZE = 8
    MAX_DATA_SIZE = PAGE_SIZE - START_MARKER_SIZE - END_MARKER_SIZE

    def __init__(self, page: Page, data_size: int, available_space: int, next_page: int) -> None:
        self._page = page
        self._data_size = data_size
        self._available_space = available_space
        self.next_page = next_page

    @classmethod
    def create(cls, page: Page) -> "RecordPage":
        """Wrap a freshly allocated page, clearing its contents."""
        page.zero()
        return cls(page, 0, cls.MAX_DATA_SIZE, 0)

    @classmethod
    def load(cls, page: Page) -> "RecordPage":
        """Wrap a page read from storage, decoding its markers."""
        (data_size,) = struct.unpack_from("<H", page.data, 6)
        if data_size > cls.MAX_DATA_SIZE:
            raise StorageEngineError(f"page {page.number} has invalid data size {data_size}")
        (next_page,) = struct.unpack_from("<I", page.data, cls.START_MARKER_SIZE + data_size + 2)
        return cls(page, data_size, cls.MAX_DATA_SIZE - data_size, next_page)

    def store(self, repository: PageStore) -> None:
        """Write the markers into the page and store it in the repository."""
        data = self._page.data
        data[0:6] = _START_MARKER
        struct.pack_into("<H", data, 6, self._data_size)
        end = self.START_MARKER_SIZE + self._data_size
        data[end:end + self.END_MARKER_SIZE] = _END_MARKER
        struct.pack_into("<I", data, end + 2, self.next_page)
        repository.store(self._page)

    @property
    def number(self) -> int:
        return self._page.number

    @property
    def data_size(self) -> int:
        """Amount of record data stored in the page."""
        return self._data_size

    @property
    def max_data_size(self) -> int:
        """Largest amount of record data a page can hold."""
        return self.MAX_DATA_SIZE

    @property
    def available_space(self) -> int:
        """Room left for record data."""
        return self._available_space

    def get(self, pos: int, n: int) -> bytes:
        """Return n bytes of record data starting at pos."""
        if pos < 0 or n < 0 or pos + n > self._data_size:
            raise StorageEngineError(
                f"RecordPage.get (page: {self.number}, pos: {pos}, n: {n}) "
                f"exceeds data size ({self._data_size})"
            )
        start = self.START_MARKER_SIZE + pos
        return bytes(self._page.data[start:start + n])

    def insert(self, data: bytes, pos: int) -> None:
        """Insert bytes at pos, shifting the following data."""
        size = len(data)
        if size > self._available_space:
            raise StorageEngineError(
                f"failed to insert {size} bytes in page {self.number} "
                f"(available space: {self._available_space})"
            )
        if not 0 <= pos <= self._data_size:
            raise StorageEngineError(
                f"insert position {pos} is outside the data of page {self.number}"
            )
        buffer = self._page.data
        start = self.START_MARKER_SIZE + pos
        buffer[start:start] = data
        del buffer[PAGE_SIZE:]
        self._data_size += size
        self._available_space -= size

    def erase(self, pos: int, n: int) -> None:
        """Remove n bytes starting at pos, shifting the following data."""
        if pos < 0 or n < 0 or pos + n > self._data_size:
            raise StorageEngineError(
                f"erase (pos: {pos}, n: {n}) exceeds data size ({self._data_size}) "
                f"of page {self.number}"
            )
        buffer = self._page.data
        start = self.START_MARKER_SIZE + pos
        del buffer[start:start + n]
        buffer.extend(bytes(n))
        self._data_size -= n
        self._available_space += n

    def move_to(self, pos: int, n: int, target: "RecordPage") -> None:
        """Move n bytes starting at pos to the beginning of another page."""
        chunk = self.get(pos, n)
        target.insert(chunk, 0)
        self.erase(pos, n)
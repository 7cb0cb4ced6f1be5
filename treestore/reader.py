"""Sequential reading of bytes from a chain of record pages."""

from __future__ import annotations

from treestore.errors import StorageEngineError
from treestore.page_file import PageRepositoryPosition
from treestore.working_set import RecordPageWorkingSet


class RecordRepositoryReader:
    """Reads record data starting at a page and offset, following page links."""

    def __init__(
        self, working_set: RecordPageWorkingSet, start_page_number: int, start_offset: int
    ) -> None:
        self._working_set = working_set
        self._page = working_set.get(start_page_number)
        self._offset = start_offset

    def current_position(self) -> PageRepositoryPosition:
        """Return the page number and offset of the next byte to read."""
        return PageRepositoryPosition(self._page.number, self._offset)

    def read(self, n: int) -> bytes:
        """Read n bytes, moving on to the next page when this one is used up."""
        if n < 0:
            raise ValueError("cannot read a negative number of bytes")
        chunks = []
        remaining = n
        while self._offset + remaining > self._page.max_data_size:
            count = self._page.max_data_size - self._offset
            chunks.append(self._page.get(self._offset, count))
            next_number = self._page.next_page
            if next_number == 0:
                raise StorageEngineError(
                    f"read of {n} bytes goes past the last page ({self._page.number})"
                )
            self._page = self._working_set.get(next_number)
            self._offset = 0
            remaining -= count
        chunks.append(self._page.get(self._offset, remaining))
        self._offset += remaining
        return b"".join(chunks)

    def read_leb128(self) -> int:
        """Read an unsigned LEB128-encoded integer."""
        result = 0
        shift = 0
        while True:
            (byte,) = self.read(1)
            result += (byte & 0x7F) << shift
            if not byte & 0x80:
                return result
            shift += 7
"""Writing bytes into a chain of record pages."""

from __future__ import annotations

from treestore.page_file import PageRepositoryPosition
from treestore.record_page import RecordPage
from treestore.working_set import RecordPageWorkingSet


class RecordRepositoryWriter:
    """Inserts record data at a page and offset, spilling into following pages."""

    def __init__(
        self, working_set: RecordPageWorkingSet, start_page_number: int, start_offset: int
    ) -> None:
        self._working_set = working_set
        self._page = working_set.get(start_page_number)
        self._offset = start_offset

    def current_position(self) -> PageRepositoryPosition:
        """Return the page number and offset where the next byte goes."""
        return PageRepositoryPosition(self._page.number, self._offset)

    def _following_page(self, page: RecordPage) -> RecordPage:
        if page.next_page != 0:
            return self._working_set.get(page.next_page)
        return self._working_set.insert_page_after(page)

    def write(self, data: bytes | bytearray) -> None:
        """Insert data at the current position, moving existing data as needed."""
        data = bytes(data)
        page = self._page
        size = len(data)
        if self._offset + size <= page.max_data_size:
            available = page.available_space
            if size > available:
                # Make room by pushing the tail of this page to the next one.
                target = self._following_page(page)
                needed = size - available
                page.move_to(page.data_size - needed, needed, target)
            page.insert(data, self._offset)
            self._offset += size
        else:
            # Only part of the data fits: push everything after the current
            # position to the next page, fill this page, then continue there.
            target = self._following_page(page)
            space = page.max_data_size - self._offset
            page.move_to(self._offset, page.data_size - self._offset, target)
            self.write(data[:space])
            self._page = target
            self._offset = 0
            self.write(data[space:])

    def write_leb128(self, value: int) -> None:
        """Write an unsigned integer in LEB128 encoding."""
        if value < 0:
            raise ValueError("LEB128 values must not be negative")
        while True:
            byte = value & 0x7F
            value >>= 7
            if value == 0:
                self.write(bytes([byte]))
                return
            self.write(bytes([byte | 0x80]))
"""An in-memory set of record pages being read or modified."""

from __future__ import annotations

from collections.abc import Iterator

from treestore.record_file import RecordRepository
from treestore.record_page import RecordPage


class RecordPageWorkingSet:
    """Keeps loaded record pages so that readers and writers share them.

    Each page is loaded from the repository at most once; later requests for
    the same page number return the same object.
    """

    def __init__(self, repository: RecordRepository) -> None:
        self._repository = repository
        self._pages: dict[int, RecordPage] = {}

    def __contains__(self, page_number: object) -> bool:
        return page_number in self._pages

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[RecordPage]:
        return (self._pages[number] for number in sorted(self._pages))

    def get(self, page_number: int) -> RecordPage:
        """Return the page with the given number, loading it if needed."""
        page = self._pages.get(page_number)
        if page is None:
            page = self._repository.page(page_number)
            self._pages[page_number] = page
        return page

    def add(self, page: RecordPage) -> None:
        """Add a page; a page already held under the same number is kept."""
        self._pages.setdefault(page.number, page)

    def insert_page_after(self, page: RecordPage) -> RecordPage:
        """Create a new page chained right after page and add it to the set."""
        new_page = self._repository.insert_page_after(page)
        return self._pages.setdefault(new_page.number, new_page)

    def save(self) -> None:
        """Store every page of the set in the repository, by page number."""
        for number in sorted(self._pages):
            self._repository.store(self._pages[number])
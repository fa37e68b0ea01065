"""Project — the ordered set of pages being edited."""

from __future__ import annotations

import time
import uuid

from pagecomposer.config.constants import DEFAULT_PAGE_HEIGHT, DEFAULT_PAGE_WIDTH
from pagecomposer.core.page import Page


def now_ms() -> int:
    return int(time.time() * 1000)


class Project:
    """Owns its pages.  There is always at least one page, and
    ``active_page_index`` always points at one of them.
    """

    def __init__(
        self,
        title: str = "",
        project_id: str | None = None,
        created_at: int | None = None,
        pages: list[Page] | None = None,
        active_page_index: int = 0,
    ) -> None:
        self.id: str = project_id or f"project_{uuid.uuid4().hex}"
        self.title = title
        self.created_at: int = created_at if created_at is not None else now_ms()
        self._pages: list[Page] = list(pages) if pages else [Page()]
        self._active_index = max(0, min(active_page_index, len(self._pages) - 1))

    # --- queries ---

    @property
    def pages(self) -> list[Page]:
        return list(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def active_page_index(self) -> int:
        return self._active_index

    @property
    def active_page(self) -> Page:
        return self._pages[self._active_index]

    def page_by_id(self, page_id: str) -> Page | None:
        for page in self._pages:
            if page.id == page_id:
                return page
        return None

    def find_page_index(self, page_id: str) -> int:
        for i, page in enumerate(self._pages):
            if page.id == page_id:
                return i
        return -1

    # --- mutations ---

    def set_active_page(self, index: int) -> bool:
        """Activate the page at *index*.  Out-of-range indexes are refused."""
        if index < 0 or index >= len(self._pages):
            return False
        self._active_index = index
        return True

    def add_page(self, w: float = DEFAULT_PAGE_WIDTH, h: float = DEFAULT_PAGE_HEIGHT) -> Page:
        page = Page(w, h)
        self._pages.append(page)
        return page

    def remove_page_at(self, index: int) -> bool:
        """Remove the page at *index*.

        Refuses (returns False) when *index* is out of range or the page
        is the last one left.
        """
        if index < 0 or index >= len(self._pages):
            return False
        if len(self._pages) <= 1:
            return False
        self._pages.pop(index)
        if self._active_index >= len(self._pages):
            self._active_index = len(self._pages) - 1
        return True

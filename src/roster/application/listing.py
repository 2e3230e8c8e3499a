"""List view: search, role filter, sort and pagination over the full directory.

Every state change recomputes the whole projection; nothing is cached between
events.
"""

import unicodedata
from dataclasses import dataclass, replace
from enum import Enum

from roster.application.directory_service import DirectoryService, matches_search
from roster.domain import Person

DEFAULT_PAGE_SIZE = 4
MAX_PAGE_SIZE = 100
# Above this many pages the controls collapse into first / window / last.
FULL_PAGINATION_LIMIT = 7


class SortKey(str, Enum):
    NAME = "name"
    EMAIL = "email"
    ROLE = "role"
    DATE = "date"


class ViewMode(str, Enum):
    GRID = "grid"
    LIST = "list"


@dataclass(frozen=True)
class ListState:
    search: str = ""
    role: str = ""
    sort: SortKey = SortKey.NAME
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    view: ViewMode = ViewMode.GRID

    def __post_init__(self):
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}.")
        object.__setattr__(self, "sort", SortKey(self.sort))
        object.__setattr__(self, "view", ViewMode(self.view))


@dataclass(frozen=True)
class ListPage:
    """One rendered projection: the visible slice plus pagination controls."""

    items: list[Person]
    filtered: list[Person]
    page: int
    page_size: int
    total_pages: int
    total_count: int
    page_numbers: list[int | None]
    view: ViewMode

    @property
    def filtered_count(self) -> int:
        return len(self.filtered)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.total_pages > 0 and self.page < self.total_pages

    @property
    def page_info(self) -> str:
        if self.total_pages == 0:
            return "No results"
        return f"Page {self.page} of {self.total_pages}"


def collation_key(text: str) -> str:
    """Accent- and case-insensitive key, so 'Álvaro' sorts next to 'Alvaro'."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def filter_people(people: list[Person], search: str, role: str) -> list[Person]:
    """Apply the search term and the role filter together."""
    result = [p for p in people if matches_search(p, search)]
    if role:
        result = [p for p in result if p.role == role]
    return result


def sort_people(people: list[Person], key: SortKey) -> list[Person]:
    """Stable sort. Text keys ascend; date puts the newest registration first."""
    key = SortKey(key)
    if key is SortKey.DATE:
        return sorted(people, key=lambda p: p.registered_at, reverse=True)
    attr = key.value
    return sorted(people, key=lambda p: collation_key(getattr(p, attr)))


def total_pages(count: int, page_size: int) -> int:
    return -(-count // page_size)


def clamp_page(page: int, pages: int) -> int:
    if pages == 0 or page < 1:
        return 1
    return min(page, pages)


def page_numbers(current: int, pages: int) -> list[int | None]:
    """Page buttons to show. None stands for an ellipsis."""
    if pages <= FULL_PAGINATION_LIMIT:
        return list(range(1, pages + 1))
    numbers: list[int | None] = [1]
    if current > 4:
        numbers.append(None)
    start = max(2, current - 2)
    end = min(pages - 1, current + 2)
    numbers.extend(range(start, end + 1))
    if current < pages - 3:
        numbers.append(None)
    numbers.append(pages)
    return numbers


def build_page(people: list[Person], state: ListState) -> ListPage:
    """Recompute the full projection for state. state.page is clamped, not trusted."""
    filtered = sort_people(filter_people(people, state.search, state.role), state.sort)
    pages = total_pages(len(filtered), state.page_size)
    page = clamp_page(state.page, pages)
    start = (page - 1) * state.page_size
    return ListPage(
        items=filtered[start : start + state.page_size],
        filtered=filtered,
        page=page,
        page_size=state.page_size,
        total_pages=pages,
        total_count=len(people),
        page_numbers=page_numbers(page, pages),
        view=state.view,
    )


class ListViewController:
    """Holds list UI state for one client and re-renders on every event."""

    def __init__(
        self, service: DirectoryService, state: ListState | None = None
    ) -> None:
        self._service = service
        self._state = state or ListState()
        self._page = build_page(self._service.list_people(), self._state)
        self._sync_page()

    @property
    def state(self) -> ListState:
        return self._state

    @property
    def current(self) -> ListPage:
        return self._page

    def refresh(self) -> ListPage:
        """Recompute from the full directory (after any add / edit / delete)."""
        self._page = build_page(self._service.list_people(), self._state)
        self._sync_page()
        return self._page

    def set_search(self, term: str) -> ListPage:
        self._state = replace(self._state, search=(term or "").strip(), page=1)
        return self.refresh()

    def clear_search(self) -> ListPage:
        return self.set_search("")

    def set_role_filter(self, role: str) -> ListPage:
        self._state = replace(self._state, role=(role or "").strip(), page=1)
        return self.refresh()

    def set_sort(self, key: SortKey | str) -> ListPage:
        self._state = replace(self._state, sort=SortKey(key))
        return self.refresh()

    def set_page_size(self, page_size: int) -> ListPage:
        self._state = replace(self._state, page_size=page_size, page=1)
        return self.refresh()

    def set_view(self, view: ViewMode | str) -> ListPage:
        self._state = replace(self._state, view=ViewMode(view))
        return self.refresh()

    def go_to_page(self, page: int) -> ListPage:
        """Move to page. Out-of-range requests leave the current page unchanged."""
        if 1 <= page <= self._page.total_pages:
            self._state = replace(self._state, page=page)
            return self.refresh()
        return self._page

    def first_page(self) -> ListPage:
        return self.go_to_page(1)

    def previous_page(self) -> ListPage:
        return self.go_to_page(self._state.page - 1)

    def next_page(self) -> ListPage:
        return self.go_to_page(self._state.page + 1)

    def last_page(self) -> ListPage:
        return self.go_to_page(self._page.total_pages)

    def _sync_page(self) -> None:
        # Keep the stored page equal to the clamped one.
        if self._state.page != self._page.page:
            self._state = replace(self._state, page=self._page.page)

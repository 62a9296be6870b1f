"""Pages of listing results and the lazy sequence that walks them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Iterator, Optional, Sequence, TypeVar

from MyAnimeList.utils.log import log

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One batch of listing results plus its paging links.

    Attributes:
        items: Parsed entities in server order.
        previous: URL of the previous page, if any.
        next: URL of the next page, if any.
    """

    items: Sequence[T]
    previous: Optional[str] = None
    next: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)


class PagedResults(Iterator[T]):
    """Forward-only, single-pass iterator over a paginated listing.

    Buffers one page at a time. Once the buffered items are consumed and the
    current page has a `next` link, exactly one request is issued for that
    link before anything else is yielded; without a `next` link iteration
    stops. A failing page request raises from `__next__`; items that were
    already yielded are unaffected.

    To start over, run the originating query again; this object cannot be
    rewound.
    """

    def __init__(self, first_page: Page[T], fetch_page: Callable[[str], Page[T]]) -> None:
        """Create the sequence.

        Args:
            first_page: Page returned by the initial request.
            fetch_page: Callback that requests the page behind a cursor URL.
        """
        self._page = first_page
        self._fetch_page = fetch_page
        self._index = 0
        self.pages_fetched = 1

    @property
    def current_page(self) -> Page[T]:
        """The page currently buffered."""
        return self._page

    def __iter__(self) -> PagedResults[T]:
        return self

    def __next__(self) -> T:
        while self._index >= len(self._page.items):
            cursor = self._page.next
            if not cursor:
                raise StopIteration
            log.debug("Fetch page %d: %s", self.pages_fetched + 1, cursor)
            self._page = self._fetch_page(cursor)
            self._index = 0
            self.pages_fetched += 1

        item = self._page.items[self._index]
        self._index += 1
        return item

"""Cursor pagination over Bybit list endpoints."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol

from .base import AccountCategory, PageResult, T, VenueOrder
from .responses import parse_open_orders_page

LOGGER = logging.getLogger(__name__)

OPEN_ORDERS_PAGE_SIZE = 50
LINEAR_SETTLE_COIN = "USDT"


def size_below(page_size: int) -> Callable[[PageResult[Any]], bool]:
    """Treat a page as the last one when it holds fewer than ``page_size`` items.

    Bybit also returns ``nextPageCursor`` on the final page, so the cursor
    alone does not mark the end. A full final page costs one extra,
    empty request. ``fetch_all`` still stops on a full page that comes
    back without a cursor, since following it would restart from page one.
    """

    def is_last_page(page: PageResult[Any]) -> bool:
        return len(page.items) < page_size

    return is_last_page


def fetch_all(
    fetch_page: Callable[[Optional[str]], PageResult[T]],
    is_last_page: Callable[[PageResult[T]], bool] = size_below(OPEN_ORDERS_PAGE_SIZE),
) -> List[T]:
    """Fetch pages one after the other and return every item in order."""
    items: List[T] = []
    cursor: Optional[str] = None
    pages = 0
    while True:
        page = fetch_page(cursor)
        pages += 1
        items.extend(page.items)
        if is_last_page(page):
            break
        if not page.next_cursor:
            LOGGER.warning("Page %d is full but carries no cursor; stopping after %d items", pages, len(items))
            break
        cursor = page.next_cursor
    LOGGER.debug("Fetched %d items across %d pages", len(items), pages)
    return items


class OpenOrdersSource(Protocol):
    def get_open_orders(self, params: Dict[str, Any]) -> Dict[str, Any]:
        ...


class OpenOrdersFetcher:
    """Pulls ``/v5/order/realtime`` pages for one category."""

    def __init__(self, transport: OpenOrdersSource, page_size: int = OPEN_ORDERS_PAGE_SIZE):
        self._transport = transport
        self._page_size = page_size

    def build_params(self, category: AccountCategory, cursor: Optional[str] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {"category": category.value, "limit": self._page_size}
        if category == AccountCategory.LINEAR:
            params["settleCoin"] = LINEAR_SETTLE_COIN
        if cursor:
            params["cursor"] = cursor
        return params

    def fetch_page(self, category: AccountCategory, cursor: Optional[str] = None) -> PageResult[VenueOrder]:
        raw = self._transport.get_open_orders(self.build_params(category, cursor))
        return parse_open_orders_page(raw)

    def fetch_all(self, category: AccountCategory) -> List[VenueOrder]:
        return fetch_all(
            lambda cursor: self.fetch_page(category, cursor),
            size_below(self._page_size),
        )

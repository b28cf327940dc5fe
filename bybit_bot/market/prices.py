"""Reference price lookup with a cached-quote to venue-ticker fallback."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Optional, Protocol

from ..core.errors import PriceUnavailable
from ..core.symbols import SymbolMapper
from ..orders.base import AccountCategory, GenericOrder, PriceQuote, to_decimal

LOGGER = logging.getLogger(__name__)

ZERO = Decimal("0")


class TickerService(Protocol):
    def get_ticker(self, category: AccountCategory, venue_symbol: str) -> Optional[PriceQuote]:
        ...


class QuoteCache:
    """Latest bid/ask per instrument, fed by the surrounding trading system.

    Quotes are keyed by Bybit symbol, so ``BTC/USDT`` and ``BTCUSDT`` share
    an entry. The resolver only reads from it. An instrument that was
    never updated reads as a zero quote, i.e. "unknown".
    """

    def __init__(self, symbol_mapper: Optional[SymbolMapper] = None) -> None:
        self._symbol_mapper = symbol_mapper or SymbolMapper()
        self._quotes: Dict[str, PriceQuote] = {}

    def update(self, instrument: str, bid, ask) -> None:
        self._quotes[self._symbol_mapper.to_venue_symbol(instrument)] = PriceQuote(
            bid=to_decimal(bid) or ZERO,
            ask=to_decimal(ask) or ZERO,
        )

    def get_quote(self, instrument: str) -> PriceQuote:
        return self._quotes.get(self._symbol_mapper.to_venue_symbol(instrument), PriceQuote(bid=ZERO, ask=ZERO))


class PriceResolver:
    """Resolves the price an order would trade against right now.

    Buys look at the ask and sells at the bid. A zero cached price is
    treated as missing, which is the usual state for instruments the
    trading system has not subscribed to yet, and the venue ticker is
    queried instead.
    """

    def __init__(self, quote_cache: QuoteCache, ticker_service: TickerService, symbol_mapper: SymbolMapper):
        self._quote_cache = quote_cache
        self._ticker_service = ticker_service
        self._symbol_mapper = symbol_mapper

    def resolve(self, category: AccountCategory, order: GenericOrder) -> Decimal:
        price = self._quote_cache.get_quote(order.symbol).side_price(order.direction)
        if price != ZERO:
            return price

        venue_symbol = self._symbol_mapper.to_venue_symbol(order.symbol)
        LOGGER.info("No cached quote for %s, querying %s ticker %s", order.symbol, category.value, venue_symbol)
        ticker = self._ticker_service.get_ticker(category, venue_symbol)
        if ticker is None:
            raise PriceUnavailable(order.symbol)
        price = ticker.side_price(order.direction)
        if price is None or price <= ZERO:
            raise PriceUnavailable(order.symbol)
        return price

"""High level bot facade used by the CLI and the surrounding trading system."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol

from .bybit_client import BybitClientFactory, BybitTickerService, BybitTransport
from .config import BybitConfig
from .errors import VenueError
from .symbols import SymbolMapper
from ..market.prices import PriceResolver, QuoteCache, TickerService
from ..orders.base import AccountCategory, CancelRequest, GenericOrder, OrderResult, VenueOrder, VenueOrderRequest
from ..orders.pagination import OpenOrdersFetcher
from ..orders.responses import parse_order_result
from ..orders.translator import OrderTranslator

LOGGER = logging.getLogger(__name__)


class Transport(Protocol):
    def place_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def amend_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def cancel_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def get_open_orders(self, params: Dict[str, Any]) -> Dict[str, Any]:
        ...


class BybitBot:
    """Facade translating generic orders, sending them and classifying replies.

    Every request is fully built before the transport is touched, so an
    unsupported order or an unresolvable price never costs a round-trip.
    Venue rejections are logged and re-raised as ``VenueError``; retrying
    is left to the caller and to pybit's own retry policy.
    """

    def __init__(
        self,
        transport: Transport,
        ticker_service: TickerService,
        quote_cache: Optional[QuoteCache] = None,
        symbol_mapper: Optional[SymbolMapper] = None,
    ):
        self._transport = transport
        self._symbol_mapper = symbol_mapper or SymbolMapper()
        self.quote_cache = quote_cache or QuoteCache(self._symbol_mapper)
        self._translator = OrderTranslator(
            self._symbol_mapper,
            PriceResolver(self.quote_cache, ticker_service, self._symbol_mapper),
        )
        self._open_orders = OpenOrdersFetcher(transport)

    @classmethod
    def from_config(cls, config: BybitConfig, quote_cache: Optional[QuoteCache] = None) -> "BybitBot":
        session = BybitClientFactory.create_client(config)
        return cls(BybitTransport(session), BybitTickerService(session), quote_cache=quote_cache)

    def place_order(self, category: AccountCategory, order: GenericOrder) -> OrderResult:
        request = self._translator.build_place_request(category, order)
        return self._submit("place", self._transport.place_order, request)

    def amend_order(self, category: AccountCategory, order: GenericOrder) -> OrderResult:
        request = self._translator.build_amend_request(category, order)
        return self._submit("amend", self._transport.amend_order, request)

    def cancel_order(self, category: AccountCategory, order: GenericOrder) -> OrderResult:
        request = self._translator.build_cancel_request(category, order)
        return self._submit("cancel", self._transport.cancel_order, request)

    def get_open_orders(self, category: AccountCategory) -> List[VenueOrder]:
        try:
            orders = self._open_orders.fetch_all(category)
        except VenueError as exc:
            LOGGER.error("Fetching %s open orders failed: %s", category.value, exc, exc_info=True)
            raise
        LOGGER.info("Loaded %d open %s orders.", len(orders), category.value)
        return orders

    def _submit(
        self,
        action: str,
        send: Callable[[Dict[str, Any]], Dict[str, Any]],
        request: VenueOrderRequest | CancelRequest,
    ) -> OrderResult:
        payload = request.to_payload()
        LOGGER.info("Submitting %s request: %s", action, payload)
        try:
            result = parse_order_result(request, send(payload))
        except VenueError as exc:
            LOGGER.error("%s request failed: %s", action.capitalize(), exc, exc_info=True)
            raise
        LOGGER.info("%s request accepted: order id %s", action.capitalize(), result.order_id)
        return result

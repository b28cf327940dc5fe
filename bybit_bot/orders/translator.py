"""Translation of generic orders into Bybit V5 trade requests."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ..core.errors import (
    AmbiguousOrder,
    MissingBrokerIdentifier,
    UnsupportedOperation,
    UnsupportedOrderKind,
)
from ..core.symbols import SymbolMapper
from ..market.prices import PriceResolver
from .base import (
    AccountCategory,
    CancelRequest,
    GenericOrder,
    OrderDirection,
    OrderFilter,
    OrderKind,
    OrderSide,
    TriggerDirection,
    VenueOrderRequest,
    VenueOrderType,
)
from .filters import classify_filter

LOGGER = logging.getLogger(__name__)

PARTIAL_TPSL_MODE = "Partial"


def to_quote_notional(quantity: Decimal, price: Decimal) -> Decimal:
    """Re-express a base-asset quantity in quote currency.

    Bybit sizes spot market buys by the amount of quote coin spent.
    """
    return quantity * price


def infer_trigger_direction(trigger_price: Decimal, market_price: Decimal) -> TriggerDirection:
    return TriggerDirection.UP if trigger_price > market_price else TriggerDirection.DOWN


def _require(value: Optional[Decimal], field_name: str, order: GenericOrder) -> Decimal:
    if value is None:
        raise ValueError(f"{order.kind.value} order {order.id} requires {field_name}.")
    return value


class OrderTranslator:
    """Builds create, amend and cancel requests for one account category."""

    def __init__(self, symbol_mapper: SymbolMapper, price_resolver: PriceResolver):
        self._symbol_mapper = symbol_mapper
        self._price_resolver = price_resolver

    def build_place_request(self, category: AccountCategory, order: GenericOrder) -> VenueOrderRequest:
        if order.direction == OrderDirection.HOLD:
            raise UnsupportedOperation()

        req = VenueOrderRequest(
            category=category,
            symbol=self._symbol_mapper.to_venue_symbol(order.symbol),
            side=OrderSide.BUY if order.direction == OrderDirection.BUY else OrderSide.SELL,
            quantity=abs(order.quantity),
            position_idx=0,
            order_filter=classify_filter(category, order.kind),
        )
        spot_buy = category == AccountCategory.SPOT and order.direction == OrderDirection.BUY

        if order.kind == OrderKind.LIMIT:
            req.order_type = VenueOrderType.LIMIT
            req.price = _require(order.limit_price, "a limit price", order)
        elif order.kind == OrderKind.MARKET:
            req.order_type = VenueOrderType.MARKET
            if spot_buy:
                req.quantity = to_quote_notional(req.quantity, self._price_resolver.resolve(category, order))
        elif order.kind == OrderKind.STOP_LIMIT:
            req.order_type = VenueOrderType.LIMIT
            req.price = _require(order.limit_price, "a limit price", order)
            req.trigger_price = _require(order.stop_price, "a stop price", order)
            req.trigger_direction = self._trigger_direction(category, order, req.trigger_price)
            req.order_filter = OrderFilter.STOP_ORDER
            req.tpsl_mode = PARTIAL_TPSL_MODE
        elif order.kind == OrderKind.STOP_MARKET:
            req.order_type = VenueOrderType.MARKET
            req.trigger_price = _require(order.stop_price, "a stop price", order)
            req.trigger_direction = self._trigger_direction(category, order, req.trigger_price)
            req.order_filter = OrderFilter.STOP_ORDER
            req.reduce_only = True
            if spot_buy:
                req.quantity = to_quote_notional(req.quantity, req.trigger_price)
        elif order.kind == OrderKind.LIMIT_IF_TOUCHED:
            req.order_type = VenueOrderType.LIMIT
            req.price = _require(order.limit_price, "a limit price", order)
            req.trigger_price = _require(order.trigger_price, "a trigger price", order)
            req.trigger_direction = self._trigger_direction(category, order, req.trigger_price)
        else:
            raise UnsupportedOrderKind(order.kind)

        LOGGER.debug("Translated order %s into %s", order.id, req)
        return req

    def build_amend_request(self, category: AccountCategory, order: GenericOrder) -> VenueOrderRequest:
        if not order.broker_ids:
            raise MissingBrokerIdentifier(order.id)
        req = self.build_place_request(category, order)
        req.order_id = order.broker_ids[0]
        return req

    def build_cancel_request(self, category: AccountCategory, order: GenericOrder) -> CancelRequest:
        if not order.broker_ids:
            raise MissingBrokerIdentifier(order.id)
        if len(order.broker_ids) > 1:
            raise AmbiguousOrder(order.id, order.broker_ids)
        return CancelRequest(
            category=category,
            symbol=self._symbol_mapper.to_venue_symbol(order.symbol),
            order_id=order.broker_ids[0],
            order_filter=classify_filter(category, order.kind),
        )

    def _trigger_direction(
        self, category: AccountCategory, order: GenericOrder, trigger_price: Decimal
    ) -> TriggerDirection:
        market_price = self._price_resolver.resolve(category, order)
        return infer_trigger_direction(trigger_price, market_price)

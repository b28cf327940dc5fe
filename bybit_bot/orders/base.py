"""Shared order dataclasses and enums."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class OrderDirection(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class OrderKind(str, Enum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP_LIMIT = "STOP_LIMIT"
    STOP_MARKET = "STOP_MARKET"
    LIMIT_IF_TOUCHED = "LIMIT_IF_TOUCHED"
    TRAILING_STOP = "TRAILING_STOP"
    MARKET_ON_OPEN = "MARKET_ON_OPEN"
    MARKET_ON_CLOSE = "MARKET_ON_CLOSE"


class AccountCategory(str, Enum):
    SPOT = "spot"
    LINEAR = "linear"
    INVERSE = "inverse"
    OPTION = "option"


class OrderSide(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class VenueOrderType(str, Enum):
    LIMIT = "Limit"
    MARKET = "Market"


class OrderFilter(str, Enum):
    ORDER = "Order"
    STOP_ORDER = "StopOrder"
    TPSL_ORDER = "tpslOrder"


class TriggerDirection(int, Enum):
    """Bybit fires on price rising through (1) or falling through (2) the trigger."""

    UP = 1
    DOWN = 2


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_decimal(value: Decimal) -> str:
    """Render a decimal the way Bybit expects: plain notation, no exponent."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


@dataclass
class GenericOrder:
    """Venue-agnostic order as handed over by the order management system."""

    id: int
    symbol: str
    direction: OrderDirection
    quantity: Decimal
    kind: OrderKind
    limit_price: Optional[Decimal] = None
    stop_price: Optional[Decimal] = None
    trigger_price: Optional[Decimal] = None
    broker_ids: List[str] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.direction = OrderDirection(self.direction)
        self.kind = OrderKind(self.kind)
        self.quantity = to_decimal(self.quantity)
        self.limit_price = to_decimal(self.limit_price)
        self.stop_price = to_decimal(self.stop_price)
        self.trigger_price = to_decimal(self.trigger_price)


@dataclass(frozen=True)
class PriceQuote:
    bid: Decimal
    ask: Decimal

    def side_price(self, direction: OrderDirection) -> Decimal:
        return self.ask if direction == OrderDirection.BUY else self.bid


@dataclass
class VenueOrderRequest:
    """Body of a Bybit ``/v5/order/create`` or ``/v5/order/amend`` call."""

    category: AccountCategory
    symbol: str
    side: OrderSide
    quantity: Decimal
    order_type: Optional[VenueOrderType] = None
    price: Optional[Decimal] = None
    trigger_price: Optional[Decimal] = None
    trigger_direction: Optional[TriggerDirection] = None
    order_filter: Optional[OrderFilter] = None
    reduce_only: Optional[bool] = None
    tpsl_mode: Optional[str] = None
    position_idx: int = 0
    order_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "category": self.category.value,
            "symbol": self.symbol,
            "side": self.side.value,
            "qty": format_decimal(self.quantity),
            "positionIdx": self.position_idx,
        }
        if self.order_type is not None:
            payload["orderType"] = self.order_type.value
        if self.price is not None:
            payload["price"] = format_decimal(self.price)
        if self.trigger_price is not None:
            payload["triggerPrice"] = format_decimal(self.trigger_price)
        if self.trigger_direction is not None:
            payload["triggerDirection"] = self.trigger_direction.value
        if self.order_filter is not None:
            payload["orderFilter"] = self.order_filter.value
        if self.reduce_only is not None:
            payload["reduceOnly"] = self.reduce_only
        if self.tpsl_mode is not None:
            payload["tpslMode"] = self.tpsl_mode
        if self.order_id is not None:
            payload["orderId"] = self.order_id
        return payload


@dataclass
class CancelRequest:
    category: AccountCategory
    symbol: str
    order_id: str
    order_filter: Optional[OrderFilter] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "category": self.category.value,
            "symbol": self.symbol,
            "orderId": self.order_id,
        }
        if self.order_filter is not None:
            payload["orderFilter"] = self.order_filter.value
        return payload


@dataclass
class PageResult(Generic[T]):
    items: List[T]
    next_cursor: Optional[str] = None


@dataclass
class VenueOrder:
    """An open order as reported by ``/v5/order/realtime``."""

    order_id: str
    symbol: str
    side: str
    order_type: str
    quantity: Decimal
    price: Optional[Decimal] = None
    trigger_price: Optional[Decimal] = None
    status: str = ""
    order_filter: Optional[str] = None
    order_link_id: str = ""
    created_time: Optional[int] = None


@dataclass
class OrderResult:
    request: VenueOrderRequest | CancelRequest
    order_id: str
    raw_response: Dict[str, Any]
    order_link_id: str = ""

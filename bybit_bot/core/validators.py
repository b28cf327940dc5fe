"""Input validation helpers."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..orders.base import AccountCategory, OrderDirection, OrderKind


def normalize_symbol(symbol: str) -> str:
    if not symbol or not symbol.strip():
        raise ValueError("Symbol must be a non-empty string.")
    return symbol.strip().upper()


def validate_direction(direction: str) -> OrderDirection:
    normalized = direction.strip().upper()
    try:
        return OrderDirection(normalized)
    except ValueError as exc:
        raise ValueError(f"Direction must be BUY, SELL or HOLD. Got '{direction}'.") from exc


def validate_quantity(quantity: Any) -> Decimal:
    try:
        qty = Decimal(str(quantity))
    except (TypeError, ValueError, InvalidOperation) as exc:
        raise ValueError("Quantity must be a number.") from exc
    if not qty.is_finite() or qty == 0:
        raise ValueError("Quantity must be a non-zero number.")
    return qty


def validate_price(price: Any | None) -> Decimal | None:
    if price is None:
        return None
    try:
        price_val = Decimal(str(price))
    except (TypeError, ValueError, InvalidOperation) as exc:
        raise ValueError("Price must be a number when provided.") from exc
    if not price_val.is_finite() or price_val <= 0:
        raise ValueError("Price must be greater than zero.")
    return price_val


def validate_category(category: str) -> AccountCategory:
    normalized = category.strip().lower()
    try:
        return AccountCategory(normalized)
    except ValueError as exc:
        allowed = ", ".join(c.value for c in AccountCategory)
        raise ValueError(f"Category must be one of {allowed}. Got '{category}'.") from exc


def validate_order_kind(kind: str) -> OrderKind:
    normalized = kind.strip().upper().replace("-", "_")
    try:
        return OrderKind(normalized)
    except ValueError as exc:
        allowed = ", ".join(k.value for k in OrderKind)
        raise ValueError(f"Order kind must be one of {allowed}. Got '{kind}'.") from exc

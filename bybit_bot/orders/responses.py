"""Interpretation of Bybit V5 response envelopes."""
from __future__ import annotations

from typing import Any, Dict, Mapping

from pybit.exceptions import InvalidRequestError

from ..core.errors import VenueError
from .base import CancelRequest, OrderResult, PageResult, VenueOrder, VenueOrderRequest, to_decimal

SUCCESS_CODE = 0


def classify_response(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the ``result`` block of a successful envelope.

    Bybit answers HTTP 200 for most business rejections, so success is
    decided by ``retCode`` alone.
    """
    if not isinstance(raw, Mapping):
        raise VenueError(None, f"Unexpected response payload: {raw!r}")
    code = raw.get("retCode")
    try:
        code = int(code) if code is not None else None
    except (TypeError, ValueError):
        pass
    if code != SUCCESS_CODE:
        raise VenueError(code, str(raw.get("retMsg", "")))
    return raw.get("result") or {}


def venue_error_from_exception(exc: InvalidRequestError) -> VenueError:
    """Convert pybit's rejection exception into a ``VenueError``."""
    return VenueError(getattr(exc, "status_code", None), str(getattr(exc, "message", exc)))


def parse_order_result(request: VenueOrderRequest | CancelRequest, raw: Mapping[str, Any]) -> OrderResult:
    result = classify_response(raw)
    return OrderResult(
        request=request,
        order_id=str(result.get("orderId", "")),
        order_link_id=str(result.get("orderLinkId", "")),
        raw_response=dict(raw),
    )


def parse_venue_order(entry: Mapping[str, Any]) -> VenueOrder:
    created = entry.get("createdTime")
    return VenueOrder(
        order_id=str(entry.get("orderId", "")),
        order_link_id=str(entry.get("orderLinkId", "")),
        symbol=str(entry.get("symbol", "")),
        side=str(entry.get("side", "")),
        order_type=str(entry.get("orderType", "")),
        quantity=to_decimal(entry.get("qty")),
        price=to_decimal(entry.get("price")),
        trigger_price=to_decimal(entry.get("triggerPrice")),
        status=str(entry.get("orderStatus", "")),
        order_filter=entry.get("orderFilter") or None,
        created_time=int(created) if created else None,
    )


def parse_open_orders_page(raw: Mapping[str, Any]) -> PageResult[VenueOrder]:
    result = classify_response(raw)
    items = [parse_venue_order(entry) for entry in result.get("list") or []]
    return PageResult(items=items, next_cursor=result.get("nextPageCursor") or None)

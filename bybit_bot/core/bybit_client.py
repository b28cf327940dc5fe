"""Factory helpers and thin adapters around pybit's V5 ``HTTP`` session."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from pybit.exceptions import InvalidRequestError
from pybit.unified_trading import HTTP

from ..orders.base import AccountCategory, PriceQuote, to_decimal
from ..orders.responses import classify_response, venue_error_from_exception
from .config import BybitConfig

LOGGER = logging.getLogger(__name__)

ZERO = Decimal("0")


class BybitClientFactory:
    """Builds authenticated pybit sessions following project defaults."""

    @staticmethod
    def create_client(config: BybitConfig) -> HTTP:
        if config.testnet:
            LOGGER.info("Using Bybit testnet endpoint")
        return HTTP(
            testnet=config.testnet,
            api_key=config.api_key,
            api_secret=config.api_secret,
            recv_window=config.recv_window,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )


def _call(method: Callable[..., Dict[str, Any]], kwargs: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return method(**kwargs)
    except InvalidRequestError as exc:
        raise venue_error_from_exception(exc) from exc


class BybitTransport:
    """Sends already-built payloads; signing, retries and HTTP stay in pybit."""

    def __init__(self, session: HTTP):
        self._session = session

    def place_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return _call(self._session.place_order, payload)

    def amend_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return _call(self._session.amend_order, payload)

    def cancel_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return _call(self._session.cancel_order, payload)

    def get_open_orders(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return _call(self._session.get_open_orders, params)


class BybitTickerService:
    """Best bid/ask snapshot from ``/v5/market/tickers``."""

    def __init__(self, session: HTTP):
        self._session = session

    def get_ticker(self, category: AccountCategory, venue_symbol: str) -> Optional[PriceQuote]:
        raw = _call(self._session.get_tickers, {"category": category.value, "symbol": venue_symbol})
        entries = classify_response(raw).get("list") or []
        if not entries:
            LOGGER.warning("Bybit returned no %s ticker for %s", category.value, venue_symbol)
            return None
        entry = entries[0]
        bid = to_decimal(entry.get("bid1Price"))
        ask = to_decimal(entry.get("ask1Price"))
        if bid is None and ask is None:
            return None
        return PriceQuote(bid=bid or ZERO, ask=ask or ZERO)

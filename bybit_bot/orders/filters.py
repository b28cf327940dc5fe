"""Order filter classification for Bybit spot conditional orders."""
from __future__ import annotations

from typing import Optional

from .base import AccountCategory, OrderFilter, OrderKind

CONDITIONAL_KINDS = frozenset(
    {OrderKind.STOP_LIMIT, OrderKind.STOP_MARKET, OrderKind.LIMIT_IF_TOUCHED}
)


def classify_filter(category: AccountCategory, kind: OrderKind) -> Optional[OrderFilter]:
    """Return the ``orderFilter`` tag Bybit needs to locate the order.

    Only spot indexes conditional orders separately; every derivatives
    category gets ``None`` whatever the kind.
    """
    if category != AccountCategory.SPOT:
        return None
    if kind in CONDITIONAL_KINDS:
        return OrderFilter.STOP_ORDER
    return None

"""Mapping between generic instrument names and Bybit symbols."""
from __future__ import annotations

import re
from typing import Dict, Optional

from .validators import normalize_symbol

_SEPARATORS = re.compile(r"[/\-_:\s]")


class SymbolMapper:
    """Turns ``btc/usdt``, ``BTC-USDT`` or ``BTCUSDT`` into ``BTCUSDT``.

    Explicit ``overrides`` win over the separator-stripping rule, which
    covers instruments whose Bybit name is not a plain concatenation
    (for example dated futures or options).
    """

    def __init__(self, overrides: Optional[Dict[str, str]] = None) -> None:
        self._overrides = {normalize_symbol(k): v for k, v in (overrides or {}).items()}

    def to_venue_symbol(self, instrument: str) -> str:
        normalized = normalize_symbol(instrument)
        if normalized in self._overrides:
            return self._overrides[normalized]
        return _SEPARATORS.sub("", normalized)

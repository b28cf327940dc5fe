"""Tests for the command line front end."""
from __future__ import annotations

import json
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bybit_bot import cli
from bybit_bot.core.config import BybitConfig
from bybit_bot.core.errors import VenueError
from bybit_bot.orders.base import (
    AccountCategory,
    CancelRequest,
    GenericOrder,
    OrderResult,
    OrderSide,
    VenueOrder,
    VenueOrderRequest,
)


class DummyBot:
    """Stands in for BybitBot and records what the CLI asked for."""

    def __init__(self, reject: bool = False) -> None:
        self.reject = reject
        self.calls: List[tuple[str, AccountCategory, Any]] = []

    def _result(self, request) -> OrderResult:
        if self.reject:
            raise VenueError(110007, "ab not enough for new order")
        return OrderResult(request=request, order_id="bybit-7", raw_response={"retCode": 0})

    def place_order(self, category: AccountCategory, order: GenericOrder) -> OrderResult:
        self.calls.append(("place", category, order))
        request = VenueOrderRequest(category=category, symbol="BTCUSDT", side=OrderSide.BUY, quantity=abs(order.quantity))
        return self._result(request)

    def amend_order(self, category: AccountCategory, order: GenericOrder) -> OrderResult:
        self.calls.append(("amend", category, order))
        request = VenueOrderRequest(category=category, symbol="BTCUSDT", side=OrderSide.BUY, quantity=abs(order.quantity))
        return self._result(request)

    def cancel_order(self, category: AccountCategory, order: GenericOrder) -> OrderResult:
        self.calls.append(("cancel", category, order))
        return self._result(CancelRequest(category=category, symbol="BTCUSDT", order_id=order.broker_ids[0]))

    def get_open_orders(self, category: AccountCategory) -> List[VenueOrder]:
        self.calls.append(("open", category, None))
        return [VenueOrder(order_id="o-1", symbol="BTCUSDT", side="Buy", order_type="Limit", quantity=Decimal("0.1"), price=Decimal("25000"))]


@pytest.fixture
def bot(monkeypatch: pytest.MonkeyPatch) -> DummyBot:
    dummy = DummyBot()
    monkeypatch.setattr(cli.BybitConfig, "from_env", classmethod(lambda cls: BybitConfig(api_key="k", api_secret="s")))
    monkeypatch.setattr(cli.BybitBot, "from_config", classmethod(lambda cls, config: dummy))
    monkeypatch.setattr(cli, "setup_logging", lambda path: None)
    return dummy


def test_place_builds_generic_order(bot: DummyBot, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["--category", "spot", "place", "stop_limit", "btc/usdt", "buy", "0.5", "--limit-price", "104", "--stop-price", "105"])

    assert code == 0
    action, category, order = bot.calls[0]
    assert action == "place"
    assert category == AccountCategory.SPOT
    assert order.symbol == "BTC/USDT"
    assert order.stop_price == Decimal("105")
    assert order.limit_price == Decimal("104")
    assert "bybit-7" in capsys.readouterr().out


def test_amend_attaches_order_id(bot: DummyBot) -> None:
    code = cli.main(["amend", "limit", "BTCUSDT", "sell", "1", "--limit-price", "30000", "--order-id", "abc"])

    assert code == 0
    _, category, order = bot.calls[0]
    assert category == AccountCategory.LINEAR
    assert order.broker_ids == ["abc"]


def test_cancel_uses_kind_for_filter(bot: DummyBot, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["--raw-json", "--category", "spot", "cancel", "BTCUSDT", "abc", "--kind", "STOP_MARKET"])

    assert code == 0
    _, _, order = bot.calls[0]
    assert order.kind.value == "STOP_MARKET"
    payload = json.loads(capsys.readouterr().out)
    assert payload["request"]["orderId"] == "abc"


def test_open_orders_prints_table(bot: DummyBot, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["open-orders"]) == 0

    out = capsys.readouterr().out
    assert "o-1" in out
    assert "order_type" in out


def test_venue_rejection_returns_exit_code_one(bot: DummyBot, capsys: pytest.CaptureFixture[str]) -> None:
    bot.reject = True

    code = cli.main(["place", "market", "BTCUSDT", "sell", "1"])

    assert code == 1
    assert "110007" in capsys.readouterr().err


def test_invalid_direction_is_a_usage_error(bot: DummyBot) -> None:
    with pytest.raises(SystemExit):
        cli.main(["place", "market", "BTCUSDT", "sideways", "1"])

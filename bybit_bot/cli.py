"""Command line interface for the Bybit V5 order bot."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict, List

import pandas as pd

from .core.bot import BybitBot
from .core.config import BybitConfig
from .core.errors import BybitBotError
from .core.logger import setup_logging
from .core.validators import (
    normalize_symbol,
    validate_category,
    validate_direction,
    validate_order_kind,
    validate_price,
    validate_quantity,
)
from .orders.base import GenericOrder, OrderKind, OrderResult, VenueOrder

LOGGER = logging.getLogger(__name__)

OPEN_ORDER_COLUMNS = [
    "order_id",
    "symbol",
    "side",
    "order_type",
    "quantity",
    "price",
    "trigger_price",
    "status",
    "order_filter",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bybit-bot",
        description="CLI wrapper translating generic orders into Bybit V5 trade requests.",
    )
    parser.add_argument(
        "--log-file",
        default="bybit-bot.log",
        help="Path to write log output (default: bybit-bot.log)",
    )
    parser.add_argument(
        "--raw-json",
        action="store_true",
        help="Print raw JSON responses instead of the human-friendly summary.",
    )
    parser.add_argument(
        "--category",
        default=None,
        help="Account category: spot, linear, inverse or option (default: BYBIT_CATEGORY or linear)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    place_parser = subparsers.add_parser("place", help="Place a new order")
    _add_order_arguments(place_parser)

    amend_parser = subparsers.add_parser("amend", help="Amend an existing order")
    _add_order_arguments(amend_parser)
    amend_parser.add_argument("--order-id", required=True, help="Bybit order id to amend")

    cancel_parser = subparsers.add_parser("cancel", help="Cancel an existing order")
    cancel_parser.add_argument("symbol", help="Trading symbol, e.g. BTCUSDT")
    cancel_parser.add_argument("order_id", help="Bybit order id to cancel")
    cancel_parser.add_argument(
        "--kind",
        default=OrderKind.LIMIT.value,
        help="Kind of the order being cancelled; spot conditional orders need it (default: LIMIT)",
    )

    subparsers.add_parser("open-orders", help="List every open order in the category")

    return parser


def _add_order_arguments(sub_parser: argparse.ArgumentParser) -> None:
    sub_parser.add_argument("kind", help="LIMIT, MARKET, STOP_LIMIT, STOP_MARKET or LIMIT_IF_TOUCHED")
    sub_parser.add_argument("symbol", help="Trading symbol, e.g. BTCUSDT or BTC/USDT")
    sub_parser.add_argument("direction", help="Order direction BUY or SELL")
    sub_parser.add_argument("quantity", help="Order quantity (base asset amount)")
    sub_parser.add_argument("--limit-price", default=None, help="Limit price")
    sub_parser.add_argument("--stop-price", default=None, help="Stop price for stop orders")
    sub_parser.add_argument("--trigger-price", default=None, help="Trigger price for limit-if-touched orders")


def _order_from_args(args: argparse.Namespace) -> GenericOrder:
    broker_ids = [args.order_id] if getattr(args, "order_id", None) else []
    return GenericOrder(
        id=0,
        symbol=normalize_symbol(args.symbol),
        direction=validate_direction(args.direction),
        quantity=validate_quantity(args.quantity),
        kind=validate_order_kind(args.kind),
        limit_price=validate_price(args.limit_price),
        stop_price=validate_price(args.stop_price),
        trigger_price=validate_price(args.trigger_price),
        broker_ids=broker_ids,
    )


def _result_as_summary(payload: Dict[str, Any], raw_json: bool) -> str:
    if raw_json:
        return json.dumps(payload, indent=2, default=str)
    lines = ["Order Summary:"]
    for key, value in payload.items():
        lines.append(f"  - {key}: {value}")
    return "\n".join(lines)


def _build_result_payload(result: OrderResult) -> Dict[str, Any]:
    return {
        "order_id": result.order_id,
        "order_link_id": result.order_link_id,
        "request": result.request.to_payload(),
        "response": result.raw_response,
    }


def _open_orders_table(orders: List[VenueOrder]) -> str:
    if not orders:
        return "No open orders."
    frame = pd.DataFrame([asdict(order) for order in orders], columns=OPEN_ORDER_COLUMNS)
    return frame.to_string(index=False)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_file)
    LOGGER.info("Starting CLI with args: %s", args)

    try:
        config = BybitConfig.from_env()
    except EnvironmentError as exc:
        LOGGER.error("Configuration error: %s", exc)
        parser.error(str(exc))
        return 1

    bot = BybitBot.from_config(config)

    try:
        category = validate_category(args.category or config.default_category)
        if args.command == "place":
            result = bot.place_order(category, _order_from_args(args))
        elif args.command == "amend":
            result = bot.amend_order(category, _order_from_args(args))
        elif args.command == "cancel":
            order = GenericOrder(
                id=0,
                symbol=normalize_symbol(args.symbol),
                direction="BUY",
                quantity=0,
                kind=validate_order_kind(args.kind),
                broker_ids=[args.order_id],
            )
            result = bot.cancel_order(category, order)
        elif args.command == "open-orders":
            orders = bot.get_open_orders(category)
            if args.raw_json:
                print(json.dumps([asdict(order) for order in orders], indent=2, default=str))
            else:
                print(_open_orders_table(orders))
            return 0
        else:
            parser.error("No command provided")
            return 1
    except ValueError as exc:
        LOGGER.error("Validation error: %s", exc)
        parser.error(str(exc))
        return 1
    except BybitBotError as exc:
        LOGGER.error("Order rejected: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(_result_as_summary(_build_result_payload(result), args.raw_json))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

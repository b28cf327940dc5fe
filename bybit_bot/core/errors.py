"""Exceptions raised while translating, submitting and classifying orders."""
from __future__ import annotations

from typing import Sequence


class BybitBotError(Exception):
    """Base class for every error surfaced by the order translation layer."""


class UnsupportedOperation(BybitBotError):
    def __init__(self, message: str = "Orders with direction HOLD cannot be sent to Bybit.") -> None:
        super().__init__(message)


class UnsupportedOrderKind(BybitBotError):
    def __init__(self, kind: object) -> None:
        self.kind = kind
        name = getattr(kind, "value", kind)
        super().__init__(f"Order type {name} is not supported")


class PriceUnavailable(BybitBotError):
    def __init__(self, instrument: str) -> None:
        self.instrument = instrument
        super().__init__(f"Unable to resolve a market price for {instrument}")


class MissingBrokerIdentifier(BybitBotError):
    def __init__(self, order_id: object) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} has no Bybit order id attached.")


class AmbiguousOrder(BybitBotError):
    def __init__(self, order_id: object, broker_ids: Sequence[str]) -> None:
        self.order_id = order_id
        self.broker_ids = list(broker_ids)
        super().__init__(
            f"Order {order_id} maps to {len(self.broker_ids)} Bybit order ids {self.broker_ids}; expected exactly one."
        )


class VenueError(BybitBotError):
    """Bybit rejected the call; carries ``retCode`` and ``retMsg`` verbatim."""

    def __init__(self, code: int | None, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"Bybit error {code}: {message}")

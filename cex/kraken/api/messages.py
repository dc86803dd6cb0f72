"""
Kraken private request shapes.

Field declaration order is the order parameters are form-encoded in, and the
exchange checks ``API-Sign`` against exactly those bytes, so never reorder
fields here. ``nonce`` is always first.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Literal, Optional, Union

FormValue = Union[str, int, Decimal]


class FormMessage:
    """Mixin turning a dataclass into ordered form fields."""

    def form_fields(self) -> list[tuple[str, FormValue]]:
        pairs: list[tuple[str, FormValue]] = []
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            pairs.append((f.metadata.get("wire", f.name), value))
        return pairs


@dataclass(frozen=True)
class OpenOrdersRequest(FormMessage):
    nonce: int
    trades: Optional[bool] = None
    userref: Optional[int] = None


@dataclass(frozen=True)
class AddOrderRequest(FormMessage):
    nonce: int
    pair: str
    order_type: Literal["buy", "sell"] = field(metadata={"wire": "type"})
    ordertype: str
    price: str
    volume: str
    leverage: Optional[str] = None
    timeinforce: Optional[str] = None
    trigger: Optional[str] = None


@dataclass(frozen=True)
class CancelOrderRequest(FormMessage):
    nonce: int
    txid: str

"""Response records for the Kraken REST endpoints the scenarios use."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class KrakenModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ---------------------------------------------------------------------------
# Public: SystemStatus
# ---------------------------------------------------------------------------


class SystemStatusResult(KrakenModel):
    status: str  # online | maintenance | cancel_only | post_only
    timestamp: str


class SystemStatusResponse(KrakenModel):
    error: list[str] = Field(default_factory=list)
    result: Optional[SystemStatusResult] = None


# ---------------------------------------------------------------------------
# Public: Ticker
# ---------------------------------------------------------------------------


class TickerInfo(KrakenModel):
    """Raw ticker arrays as returned by Kraken (single-letter keys)."""

    a: list[str]  # ask [price, whole lot volume, lot volume]
    b: list[str]  # bid
    c: list[str]  # last trade closed [price, lot volume]
    v: list[str]  # volume [today, last 24h]
    p: list[str]  # vwap [today, last 24h]
    t: list[int]  # number of trades
    l: list[str]  # noqa: E741 low
    h: list[str]  # high
    o: str  # today's opening price

    def to_summary(self) -> dict[str, str]:
        """Map the single-letter keys to readable names, values as text."""
        return {
            "ask": str(self.a),
            "bid": str(self.b),
            "last_trade_closed": str(self.c),
            "volume": str(self.v),
            "weighted_average_price": str(self.p),
            "trades": str(self.t),
            "low": str(self.l),
            "high": str(self.h),
            "opening_price": self.o,
        }


class TickerResponse(KrakenModel):
    error: list[str] = Field(default_factory=list)
    # Keyed by Kraken's own pair name, e.g. XBTUSD -> XXBTZUSD
    result: Optional[dict[str, TickerInfo]] = None

    def single(self) -> tuple[str, TickerInfo]:
        """Return the only (pair, ticker) entry of a one-pair request."""
        if not self.result or len(self.result) != 1:
            count = len(self.result) if self.result else 0
            raise ValueError(f"Expected exactly one ticker in result, got {count}")
        return next(iter(self.result.items()))


# ---------------------------------------------------------------------------
# Private: OpenOrders
# ---------------------------------------------------------------------------


class OrderDescr(KrakenModel):
    pair: str
    order_type: str = Field(alias="type")
    ordertype: str
    price: str
    price2: str
    leverage: str
    order: str
    close: str = ""


class Order(KrakenModel):
    refid: Optional[str] = None
    userref: Optional[int] = None
    status: str
    opentm: float
    starttm: float = 0
    expiretm: float = 0
    descr: OrderDescr
    vol: str
    vol_exec: str
    cost: str
    fee: str
    price: str
    stopprice: str = "0.00000"
    limitprice: str = "0.00000"
    misc: str = ""
    oflags: str = ""
    trades: Optional[list[str]] = None


class OpenOrdersResult(KrakenModel):
    # Required: a result without "open" is a malformed body, not "no orders"
    open: dict[str, Order]


class OpenOrdersResponse(KrakenModel):
    error: list[str] = Field(default_factory=list)
    result: Optional[OpenOrdersResult] = None

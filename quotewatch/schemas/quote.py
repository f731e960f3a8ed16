from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ValuationStatus(str, Enum):
    UP = "up"
    DOWN = "down"
    SAME = "same"


class WatchedSymbol(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    key: str


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    company_name: str = "N/A"
    price: float = Field(default=0.0, ge=0.0)
    price_found: bool = True


class Observation(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    company_name: str
    price: float
    status: ValuationStatus
    observed_at: int

    @classmethod
    def from_quote(
        cls,
        quote: Quote,
        *,
        status: ValuationStatus,
        observed_at: int,
        symbol: str | None = None,
    ) -> "Observation":
        return cls(
            symbol=symbol or quote.symbol,
            company_name=quote.company_name,
            price=quote.price,
            status=status,
            observed_at=observed_at,
        )

    def describe(self) -> str:
        return (
            f"symbol={self.symbol} name={self.company_name!r} "
            f"price={self.price} status={self.status.value}"
        )

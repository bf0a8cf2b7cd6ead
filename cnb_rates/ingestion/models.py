"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

CNB_BASE_CURRENCY = "CZK"


@dataclass(frozen=True, slots=True)
class Currency:
    """An ISO-style currency code, compared exactly as published."""

    code: str

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """Price of one unit of ``target_currency`` expressed in ``source_currency``."""

    source_currency: Currency
    target_currency: Currency
    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise TypeError("exchange rate value must be a Decimal")
        if self.value <= 0:
            raise ValueError(f"exchange rate value must be positive, got {self.value}")

    def __str__(self) -> str:
        return f"{self.source_currency}/{self.target_currency}={self.value}"


@dataclass(frozen=True, slots=True)
class RawRateRow:
    """Representation of a single row extracted from a CNB rate table."""

    code: str
    amount: int
    price: Decimal
    name: str | None = None
    country: str | None = None

    def __post_init__(self) -> None:
        if self.amount == 0:
            raise ValueError(f"unit amount for {self.code} must not be zero")

    def to_exchange_rate(self, base_currency: str = CNB_BASE_CURRENCY) -> ExchangeRate:
        # CNB quotes some currencies per 100 or 1000 units (e.g. 100 JPY).
        return ExchangeRate(
            source_currency=Currency(base_currency),
            target_currency=Currency(self.code),
            value=self.price / Decimal(self.amount),
        )


@dataclass(frozen=True, slots=True)
class RateSnapshot:
    """Every rate published in one CNB document."""

    rates: tuple[ExchangeRate, ...] = field(default_factory=tuple)
    published_on: date | None = None
    sequence: int | None = None

    def __len__(self) -> int:
        return len(self.rates)

    def codes(self) -> list[str]:
        return [rate.target_currency.code for rate in self.rates]

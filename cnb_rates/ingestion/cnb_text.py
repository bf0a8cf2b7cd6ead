"""Parse the pipe-delimited text variant of the CNB daily rate table."""

from __future__ import annotations

import csv
import re

from cnb_rates.exceptions import MalformedSourceError
from cnb_rates.ingestion.models import CNB_BASE_CURRENCY, ExchangeRate, RateSnapshot, RawRateRow
from cnb_rates.utils.dates import parse_cnb_date
from cnb_rates.utils.numbers import parse_decimal, parse_int

EXPECTED_COLUMNS = 5
_HEADER_PATTERN = re.compile(r"^\s*(\d{2}\.\d{2}\.\d{4})\s*#\s*(\d+)\s*$")


class CNBTextParser:
    """Parse documents shaped like::

        23.07.2025 #141
        země|měna|množství|kód|kurz
        USA|dolar|1|USD|22,222
    """

    def __init__(self, *, base_currency: str = CNB_BASE_CURRENCY) -> None:
        self.base_currency = base_currency

    def parse(self, raw: bytes | str) -> RateSnapshot:
        text = self._decode(raw)
        lines = [line for line in text.splitlines() if line.strip()]
        if len(lines) < 3:
            raise MalformedSourceError("CNB text document has no rate rows")

        header = _HEADER_PATTERN.match(lines[0])
        if not header:
            raise MalformedSourceError(f"Unexpected CNB text header {lines[0]!r}")

        rates: list[ExchangeRate] = []
        for index, fields in enumerate(csv.reader(lines[2:], delimiter="|"), start=1):
            if len(fields) != EXPECTED_COLUMNS:
                raise MalformedSourceError(
                    f"Row {index} has {len(fields)} columns, expected {EXPECTED_COLUMNS}"
                )
            country, name, amount_raw, code, price_raw = (value.strip() for value in fields)
            amount = parse_int(amount_raw)
            price = parse_decimal(price_raw)
            if not code or amount is None or amount <= 0 or price is None or price <= 0:
                raise MalformedSourceError(f"Row {index} is not a valid rate: {'|'.join(fields)!r}")
            row = RawRateRow(code=code, amount=amount, price=price, name=name, country=country)
            try:
                rates.append(row.to_exchange_rate(self.base_currency))
            except (ValueError, ArithmeticError) as exc:
                raise MalformedSourceError(f"Row {index} ({code}) yields no usable rate: {exc}") from exc

        return RateSnapshot(
            rates=tuple(rates),
            published_on=parse_cnb_date(header.group(1)),
            sequence=int(header.group(2)),
        )

    @staticmethod
    def _decode(raw: bytes | str) -> str:
        if isinstance(raw, str):
            return raw.lstrip("\ufeff")
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise MalformedSourceError(f"CNB text document is not UTF-8: {exc}") from exc


__all__ = ["CNBTextParser"]

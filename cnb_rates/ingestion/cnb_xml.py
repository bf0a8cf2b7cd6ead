"""Parse CNB daily exchange rate XML into ``ExchangeRate`` rows.

The document looks like::

    <kurzy banka="CNB" datum="23.07.2025" poradi="141">
      <tabulka typ="XML_TYP_CNB_KURZY_DEVIZOVEHO_TRHU">
        <radek kod="USD" mena="dolar" mnozstvi="1" kurz="22,222" zeme="USA"/>
      </tabulka>
    </kurzy>
"""

from __future__ import annotations

import warnings
from typing import Iterable
from xml.etree import ElementTree

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from cnb_rates.exceptions import MalformedSourceError
from cnb_rates.ingestion.models import CNB_BASE_CURRENCY, ExchangeRate, RateSnapshot, RawRateRow
from cnb_rates.utils.dates import parse_cnb_date
from cnb_rates.utils.logger import get_logger
from cnb_rates.utils.numbers import parse_decimal, parse_int

LOGGER = get_logger(__name__)

ROW_TAG = "radek"
ROOT_TAG = "kurzy"


class CNBXMLParser:
    """Convert the CNB XML rate table into a :class:`RateSnapshot`."""

    def __init__(self, *, base_currency: str = CNB_BASE_CURRENCY) -> None:
        self.base_currency = base_currency

    def parse(self, raw: bytes | str) -> RateSnapshot:
        _ensure_well_formed(raw)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
            soup = BeautifulSoup(raw, "html.parser")
        elements = soup.find_all(ROW_TAG)
        if not elements:
            raise MalformedSourceError(f"No <{ROW_TAG}> rows found in CNB document")

        rates = tuple(self._extract_rates(elements))
        root = soup.find(ROOT_TAG)
        published_on = parse_cnb_date(root.get("datum")) if root else None
        sequence = parse_int(root.get("poradi")) if root else None
        LOGGER.debug("Parsed %s CNB rows published on %s", len(rates), published_on)
        return RateSnapshot(
            rates=rates,
            published_on=published_on,
            sequence=sequence,
        )

    def _extract_rates(self, elements: Iterable) -> Iterable[ExchangeRate]:
        for index, element in enumerate(elements, start=1):
            code = (element.get("kod") or "").strip()
            if not code:
                raise MalformedSourceError(f"Row {index} has no currency code")
            amount = parse_int(element.get("mnozstvi"))
            price = parse_decimal(element.get("kurz"))
            if amount is None or amount <= 0:
                raise MalformedSourceError(
                    f"Row {index} ({code}) has invalid amount {element.get('mnozstvi')!r}"
                )
            if price is None or price <= 0:
                raise MalformedSourceError(
                    f"Row {index} ({code}) has invalid rate {element.get('kurz')!r}"
                )
            row = RawRateRow(
                code=code,
                amount=amount,
                price=price,
                name=element.get("mena"),
                country=element.get("zeme"),
            )
            try:
                rate = row.to_exchange_rate(self.base_currency)
            except (ValueError, ArithmeticError) as exc:
                raise MalformedSourceError(f"Row {index} ({code}) yields no usable rate: {exc}") from exc
            yield rate


def _ensure_well_formed(raw: bytes | str) -> None:
    # html.parser recovers from truncated or mis-nested markup; expat does not.
    if isinstance(raw, bytes):
        document: bytes | str = raw.lstrip(b"\xef\xbb\xbf \t\r\n")
    else:
        document = raw.lstrip("\ufeff \t\r\n")
    try:
        ElementTree.fromstring(document)
    except ElementTree.ParseError as exc:
        raise MalformedSourceError(f"CNB document is not well-formed XML: {exc}") from exc


__all__ = ["CNBXMLParser", "ROW_TAG"]

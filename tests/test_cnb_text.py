from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from cnb_rates.exceptions import MalformedSourceError
from cnb_rates.ingestion.cnb_text import CNBTextParser
from cnb_rates.ingestion.document import CNBDocumentParser, parse_document

CNB_TXT = """23.07.2025 #141
země|měna|množství|kód|kurz
EMU|euro|1|EUR|24,480
Japonsko|jen|100|JPY|14,960
USA|dolar|1|USD|22,222
"""

CNB_XML = """<?xml version="1.0" encoding="UTF-8"?>
<kurzy banka="CNB" datum="23.07.2025" poradi="141">
    <tabulka typ="XML_TYP_CNB_KURZY_DEVIZOVEHO_TRHU">
        <radek kod="EUR" mena="euro" mnozstvi="1" kurz="24,480" zeme="EMU"/>
        <radek kod="JPY" mena="jen" mnozstvi="100" kurz="14,960" zeme="Japonsko"/>
        <radek kod="USD" mena="dolar" mnozstvi="1" kurz="22,222" zeme="USA"/>
    </tabulka>
</kurzy>"""


def test_text_parser_reads_rows_and_header() -> None:
    snapshot = CNBTextParser().parse(CNB_TXT.encode("utf-8"))

    assert snapshot.published_on == date(2025, 7, 23)
    assert snapshot.sequence == 141
    assert snapshot.codes() == ["EUR", "JPY", "USD"]
    assert snapshot.rates[1].value == Decimal("0.1496")


def test_text_and_xml_formats_agree() -> None:
    from_text = parse_document(CNB_TXT.encode("utf-8"))
    from_xml = parse_document(CNB_XML.encode("utf-8"))

    assert [(r.target_currency, r.value) for r in from_text.rates] == [
        (r.target_currency, r.value) for r in from_xml.rates
    ]
    assert from_text.published_on == from_xml.published_on


def test_document_parser_sniffs_leading_whitespace_and_bom() -> None:
    parser = CNBDocumentParser()

    assert len(parser.parse(b"\xef\xbb\xbf\n  " + CNB_XML.encode("utf-8"))) == 3
    assert len(parser.parse("\ufeff" + CNB_TXT)) == 3


def test_document_parser_sniffs_past_long_leading_whitespace() -> None:
    padding = "\n" * 40 + " " * 80

    assert parse_document((padding + CNB_XML).encode("utf-8")).sequence == 141
    assert parse_document(padding + CNB_XML).codes() == ["EUR", "JPY", "USD"]


@pytest.mark.parametrize(
    "document",
    [
        "",
        "23.07.2025 #141\nzemě|měna|množství|kód|kurz\n",
        "garbage\nzemě|měna|množství|kód|kurz\nUSA|dolar|1|USD|22,222\n",
        "23.07.2025 #141\nzemě|měna|množství|kód|kurz\nUSA|dolar|1|USD\n",
        "23.07.2025 #141\nzemě|měna|množství|kód|kurz\nUSA|dolar|0|USD|22,222\n",
        "23.07.2025 #141\nzemě|měna|množství|kód|kurz\nUSA|dolar|1|USD|n/a\n",
        "23.07.2025 #141\nzemě|měna|množství|kód|kurz\nUSA|dolar|1000|USD|1E-1000030\n",
    ],
)
def test_text_parser_rejects_malformed_documents(document: str) -> None:
    with pytest.raises(MalformedSourceError):
        CNBTextParser().parse(document)


def test_text_parser_rejects_non_utf8_bytes() -> None:
    with pytest.raises(MalformedSourceError):
        CNBTextParser().parse(b"\xff\xfe\x00garbage")

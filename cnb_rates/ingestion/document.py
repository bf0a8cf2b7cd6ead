"""Format detection for CNB rate documents."""

from __future__ import annotations

from cnb_rates.ingestion.cnb_text import CNBTextParser
from cnb_rates.ingestion.cnb_xml import CNBXMLParser
from cnb_rates.ingestion.models import CNB_BASE_CURRENCY, RateSnapshot


class CNBDocumentParser:
    """Dispatch to the XML or text parser depending on the payload."""

    def __init__(self, *, base_currency: str = CNB_BASE_CURRENCY) -> None:
        self.xml_parser = CNBXMLParser(base_currency=base_currency)
        self.text_parser = CNBTextParser(base_currency=base_currency)

    def parse(self, raw: bytes | str) -> RateSnapshot:
        if _looks_like_xml(raw):
            return self.xml_parser.parse(raw)
        return self.text_parser.parse(raw)


def _looks_like_xml(raw: bytes | str) -> bool:
    if isinstance(raw, bytes):
        return raw.lstrip(b"\xef\xbb\xbf \t\r\n")[:1] == b"<"
    return raw.lstrip("\ufeff \t\r\n")[:1] == "<"


def parse_document(raw: bytes | str, *, base_currency: str = CNB_BASE_CURRENCY) -> RateSnapshot:
    """Parse ``raw`` as whichever CNB format it appears to be."""

    return CNBDocumentParser(base_currency=base_currency).parse(raw)


__all__ = ["CNBDocumentParser", "parse_document"]

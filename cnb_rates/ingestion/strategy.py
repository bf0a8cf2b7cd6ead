"""Abstractions for pluggable fetch and parse strategies."""

from __future__ import annotations

from typing import Protocol

from cnb_rates.ingestion.models import RateSnapshot


class DocumentFetcher(Protocol):
    """Contract for retrieving a raw rate document.

    Implementations raise :class:`~cnb_rates.exceptions.SourceUnavailableError`
    or :class:`~cnb_rates.exceptions.FetchTimeoutError` on failure.
    """

    def fetch(self, url: str) -> bytes:
        ...  # pragma: no cover - protocol definition


class DocumentParser(Protocol):
    """Contract for turning a raw document into a :class:`RateSnapshot`.

    Implementations raise :class:`~cnb_rates.exceptions.MalformedSourceError`
    when the document has no usable structure.
    """

    def parse(self, raw: bytes | str) -> RateSnapshot:
        ...  # pragma: no cover - protocol definition


__all__ = ["DocumentFetcher", "DocumentParser"]

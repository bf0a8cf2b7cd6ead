"""Exception taxonomy for the rate retrieval pipeline."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "CNBRatesError",
    "InvalidCurrencyRequestError",
    "SourceUnavailableError",
    "FetchTimeoutError",
    "MalformedSourceError",
    "FailureCategory",
]


class FailureCategory(str, Enum):
    """Source-side failures that degrade a lookup to an empty result."""

    SOURCE_UNAVAILABLE = "source_unavailable"
    MALFORMED_SOURCE = "malformed_source"
    TIMEOUT = "timeout"


class CNBRatesError(Exception):
    """Base class for every error raised by :mod:`cnb_rates`."""

    category: FailureCategory | None = None


class InvalidCurrencyRequestError(CNBRatesError, ValueError):
    """Raised when a caller asks for rates without naming any currency."""


class SourceUnavailableError(CNBRatesError):
    """The rate document could not be retrieved."""

    category = FailureCategory.SOURCE_UNAVAILABLE

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FetchTimeoutError(SourceUnavailableError):
    """The rate document did not arrive within the configured timeout."""

    category = FailureCategory.TIMEOUT


class MalformedSourceError(CNBRatesError):
    """The rate document could not be turned into rate rows."""

    category = FailureCategory.MALFORMED_SOURCE

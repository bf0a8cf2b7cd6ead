"""Public interface for the cnb_rates package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata

from cnb_rates.cache import CacheEntry, SingleFlight, TTLCache
from cnb_rates.config import ProviderConfig
from cnb_rates.exceptions import (
    CNBRatesError,
    FailureCategory,
    FetchTimeoutError,
    InvalidCurrencyRequestError,
    MalformedSourceError,
    SourceUnavailableError,
)
from cnb_rates.ingestion.cnb_http import CNB_DAILY_TXT_URL, CNB_DAILY_XML_URL, CNBDocumentFetcher
from cnb_rates.ingestion.document import CNBDocumentParser, parse_document
from cnb_rates.ingestion.models import Currency, ExchangeRate, RateSnapshot
from cnb_rates.provider import ExchangeRateProvider, RateLookupResult

__all__ = [
    "__version__",
    "CNB_DAILY_TXT_URL",
    "CNB_DAILY_XML_URL",
    "CNBDocumentFetcher",
    "CNBDocumentParser",
    "CNBRatesError",
    "CacheEntry",
    "Currency",
    "ExchangeRate",
    "ExchangeRateProvider",
    "FailureCategory",
    "FetchTimeoutError",
    "InvalidCurrencyRequestError",
    "MalformedSourceError",
    "ProviderConfig",
    "RateLookupResult",
    "RateSnapshot",
    "SingleFlight",
    "SourceUnavailableError",
    "TTLCache",
    "parse_document",
]

try:
    __version__ = importlib_metadata.version("cnb-rates")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"

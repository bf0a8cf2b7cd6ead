"""Cache-aside retrieval of CNB exchange rates."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable

from cnb_rates.cache import SingleFlight, TTLCache
from cnb_rates.config import ProviderConfig
from cnb_rates.exceptions import (
    FailureCategory,
    FetchTimeoutError,
    InvalidCurrencyRequestError,
    MalformedSourceError,
    SourceUnavailableError,
)
from cnb_rates.ingestion.cnb_http import CNBDocumentFetcher
from cnb_rates.ingestion.document import CNBDocumentParser
from cnb_rates.ingestion.models import Currency, ExchangeRate, RateSnapshot
from cnb_rates.ingestion.strategy import DocumentFetcher, DocumentParser
from cnb_rates.utils.logger import SupportsLogging, get_logger

LOGGER = get_logger(__name__)

CACHE_KEY = "ExchangeRatesCache"


@dataclass(frozen=True, slots=True)
class RateLookupResult:
    """Outcome of :meth:`ExchangeRateProvider.lookup`.

    ``failure`` is set when the source could not be used; ``rates`` is then
    empty rather than an exception being raised.
    """

    rates: tuple[ExchangeRate, ...] = ()
    failure: FailureCategory | None = None
    from_cache: bool = False
    published_on: date | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True, slots=True)
class _LoadOutcome:
    snapshot: RateSnapshot | None
    failure: FailureCategory | None = None
    from_cache: bool = False


class ExchangeRateProvider:
    """Return CNB rates for the requested currencies, caching the full table.

    Only rates the CNB actually publishes are returned: if the source quotes
    CZK/USD, a request for USD yields CZK/USD and never a computed USD/CZK.
    Currencies the source does not list are silently omitted.

    Source-side failures (unreachable host, bad status, timeout, unparseable
    document) are logged and turned into an empty result so that a CNB outage
    never breaks callers. Only an empty request raises.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        cache: TTLCache[RateSnapshot] | None = None,
        fetcher: DocumentFetcher | None = None,
        parser: DocumentParser | None = None,
        logger: SupportsLogging | None = None,
    ) -> None:
        self.config = config or ProviderConfig()
        self.cache: TTLCache[RateSnapshot] = cache if cache is not None else TTLCache()
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or CNBDocumentFetcher(timeout=self.config.fetch_timeout)
        self.parser = parser or CNBDocumentParser(base_currency=self.config.base_currency)
        self.logger = logger or LOGGER
        self._flight: SingleFlight[_LoadOutcome] = SingleFlight()

    def close(self) -> None:
        """Release the HTTP session of the fetcher this provider created.

        An injected fetcher belongs to the caller and is left open.
        """

        if self._owns_fetcher:
            self.fetcher.close()

    def __enter__(self) -> "ExchangeRateProvider":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def get_exchange_rates(self, currencies: Iterable[Currency | str] | None) -> list[ExchangeRate]:
        """Return the published rates whose target currency was requested."""

        return list(self.lookup(currencies).rates)

    def lookup(self, currencies: Iterable[Currency | str] | None) -> RateLookupResult:
        """Like :meth:`get_exchange_rates` but also report how the result was obtained."""

        requested = self._normalise_request(currencies)
        outcome = self._load_snapshot()
        if outcome.snapshot is None:
            return RateLookupResult(failure=outcome.failure)
        return RateLookupResult(
            rates=self._filter(outcome.snapshot, requested),
            from_cache=outcome.from_cache,
            published_on=outcome.snapshot.published_on,
        )

    def _normalise_request(self, currencies: Iterable[Currency | str] | None) -> frozenset[str]:
        if isinstance(currencies, (str, Currency)):
            currencies = [currencies]
        codes = frozenset(
            currency.code if isinstance(currency, Currency) else str(currency)
            for currency in (currencies or ())
        )
        if not codes:
            self.logger.error(
                "get_exchange_rates called without any currency codes",
                extra={"event": "invalid_input"},
            )
            raise InvalidCurrencyRequestError("currencies must contain at least one currency")
        return codes

    def _load_snapshot(self) -> _LoadOutcome:
        snapshot = self.cache.get(CACHE_KEY)
        if snapshot is not None:
            self.logger.debug("Serving %s cached CNB rates", len(snapshot), extra={"event": "cache_hit"})
            return _LoadOutcome(snapshot=snapshot, from_cache=True)
        outcome, shared = self._flight.do(CACHE_KEY, self._refresh)
        if shared and outcome.snapshot is not None:
            # Waiters were served the snapshot the leader fetched.
            return replace(outcome, from_cache=True)
        return outcome

    def _refresh(self) -> _LoadOutcome:
        # Another flight may have populated the cache since our miss.
        snapshot = self.cache.get(CACHE_KEY)
        if snapshot is not None:
            return _LoadOutcome(snapshot=snapshot, from_cache=True)

        url = self.config.url
        self.logger.info(
            "Getting list of exchange rates from %s", url, extra={"event": "fetch_start", "url": url}
        )
        try:
            raw = self.fetcher.fetch(url)
            snapshot = self.parser.parse(raw)
        except FetchTimeoutError as exc:
            self.logger.error(
                "Request to %s timed out: %s",
                url,
                exc,
                extra={"event": "fetch_timeout", "url": url, "category": exc.category.value},
            )
            return _LoadOutcome(snapshot=None, failure=FailureCategory.TIMEOUT)
        except SourceUnavailableError as exc:
            self.logger.error(
                "HTTP request failed for URL %s: %s",
                url,
                exc,
                extra={
                    "event": "fetch_failed",
                    "url": url,
                    "status_code": exc.status_code,
                    "category": exc.category.value,
                },
            )
            return _LoadOutcome(snapshot=None, failure=FailureCategory.SOURCE_UNAVAILABLE)
        except MalformedSourceError as exc:
            self.logger.error(
                "Parsing CNB document from %s failed: %s",
                url,
                exc,
                extra={"event": "parse_failed", "url": url, "category": exc.category.value},
            )
            return _LoadOutcome(snapshot=None, failure=FailureCategory.MALFORMED_SOURCE)

        entry = self.cache.set(CACHE_KEY, snapshot, self.config.cache_ttl)
        self.logger.info(
            "Cached %s CNB rates published on %s until %s",
            len(snapshot),
            snapshot.published_on,
            entry.expires_at.isoformat(),
            extra={
                "event": "cache_populated",
                "count": len(snapshot),
                "expires_at": entry.expires_at.isoformat(),
            },
        )
        return _LoadOutcome(snapshot=snapshot)

    def _filter(self, snapshot: RateSnapshot, requested: frozenset[str]) -> tuple[ExchangeRate, ...]:
        matched: dict[str, ExchangeRate] = {}
        duplicates: set[str] = set()
        for rate in snapshot.rates:
            code = rate.target_currency.code
            if code not in requested:
                continue
            if code in matched:
                duplicates.add(code)
            matched[code] = rate

        if duplicates:
            self.logger.warning(
                "CNB document lists %s more than once; using the last row",
                ",".join(sorted(duplicates)),
                extra={"event": "duplicate_codes", "codes": sorted(duplicates)},
            )
        self.logger.info(
            "Calculating exchange rates for %s",
            ",".join(sorted(requested)),
            extra={"event": "rates_filtered", "codes": sorted(requested), "matched": len(matched)},
        )
        return tuple(matched.values())


__all__ = ["ExchangeRateProvider", "RateLookupResult", "CACHE_KEY"]

"""In-memory caching primitives used by :class:`cnb_rates.ExchangeRateProvider`."""

from __future__ import annotations

from cnb_rates.cache.single_flight import SingleFlight
from cnb_rates.cache.ttl_cache import CacheEntry, TTLCache, utcnow

__all__ = ["CacheEntry", "SingleFlight", "TTLCache", "utcnow"]

"""Runtime configuration for :class:`cnb_rates.ExchangeRateProvider`."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping
from urllib.parse import urlparse

from cnb_rates.ingestion.cnb_http import CNB_DAILY_XML_URL
from cnb_rates.ingestion.models import CNB_BASE_CURRENCY

DEFAULT_CACHE_TTL = timedelta(hours=1)
DEFAULT_FETCH_TIMEOUT = 10.0

ENV_URL = "CNB_RATES_URL"
ENV_CACHE_TTL_SECONDS = "CNB_RATES_CACHE_TTL_SECONDS"
ENV_FETCH_TIMEOUT_SECONDS = "CNB_RATES_FETCH_TIMEOUT_SECONDS"


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Where to fetch rates from and how long to trust them."""

    url: str = CNB_DAILY_XML_URL
    cache_ttl: timedelta = DEFAULT_CACHE_TTL
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    base_currency: str = CNB_BASE_CURRENCY

    def __post_init__(self) -> None:
        if urlparse(self.url).scheme not in {"http", "https"}:
            raise ValueError(f"url must be an http(s) URL, got {self.url!r}")
        if self.cache_ttl <= timedelta(0):
            raise ValueError("cache_ttl must be positive")
        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be positive")
        if not self.base_currency:
            raise ValueError("base_currency must not be empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProviderConfig":
        """Build a config from ``CNB_RATES_*`` variables, defaulting anything unset."""

        env = os.environ if environ is None else environ
        url = env.get(ENV_URL) or CNB_DAILY_XML_URL
        ttl_raw = env.get(ENV_CACHE_TTL_SECONDS)
        timeout_raw = env.get(ENV_FETCH_TIMEOUT_SECONDS)
        try:
            cache_ttl = timedelta(seconds=float(ttl_raw)) if ttl_raw else DEFAULT_CACHE_TTL
            fetch_timeout = float(timeout_raw) if timeout_raw else DEFAULT_FETCH_TIMEOUT
        except ValueError as exc:
            raise ValueError(
                f"{ENV_CACHE_TTL_SECONDS} and {ENV_FETCH_TIMEOUT_SECONDS} must be numeric"
            ) from exc
        return cls(url=url, cache_ttl=cache_ttl, fetch_timeout=fetch_timeout)


__all__ = ["ProviderConfig", "DEFAULT_CACHE_TTL", "DEFAULT_FETCH_TIMEOUT"]

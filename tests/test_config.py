from __future__ import annotations

from datetime import timedelta

import pytest

from cnb_rates.config import DEFAULT_CACHE_TTL, ProviderConfig
from cnb_rates.ingestion.cnb_http import CNB_DAILY_XML_URL


def test_defaults() -> None:
    config = ProviderConfig()

    assert config.url == CNB_DAILY_XML_URL
    assert config.cache_ttl == timedelta(hours=1) == DEFAULT_CACHE_TTL
    assert config.fetch_timeout == 10.0
    assert config.base_currency == "CZK"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"url": "ftp://example.test/rates.xml"},
        {"url": "not a url"},
        {"cache_ttl": timedelta(0)},
        {"fetch_timeout": 0},
        {"base_currency": ""},
    ],
)
def test_invalid_values_are_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        ProviderConfig(**kwargs)


def test_from_env_reads_overrides() -> None:
    config = ProviderConfig.from_env(
        {
            "CNB_RATES_URL": "https://example.test/denni_kurz.txt",
            "CNB_RATES_CACHE_TTL_SECONDS": "120",
            "CNB_RATES_FETCH_TIMEOUT_SECONDS": "2.5",
        }
    )

    assert config.url == "https://example.test/denni_kurz.txt"
    assert config.cache_ttl == timedelta(minutes=2)
    assert config.fetch_timeout == 2.5


def test_from_env_falls_back_to_defaults() -> None:
    assert ProviderConfig.from_env({}) == ProviderConfig()


def test_from_env_rejects_non_numeric_values() -> None:
    with pytest.raises(ValueError, match="must be numeric"):
        ProviderConfig.from_env({"CNB_RATES_CACHE_TTL_SECONDS": "an hour"})

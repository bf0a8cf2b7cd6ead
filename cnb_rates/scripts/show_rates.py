"""Print today's CNB exchange rates for the given currency codes."""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

from cnb_rates.config import ProviderConfig
from cnb_rates.provider import ExchangeRateProvider
from cnb_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "main"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    defaults = ProviderConfig.from_env()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "currencies",
        nargs="+",
        metavar="CODE",
        help="Currency codes as published by the CNB (e.g. USD EUR JPY)",
    )
    parser.add_argument(
        "--url",
        default=defaults.url,
        help="Rate document URL (XML or pipe-delimited text)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.fetch_timeout,
        help="Fetch timeout in seconds",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    config = replace(ProviderConfig.from_env(), url=args.url, fetch_timeout=args.timeout)
    with ExchangeRateProvider(config) as provider:
        result = provider.lookup(args.currencies)
    if not result.ok:
        LOGGER.warning("No rates available (%s)", result.failure.value)
        return 1
    for rate in result.rates:
        print(rate)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())

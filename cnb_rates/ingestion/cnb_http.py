"""Requests-based downloader for the CNB daily exchange rate document."""

from __future__ import annotations

from typing import Optional

import requests

from cnb_rates.exceptions import FetchTimeoutError, SourceUnavailableError
from cnb_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)

CNB_DAILY_XML_URL = (
    "https://www.cnb.cz/cs/financni_trhy/devizovy_trh/kurzy_devizoveho_trhu/denni_kurz.xml"
)
CNB_DAILY_TXT_URL = (
    "https://www.cnb.cz/cs/financni_trhy/devizovy_trh/kurzy_devizoveho_trhu/denni_kurz.txt"
)


class CNBDocumentFetcher:
    """Perform a single bounded GET against the CNB and return the raw body."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        user_agent: str = "cnb-rates/0.1",
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", user_agent)
        self.session.headers.setdefault("Accept", "application/xml,text/plain;q=0.9,*/*;q=0.8")

    def fetch(self, url: str) -> bytes:
        """Download ``url`` once; no retries are attempted."""

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.Timeout as exc:
            raise FetchTimeoutError(
                f"Request to {url} timed out after {self.timeout}s", url=url
            ) from exc
        except requests.RequestException as exc:
            raise SourceUnavailableError(f"Unable to reach {url}: {exc}", url=url) from exc

        self._raise_with_context(response, url)
        LOGGER.debug("Fetched %s bytes from %s", len(response.content), url)
        return response.content

    @staticmethod
    def _raise_with_context(response: requests.Response, url: str) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = response.status_code
            raise SourceUnavailableError(
                f"CNB responded with HTTP {status} for {url}", url=url, status_code=status
            ) from exc

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "CNBDocumentFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["CNBDocumentFetcher", "CNB_DAILY_XML_URL", "CNB_DAILY_TXT_URL"]

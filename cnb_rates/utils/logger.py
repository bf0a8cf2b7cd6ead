"""Logging utilities for the cnb_rates package."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

_LOGGER: Optional[logging.Logger] = None


def get_logger(name: str = "cnb_rates") -> logging.Logger:
    """Return a module-level logger configured with a simple formatter."""
    global _LOGGER
    if _LOGGER is None:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        _LOGGER = logging.getLogger("cnb_rates")
    return logging.getLogger(name)


class SupportsLogging(Protocol):
    """The slice of :class:`logging.Logger` the rate provider relies on."""

    def debug(self, msg: object, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: object, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: object, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: object, *args: Any, **kwargs: Any) -> None: ...

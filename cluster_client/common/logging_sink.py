"""Component-tagged logging sink backed by the standard logging package.

The lifecycle broadcaster does not know how the owning client configures
logging. It only needs somewhere to report ``(component, message)`` pairs.

Usage:
    from cluster_client.common.logging_sink import StdlibLoggingSink

    sink = StdlibLoggingSink()
    sink.info("LifecycleService", "Cluster client is started")
    # -> logger "cluster_client.LifecycleService", level INFO
"""

from __future__ import annotations

import logging
from typing import Protocol

DEFAULT_LOGGER_NAME = "cluster_client"


class LoggingSink(Protocol):
    """Receives log lines tagged with the emitting component."""

    def info(self, component: str, message: str) -> None: ...

    def error(self, component: str, message: str) -> None: ...


class StdlibLoggingSink:
    """LoggingSink that forwards to ``logging.getLogger(f"{name}.{component}")``.

    Loggers are looked up per call, so handlers configured after the sink is
    created are still honoured.

    Args:
        logger_name: Parent logger name (default ``"cluster_client"``)
    """

    def __init__(self, logger_name: str = DEFAULT_LOGGER_NAME) -> None:
        self._logger_name = logger_name

    def _get_logger(self, component: str) -> logging.Logger:
        return logging.getLogger(f"{self._logger_name}.{component}")

    def info(self, component: str, message: str) -> None:
        self._get_logger(component).info(message)

    def error(self, component: str, message: str) -> None:
        self._get_logger(component).error(message)

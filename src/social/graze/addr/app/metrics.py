"""
Metrics Abstraction Layer for the ADDR Service

This module provides a small metrics interface so handlers and middleware do not depend on a
specific backend. Two implementations exist:

- TelegrafMetricsClient: Sends metrics to Telegraf/StatsD through aio-statsd
- NoOpMetricsClient: Discards everything, used when metrics are disabled and in tests

create_metrics_client selects the implementation from the configured backend name.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from aio_statsd import TelegrafStatsdClient

logger = logging.getLogger(__name__)


class MetricsClient(ABC):
    """
    Abstract metrics client.

    Metric names are given without the service prefix; implementations prepend it. Tags are
    StatsD-style dictionaries.
    """

    @abstractmethod
    def increment(
        self,
        name: str,
        value: Union[int, float] = 1,
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Increment a counter, e.g. 'resolve.count'."""
        pass

    @abstractmethod
    def timer(
        self,
        name: str,
        value: Union[int, float],
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record a duration in seconds, e.g. 'server.request.time'."""
        pass

    async def connect(self) -> None:
        """Open any connection the backend needs. Called once at startup."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Flush pending metrics and close connections."""
        pass


class TelegrafMetricsClient(MetricsClient):
    """Delegates to an aio-statsd TelegrafStatsdClient."""

    def __init__(self, client: Any, prefix: str = "addr"):
        self.client = client
        self.prefix = prefix

    def _key(self, name: str) -> str:
        if not self.prefix:
            return name
        return f"{self.prefix}.{name}"

    def increment(
        self,
        name: str,
        value: Union[int, float] = 1,
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.client.increment(self._key(name), value, tag_dict=tag_dict or {})

    def timer(
        self,
        name: str,
        value: Union[int, float],
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.client.timer(self._key(name), value, tag_dict=tag_dict or {})

    async def connect(self) -> None:
        await self.client.connect()

    async def close(self) -> None:
        try:
            await self.client.close()
        except Exception as e:
            logger.warning(f"Error closing Telegraf client: {e}")


class NoOpMetricsClient(MetricsClient):
    """No-operation metrics client for disabled metrics collection."""

    def increment(
        self,
        name: str,
        value: Union[int, float] = 1,
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        pass

    def timer(
        self,
        name: str,
        value: Union[int, float],
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        pass

    async def close(self) -> None:
        pass


def create_metrics_client(
    backend: str,
    host: str = "localhost",
    port: int = 8125,
    prefix: str = "addr",
    debug: bool = False,
) -> MetricsClient:
    """
    Create the metrics client for a backend name.

    Args:
        backend: Backend type ('telegraf' or 'none')
        host: Telegraf/StatsD host
        port: Telegraf/StatsD port
        prefix: Prefix prepended to every metric name
        debug: Enable aio-statsd debug logging

    Returns:
        MetricsClient: Configured, not yet connected, metrics client

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = backend.lower()

    if backend == "telegraf":
        return TelegrafMetricsClient(
            TelegrafStatsdClient(host=host, port=port, debug=debug), prefix=prefix
        )

    if backend == "none":
        logger.info("Metrics collection disabled (no-op client)")
        return NoOpMetricsClient()

    raise ValueError(
        f"Invalid metrics backend: {backend}. Supported backends: 'telegraf', 'none'"
    )

"""InfluxDB 1.x time-series sink."""

from __future__ import annotations

import logging
from typing import Any, Sequence
from urllib.parse import urlparse

from influxdb import InfluxDBClient

from timpris.core.config import InfluxConfig
from timpris.core.exceptions import TimeSeriesSinkError
from timpris.core.models import MEASUREMENT, PricePoint, SinkKind

logger = logging.getLogger(__name__)

_DEFAULT_PORT = 8086


class InfluxSink:
    """Writes all points of a run as one batch at hour precision.

    Each point becomes measurement ``powerprices`` with tags ``hour``
    (stringified) and ``area`` and the single float field ``value``.
    """

    name = "influxdb"
    kind = SinkKind.TIME_SERIES

    def __init__(self, config: InfluxConfig) -> None:
        self._config = config

    def write(self, points: Sequence[PricePoint]) -> int:
        """Submit the batch in a single call.

        Raises:
            TimeSeriesSinkError: connection or write failure. The batch is
                never split or retried.
        """
        if not points:
            logger.warning("No points to write to InfluxDB")
            return 0

        batch = [to_influx_point(p) for p in points]
        client = self._connect()
        try:
            client.write_points(
                batch,
                time_precision="h",
                database=self._config.database,
            )
        except Exception as e:
            raise TimeSeriesSinkError(
                f"InfluxDB write to {self._config.database!r} failed: {e}",
                context={
                    "sink": self.name,
                    "database": self._config.database,
                    "points": len(batch),
                },
            ) from e
        finally:
            client.close()

        logger.info(
            "Wrote %d points to InfluxDB database %s", len(batch), self._config.database
        )
        return len(batch)

    def _connect(self) -> InfluxDBClient:
        parsed = urlparse(self._config.address)
        try:
            return InfluxDBClient(
                host=parsed.hostname,
                port=parsed.port or _DEFAULT_PORT,
                username=self._config.username,
                password=self._config.password,
                database=self._config.database,
                ssl=parsed.scheme == "https",
                verify_ssl=parsed.scheme == "https",
                timeout=self._config.timeout,
                path=parsed.path.strip("/"),
            )
        except Exception as e:
            raise TimeSeriesSinkError(
                f"Cannot create InfluxDB client for {self._config.address}: {e}",
                context={"sink": self.name, "address": self._config.address},
            ) from e


def to_influx_point(point: PricePoint) -> dict[str, Any]:
    """JSON body of one point for InfluxDBClient.write_points."""
    return {
        "measurement": MEASUREMENT,
        "tags": {"hour": str(point.hour), "area": point.area},
        "time": point.timestamp,
        "fields": {"value": point.price},
    }

"""Persistent stores for hourly price points.

- ``InfluxSink``: InfluxDB 1.x batch write at hour precision (always on).
- ``SqlSink``: one row per point in ``pricesbyhour`` (when a DSN is set).
- ``SinkWriter``: writes to each sink independently and reports per sink.
"""

from timpris.sinks.base import Sink
from timpris.sinks.influx import InfluxSink, to_influx_point
from timpris.sinks.relational import SqlSink, parse_dsn, row_for
from timpris.sinks.writer import SinkWriter

__all__ = [
    "Sink",
    "InfluxSink",
    "SqlSink",
    "SinkWriter",
    "parse_dsn",
    "row_for",
    "to_influx_point",
]

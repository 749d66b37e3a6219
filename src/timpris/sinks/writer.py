"""Fans one batch of points out to every configured sink."""

from __future__ import annotations

import logging
from typing import Sequence

from timpris.core.config import TimprisConfig
from timpris.core.exceptions import WriteError
from timpris.core.models import PricePoint, SinkKind, WriteReport
from timpris.sinks.base import Sink
from timpris.sinks.influx import InfluxSink
from timpris.sinks.relational import SqlSink

logger = logging.getLogger(__name__)


class SinkWriter:
    """Writes points to each sink independently, in registration order.

    There is no shared transaction. Every sink is attempted even when an
    earlier one failed, so a partial success is visible in the report.
    If any sink failed, the first WriteError is raised afterwards with the
    WriteReport attached as ``context["report"]``.
    """

    def __init__(self, sinks: Sequence[Sink]) -> None:
        if not sinks:
            raise ValueError("SinkWriter needs at least one sink")
        self.sinks = list(sinks)

    @classmethod
    def from_config(cls, config: TimprisConfig) -> SinkWriter:
        """Time-series sink always; relational sink only when a DSN is set."""
        sinks: list[Sink] = [InfluxSink(config.influx)]
        if config.relational.enabled:
            sinks.append(SqlSink(config.relational))
        return cls(sinks)

    def write(self, points: Sequence[PricePoint]) -> WriteReport:
        """Write ``points`` to all sinks.

        Returns:
            WriteReport with one outcome per sink kind.

        Raises:
            WriteError: the first sink failure, after all sinks were tried.
        """
        outcomes: dict[SinkKind, bool] = {}
        errors: dict[SinkKind, str] = {}
        failures: list[WriteError] = []

        for sink in self.sinks:
            try:
                sink.write(points)
            except WriteError as e:
                logger.error("Sink %s failed: %s", sink.name, e)
                outcomes[sink.kind] = False
                errors[sink.kind] = str(e)
                failures.append(e)
            else:
                outcomes[sink.kind] = True

        report = WriteReport(points=len(points), outcomes=outcomes, errors=errors)
        if failures:
            first = failures[0]
            first.context["report"] = report
            raise first
        return report

"""Turns a decoded price series into timestamped hourly points."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, tzinfo

from timpris.core.models import Area, PricePoint, Series

logger = logging.getLogger(__name__)


class PointBuilder:
    """Builds one PricePoint per hour of a reference date.

    Index ``i`` of the series becomes hour ``i`` at ``i:00:00`` on the
    reference date. Timestamps are timezone-aware: in ``tz`` when given,
    otherwise in the host's local time zone.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self.tz = tz

    def build(
        self,
        series: Series,
        reference_date: date,
        area: Area,
    ) -> list[PricePoint]:
        """Return the points for ``series`` in hour-ascending order."""
        points = [
            PricePoint(
                timestamp=self.timestamp_for(reference_date, hour),
                area=area,
                hour=hour,
                price=price,
            )
            for hour, price in enumerate(series.values)
        ]
        logger.debug(
            "Built %d points for %s on %s", len(points), area, reference_date.isoformat()
        )
        return points

    def timestamp_for(self, reference_date: date, hour: int) -> datetime:
        naive = datetime.combine(reference_date, time(hour=hour))
        if self.tz is None:
            # Interpreted as local wall-clock time
            return naive.astimezone()
        return naive.replace(tzinfo=self.tz)

    def today(self) -> date:
        """The current date in the builder's time zone."""
        return datetime.now(self.tz).date()

"""One scrape run: fetch → extract → build points → write to sinks."""

from __future__ import annotations

import logging
from datetime import date

from timpris.core.config import TimprisConfig
from timpris.core.models import DecodedChart, PricePoint, WriteReport
from timpris.ingestion.client import PageClient
from timpris.ingestion.extractor import SeriesExtractor
from timpris.ingestion.points import PointBuilder
from timpris.sinks.writer import SinkWriter

logger = logging.getLogger(__name__)


class ScrapePipeline:
    """Runs the extraction-and-transform pipeline once.

    Components are built from the config unless injected. Sinks are only
    touched after extraction succeeded, so a broken page never produces a
    partial write.
    """

    def __init__(
        self,
        config: TimprisConfig,
        client: PageClient | None = None,
        extractor: SeriesExtractor | None = None,
        builder: PointBuilder | None = None,
        writer: SinkWriter | None = None,
    ) -> None:
        self.config = config
        self._client = client
        self.extractor = extractor or SeriesExtractor(
            selector=config.source.selector,
            series_label=config.series_label,
        )
        self.builder = builder or PointBuilder(tz=config.tzinfo)
        self._writer = writer

    def extract(self) -> DecodedChart:
        """Fetch the configured page and decode its chart."""
        if self._client is not None:
            page = self._client.fetch(self.config.source.url)
        else:
            with PageClient(self.config.source) as client:
                page = client.fetch(self.config.source.url)
        return self.extractor.extract(page)

    def collect(self, reference_date: date | None = None) -> list[PricePoint]:
        """Fetch, extract and build points without writing anything."""
        chart = self.extract()
        day = reference_date or self.builder.today()
        return self.builder.build(chart.selected_series, day, self.config.area)

    def run(self, reference_date: date | None = None) -> WriteReport:
        """Full run. Raises the first TimprisError encountered."""
        points = self.collect(reference_date)
        writer = self._writer or SinkWriter.from_config(self.config)
        report = writer.write(points)
        logger.info(
            "Stored %d %s prices (time-series ok=%s, relational ok=%s)",
            report.points,
            self.config.area,
            report.time_series_ok,
            report.relational_ok,
        )
        return report

"""Locates the price chart in a fetched page and decodes its series."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from timpris.core.config import DEFAULT_SELECTOR
from timpris.core.exceptions import (
    ChartNotFoundError,
    DecodeError,
    InvalidPayloadError,
    SeriesNotFoundError,
    ShapeMismatchError,
)
from timpris.core.models import HOURS_PER_DAY, DecodedChart, EncodedChart, FetchedPage, Series
from timpris.ingestion.decoder import PayloadDecoder

logger = logging.getLogger(__name__)

LABELS_ATTR = "data-labels"
DATASETS_ATTR = "data-datasets"


class SeriesExtractor:
    """Extracts the hourly price series from a chart-bearing page.

    The chart element carries two base64 attributes (hour labels and
    chart.js datasets). Extraction is all-or-nothing: any failure raises an
    ExtractError subclass and no partial chart is returned.

    By default the first series is the persisted one. When ``series_label``
    is given, the series with that label is selected instead.
    """

    def __init__(
        self,
        selector: str = DEFAULT_SELECTOR,
        series_label: str | None = None,
        decoder: PayloadDecoder | None = None,
    ) -> None:
        self.selector = selector
        self.series_label = series_label
        self._decoder = decoder or PayloadDecoder()

    def extract(self, page: FetchedPage) -> DecodedChart:
        """Find, decode and validate the chart in ``page``.

        Raises:
            ChartNotFoundError: no element matches the selector.
            InvalidPayloadError: labels or datasets failed to decode.
            SeriesNotFoundError: configured series label is absent.
            ShapeMismatchError: label count differs from price count.
        """
        encoded = self.find_chart(page)

        try:
            labels = self._decoder.decode_labels(encoded.labels_payload)
        except DecodeError as e:
            raise InvalidPayloadError(
                "labels",
                f"Invalid chart labels on {page.url}: {e}",
                context={"url": page.url, **e.context},
            ) from e

        try:
            series = self._decoder.decode_series(encoded.datasets_payload)
        except DecodeError as e:
            raise InvalidPayloadError(
                "datasets",
                f"Invalid chart datasets on {page.url}: {e}",
                context={"url": page.url, **e.context},
            ) from e

        selected = self._select(series, page.url)
        values = series[selected].values

        if len(labels) != len(values):
            raise ShapeMismatchError(
                f"Chart has {len(labels)} labels but {len(values)} prices",
                context={"url": page.url, "labels": len(labels), "values": len(values)},
            )
        if len(values) > HOURS_PER_DAY:
            raise ShapeMismatchError(
                f"Chart has {len(values)} prices, more than {HOURS_PER_DAY} hours",
                context={"url": page.url, "labels": len(labels), "values": len(values)},
            )

        if len(series) > 1:
            logger.info(
                "Chart carries %d series, persisting %r",
                len(series),
                series[selected].label,
            )
        logger.debug("Extracted %d hourly prices from %s", len(values), page.url)
        return DecodedChart(labels=labels, series=series, selected=selected)

    def find_chart(self, page: FetchedPage) -> EncodedChart:
        """Return the raw attributes of the first chart element."""
        soup = BeautifulSoup(page.html, "html.parser")
        element = soup.select_one(self.selector)
        if element is None:
            raise ChartNotFoundError(
                f"No chart element matching {self.selector!r} on {page.url}",
                context={"url": page.url, "selector": self.selector},
            )
        return EncodedChart(
            labels_payload=element.get(LABELS_ATTR) or "",
            datasets_payload=element.get(DATASETS_ATTR) or "",
        )

    def _select(self, series: list[Series], url: str) -> int:
        if self.series_label is None:
            return 0
        wanted = self.series_label.casefold()
        for i, s in enumerate(series):
            if s.label.casefold() == wanted:
                return i
        raise SeriesNotFoundError(
            f"No series labelled {self.series_label!r} on {url}",
            context={
                "url": url,
                "series_label": self.series_label,
                "available": [s.label for s in series],
            },
        )

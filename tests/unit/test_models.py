"""Tests for timpris.core.models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from timpris.core.models import (
    DecodedChart,
    PricePoint,
    Series,
    SinkKind,
    WriteReport,
    to_cents,
)
from tests.helpers import STOCKHOLM


def point(**overrides) -> PricePoint:
    defaults = dict(
        timestamp=datetime(2024, 5, 1, 3, tzinfo=STOCKHOLM),
        area="SE3",
        hour=3,
        price=1.23,
    )
    defaults.update(overrides)
    return PricePoint(**defaults)


class TestToCents:
    def test_exact(self):
        assert to_cents(1.23) == 123

    def test_truncates_not_rounds(self):
        assert to_cents(1.999) == 199

    def test_zero(self):
        assert to_cents(0.0) == 0

    def test_negative_truncates_toward_zero(self):
        assert to_cents(-0.057) == -5

    def test_point_property(self):
        assert point(price=1.999).price_cents == 199
        assert point(price=1.23).price_cents == 123


class TestPricePoint:
    def test_valid(self):
        p = point()
        assert p.hour == 3
        assert p.price == 1.23

    def test_hour_upper_bound(self):
        with pytest.raises(ValidationError, match="between 0 and 23"):
            point(hour=24)

    def test_hour_lower_bound(self):
        with pytest.raises(ValidationError, match="between 0 and 23"):
            point(hour=-1)

    def test_naive_timestamp_rejected(self):
        with pytest.raises(ValidationError, match="timezone-aware"):
            point(timestamp=datetime(2024, 5, 1, 3))

    def test_frozen(self):
        p = point()
        with pytest.raises(ValidationError):
            p.price = 2.0


class TestSeries:
    def test_construct_by_field_name(self):
        s = Series(label="SE3", values=[1.0])
        assert s.values == [1.0]

    def test_validate_wire_format(self):
        s = Series.model_validate({"label": "SE3", "data": [1.5], "fill": False})
        assert s.values == [1.5]


class TestDecodedChart:
    def test_selected_series(self):
        chart = DecodedChart(
            labels=[0],
            series=[Series(label="A", values=[1.0]), Series(label="B", values=[2.0])],
            selected=1,
        )
        assert chart.selected_series.label == "B"

    def test_selected_out_of_range(self):
        with pytest.raises(ValidationError, match="out of range"):
            DecodedChart(labels=[0], series=[Series(values=[1.0])], selected=1)

    def test_no_series(self):
        with pytest.raises(ValidationError):
            DecodedChart(labels=[], series=[])


class TestWriteReport:
    def test_both_ok(self):
        r = WriteReport(
            points=24,
            outcomes={SinkKind.TIME_SERIES: True, SinkKind.RELATIONAL: True},
        )
        assert r.time_series_ok is True
        assert r.relational_ok is True
        assert r.ok is True

    def test_relational_absent(self):
        r = WriteReport(points=24, outcomes={SinkKind.TIME_SERIES: True})
        assert r.relational_ok is None
        assert r.time_series_ok is True
        assert r.ok is True

    def test_partial_success(self):
        r = WriteReport(
            points=24,
            outcomes={SinkKind.TIME_SERIES: False, SinkKind.RELATIONAL: True},
            errors={SinkKind.TIME_SERIES: "connection refused"},
        )
        assert r.time_series_ok is False
        assert r.relational_ok is True
        assert r.ok is False

    def test_empty_report_not_ok(self):
        assert WriteReport(points=0).ok is False

"""Tests for PointBuilder — hourly timestamps and tags."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from timpris.core.models import PricePoint, Series
from timpris.ingestion.points import PointBuilder
from tests.helpers import SAMPLE_PRICES, STOCKHOLM


@pytest.fixture
def builder() -> PointBuilder:
    return PointBuilder(tz=STOCKHOLM)


class TestBuild:
    def test_reference_scenario(self, builder, sample_series, reference_date):
        points = builder.build(sample_series, reference_date, "SE3")
        assert points == [
            PricePoint(
                timestamp=datetime(2024, 5, 1, 0, tzinfo=STOCKHOLM),
                area="SE3",
                hour=0,
                price=1.23,
            ),
            PricePoint(
                timestamp=datetime(2024, 5, 1, 1, tzinfo=STOCKHOLM),
                area="SE3",
                hour=1,
                price=0.98,
            ),
            PricePoint(
                timestamp=datetime(2024, 5, 1, 2, tzinfo=STOCKHOLM),
                area="SE3",
                hour=2,
                price=1.50,
            ),
        ]

    @pytest.mark.parametrize("n", [0, 1, 12, 23, 24])
    def test_one_point_per_value_in_hour_order(self, builder, reference_date, n):
        series = Series(label="SE3", values=[float(i) for i in range(n)])
        points = builder.build(series, reference_date, "SE3")
        assert len(points) == n
        assert [p.hour for p in points] == list(range(n))
        assert [p.price for p in points] == series.values

    def test_timestamps_on_the_hour(self, builder, reference_date):
        series = Series(values=[1.0] * 24)
        for p in builder.build(series, reference_date, "SE3"):
            assert p.timestamp.date() == reference_date
            assert p.timestamp.hour == p.hour
            assert (p.timestamp.minute, p.timestamp.second, p.timestamp.microsecond) == (0, 0, 0)

    def test_area_tag_applied(self, builder, sample_series, reference_date):
        points = builder.build(sample_series, reference_date, "SE4")
        assert {p.area for p in points} == {"SE4"}

    def test_timestamps_are_aware_in_zone(self, builder, sample_series, reference_date):
        (first, *_) = builder.build(sample_series, reference_date, "SE3")
        # Central European Summer Time
        assert first.timestamp.utcoffset() == timedelta(hours=2)
        assert first.timestamp.astimezone(timezone.utc) == datetime(
            2024, 4, 30, 22, tzinfo=timezone.utc
        )

    def test_winter_offset(self, builder, sample_series):
        (first, *_) = builder.build(sample_series, date(2024, 1, 15), "SE3")
        assert first.timestamp.utcoffset() == timedelta(hours=1)

    def test_does_not_mutate_series(self, builder, sample_series, reference_date):
        builder.build(sample_series, reference_date, "SE3")
        assert sample_series.values == SAMPLE_PRICES


class TestLocalZone:
    def test_default_uses_local_zone(self, sample_series, reference_date):
        points = PointBuilder().build(sample_series, reference_date, "SE3")
        for p in points:
            assert p.timestamp.tzinfo is not None
            assert p.timestamp.replace(tzinfo=None) == datetime(2024, 5, 1, p.hour)


class TestToday:
    def test_today_in_zone(self, builder):
        assert builder.today() == datetime.now(STOCKHOLM).date()

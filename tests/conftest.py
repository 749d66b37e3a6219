"""Shared pytest fixtures for timpris."""

import sqlite3
from datetime import date, datetime

import pytest

from timpris.core.config import InfluxConfig, RelationalConfig, TimprisConfig
from timpris.core.models import FetchedPage, PricePoint, Series
from tests.helpers import (
    PRICES_TABLE_DDL,
    SAMPLE_PRICES,
    STOCKHOLM,
    dataset,
    make_page,
)


@pytest.fixture
def sample_series() -> Series:
    return Series(label="SE3", values=SAMPLE_PRICES)


@pytest.fixture
def sample_page() -> FetchedPage:
    return make_page([0, 1, 2], [dataset(SAMPLE_PRICES)])


@pytest.fixture
def day_page() -> FetchedPage:
    """A full day of 24 prices."""
    prices = [round(0.5 + h * 0.05, 2) for h in range(24)]
    return make_page(list(range(24)), [dataset(prices)])


@pytest.fixture
def sample_points() -> list[PricePoint]:
    return [
        PricePoint(
            timestamp=datetime(2024, 5, 1, hour, tzinfo=STOCKHOLM),
            area="SE3",
            hour=hour,
            price=price,
        )
        for hour, price in enumerate(SAMPLE_PRICES)
    ]


@pytest.fixture
def sqlite_dsn(tmp_path) -> str:
    """DSN of a fresh SQLite file with the pricesbyhour table."""
    db_path = tmp_path / "prices.db"
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(PRICES_TABLE_DDL)
        conn.commit()
    finally:
        conn.close()
    return f"sqlite:///{db_path}"


@pytest.fixture
def sample_config(sqlite_dsn) -> TimprisConfig:
    return TimprisConfig(
        influx=InfluxConfig(address="http://influx.test:8086", database="power"),
        relational=RelationalConfig(dsn=sqlite_dsn),
        timezone="Europe/Stockholm",
    )


@pytest.fixture
def reference_date() -> date:
    return date(2024, 5, 1)

"""Chart page builders and SQLite readers shared by the test modules."""

import sqlite3
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from timpris.core.models import FetchedPage
from timpris.ingestion.decoder import encode_payload

STOCKHOLM = ZoneInfo("Europe/Stockholm")

SAMPLE_PRICES = [1.23, 0.98, 1.50]

PRICES_TABLE_DDL = """CREATE TABLE pricesbyhour (
    year INTEGER NOT NULL,
    month INTEGER NOT NULL,
    day INTEGER NOT NULL,
    hour INTEGER NOT NULL,
    epoch TEXT NOT NULL,
    area TEXT NOT NULL,
    price INTEGER NOT NULL
)"""


def dataset(values, label="SE3"):
    """A chart.js dataset object as the page embeds it."""
    return {
        "label": label,
        "data": values,
        "borderWidth": 2,
        "fill": False,
        "borderColor": "#2a9d8f",
        "steppedLine": True,
    }


def chart_html(labels_payload: str | None, datasets_payload: str | None) -> str:
    """A minimal price page with one chart canvas."""
    attrs = ""
    if labels_payload is not None:
        attrs += f' data-labels="{labels_payload}"'
    if datasets_payload is not None:
        attrs += f' data-datasets="{datasets_payload}"'
    return f"""
<html>
<head><title>Dagens spotpris SE3</title></head>
<body>
<h1>Dagens spotpris i SE3 (Stockholm)</h1>
<canvas id="logo" width="40" height="40"></canvas>
<div class="chart-container">
<canvas id="price-chart"{attrs}></canvas>
</div>
</body>
</html>
"""


def make_page(labels, datasets, url="https://elen.nu/dagens-spotpris/se3-stockholm/"):
    return FetchedPage(
        url=url,
        html=chart_html(encode_payload(labels), encode_payload(datasets)),
        fetched_at=datetime(2024, 5, 1, 6, 0, tzinfo=timezone.utc),
    )


def fetch_rows(dsn: str) -> list[tuple]:
    path = dsn[len("sqlite:///"):]
    conn = sqlite3.connect(path)
    try:
        return conn.execute(
            "SELECT year, month, day, hour, epoch, area, price "
            "FROM pricesbyhour ORDER BY hour"
        ).fetchall()
    finally:
        conn.close()

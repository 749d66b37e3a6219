"""Pydantic data models — the system's type contracts."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

# --- Type Aliases ---

Area = str
Hour = int

# --- Constants ---

HOURS_PER_DAY = 24
MEASUREMENT = "powerprices"
RELATIONAL_TABLE = "pricesbyhour"

# --- Enumerations ---


class PayloadShape(StrEnum):
    """Structured shapes a chart payload can decode to."""

    LABELS = "labels"
    SERIES = "series"


class SinkKind(StrEnum):
    """Kinds of persistent stores receiving price points."""

    TIME_SERIES = "time_series"
    RELATIONAL = "relational"


# --- Page & Chart Models ---


class FetchedPage(BaseModel):
    """An HTML document retrieved by the page client."""

    model_config = ConfigDict(frozen=True)

    url: str
    html: str
    fetched_at: datetime


class EncodedChart(BaseModel):
    """The two raw base64 attributes captured from the chart element."""

    model_config = ConfigDict(frozen=True)

    labels_payload: str
    datasets_payload: str


class Series(BaseModel):
    """One named sequence of hourly prices.

    On the wire this is a chart.js dataset object; the prices live under
    `data` and presentation keys (borderWidth, fill, ...) are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    label: str = Field(default="", validation_alias=AliasChoices("label", "Label"))
    values: list[float] = Field(validation_alias=AliasChoices("data", "Data", "values"))


class DecodedChart(BaseModel):
    """Hour labels and series decoded from one chart element."""

    model_config = ConfigDict(frozen=True)

    labels: list[int]
    series: list[Series]
    selected: int = 0

    @model_validator(mode="after")
    def selected_in_range(self) -> DecodedChart:
        if not 0 <= self.selected < len(self.series):
            raise ValueError(
                f"selected index {self.selected} out of range for "
                f"{len(self.series)} series"
            )
        return self

    @property
    def selected_series(self) -> Series:
        return self.series[self.selected]


# --- Point Models ---


class PricePoint(BaseModel):
    """One hourly price, the unit of work for the sinks."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    area: Area
    hour: Hour
    price: float

    @field_validator("hour")
    @classmethod
    def hour_of_day(cls, v: int) -> int:
        if not 0 <= v < HOURS_PER_DAY:
            raise ValueError(f"hour must be between 0 and 23, got {v}")
        return v

    @field_validator("timestamp")
    @classmethod
    def timestamp_is_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("timestamp must be timezone-aware")
        return v

    @property
    def price_cents(self) -> int:
        """Price in integer cents, truncated (1.999 -> 199)."""
        return to_cents(self.price)


def to_cents(price: float) -> int:
    """Convert a price to integer cents by truncation, not rounding."""
    return int(price * 100)


# --- Write Models ---


class WriteReport(BaseModel):
    """Per-sink outcome of writing one batch of points."""

    model_config = ConfigDict(frozen=True)

    points: int
    outcomes: dict[SinkKind, bool] = {}
    errors: dict[SinkKind, str] = {}

    @property
    def time_series_ok(self) -> bool:
        return self.outcomes.get(SinkKind.TIME_SERIES, False)

    @property
    def relational_ok(self) -> bool | None:
        """None when no relational sink is configured."""
        return self.outcomes.get(SinkKind.RELATIONAL)

    @property
    def ok(self) -> bool:
        return bool(self.outcomes) and all(self.outcomes.values())

"""timpris.core — Foundation types, config, and exceptions."""

from timpris.core.config import (
    InfluxConfig,
    RelationalConfig,
    SourceConfig,
    TimprisConfig,
    load_config,
)
from timpris.core.exceptions import (
    BadEncodingError,
    BadStructureError,
    ChartNotFoundError,
    ConfigError,
    DecodeError,
    ExtractError,
    FetchError,
    InvalidPayloadError,
    RelationalSinkError,
    SeriesNotFoundError,
    ShapeMismatchError,
    TimeSeriesSinkError,
    TimprisError,
    WriteError,
)
from timpris.core.models import (
    Area,
    DecodedChart,
    EncodedChart,
    FetchedPage,
    Hour,
    PayloadShape,
    PricePoint,
    Series,
    SinkKind,
    WriteReport,
    to_cents,
)

__all__ = [
    # Type aliases
    "Area",
    "Hour",
    # Enums
    "PayloadShape",
    "SinkKind",
    # Models
    "FetchedPage",
    "EncodedChart",
    "Series",
    "DecodedChart",
    "PricePoint",
    "WriteReport",
    "to_cents",
    # Config
    "TimprisConfig",
    "SourceConfig",
    "InfluxConfig",
    "RelationalConfig",
    "load_config",
    # Exceptions
    "TimprisError",
    "ConfigError",
    "FetchError",
    "DecodeError",
    "BadEncodingError",
    "BadStructureError",
    "ExtractError",
    "ChartNotFoundError",
    "InvalidPayloadError",
    "SeriesNotFoundError",
    "ShapeMismatchError",
    "WriteError",
    "TimeSeriesSinkError",
    "RelationalSinkError",
]

"""Custom exception hierarchy for timpris."""

from typing import Any


class TimprisError(Exception):
    """Base exception for all timpris errors.

    All exceptions carry an optional `context` dict for structured error
    metadata that can be logged or serialized without parsing the message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ConfigError(TimprisError):
    """Invalid or missing configuration.

    Raised by load_config() during startup. Should be treated as fatal.

    Context keys:
        field: str — the config field that failed validation
        value: Any — the invalid value (redacted for secrets)
    """


class FetchError(TimprisError):
    """The price page could not be retrieved.

    Policy: abort the run. The scheduler retries on its next invocation.

    Context keys:
        url: str — the URL that was being fetched
        status_code: int | None — HTTP status code if a response arrived
    """


class DecodeError(TimprisError):
    """A chart payload could not be decoded.

    Context keys:
        shape: str — "labels" or "series"
        reason: str — decoder message
    """


class BadEncodingError(DecodeError):
    """Payload is not valid base64."""


class BadStructureError(DecodeError):
    """Payload decoded to bytes that are not JSON of the expected shape."""


class ExtractError(TimprisError):
    """The chart could not be extracted from the fetched page.

    Policy: abort the run. Nothing is written for a partially decoded chart.

    Context keys:
        url: str — the page the chart was looked for in
    """


class ChartNotFoundError(ExtractError):
    """No element matching the chart selector exists in the page.

    Context keys:
        selector: str — the CSS selector that matched nothing
    """


class InvalidPayloadError(ExtractError):
    """One of the two chart attributes failed to decode.

    The `payload` attribute names which one: "labels" or "datasets".
    """

    def __init__(
        self,
        payload: str,
        message: str,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context)
        self.payload = payload
        self.context.setdefault("payload", payload)


class SeriesNotFoundError(ExtractError):
    """The configured series label is not among the decoded series.

    Context keys:
        series_label: str — the label that was looked for
        available: list[str] — labels present in the chart
    """


class ShapeMismatchError(ExtractError):
    """Label count and price count of the selected series disagree.

    Policy: fatal, never auto-corrected. Usually means the upstream page
    changed its chart structure.

    Context keys:
        labels: int — number of hour labels
        values: int — number of prices in the selected series
    """


class WriteError(TimprisError):
    """A sink failed to persist the batch.

    Policy: the other sinks are still attempted; the run fails afterwards.
    SinkWriter attaches the WriteReport as context["report"].

    Context keys:
        sink: str — sink name
        report: WriteReport — per-sink outcome (set by SinkWriter)
    """


class TimeSeriesSinkError(WriteError):
    """The InfluxDB batch write failed. No sub-batch is retried."""


class RelationalSinkError(WriteError):
    """An insert into the relational store failed.

    Context keys:
        hour: int | None — hour of the failing point
        area: str | None — area of the failing point
    """

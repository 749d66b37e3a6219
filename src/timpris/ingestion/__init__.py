"""Price page ingestion: client, payload decoder, extractor, point builder."""

from timpris.ingestion.client import PageClient
from timpris.ingestion.decoder import PayloadDecoder, encode_payload
from timpris.ingestion.extractor import SeriesExtractor
from timpris.ingestion.points import PointBuilder

__all__ = [
    "PageClient",
    "PayloadDecoder",
    "PointBuilder",
    "SeriesExtractor",
    "encode_payload",
]

"""Base64 + JSON decoding of chart data attributes."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Annotated, ClassVar

from pydantic import Field, TypeAdapter, ValidationError

from timpris.core.exceptions import BadEncodingError, BadStructureError
from timpris.core.models import PayloadShape, Series

logger = logging.getLogger(__name__)

HourLabel = Annotated[int, Field(strict=True, ge=0, le=23)]


class PayloadDecoder:
    """Decodes the base64-wrapped JSON payloads a chart element carries.

    The chart markup stores two attributes:

    - ``data-labels``: base64 of a JSON array of hour indices, e.g. ``[0, 1, 2]``
    - ``data-datasets``: base64 of a JSON array of chart.js dataset objects,
      each with a ``label`` and a ``data`` array of prices

    The decoder is stateless. The same payload always yields the same result.
    """

    _ADAPTERS: ClassVar[dict[PayloadShape, TypeAdapter]] = {
        PayloadShape.LABELS: TypeAdapter(list[HourLabel]),
        PayloadShape.SERIES: TypeAdapter(Annotated[list[Series], Field(min_length=1)]),
    }

    def decode(self, payload: str, shape: PayloadShape) -> list[int] | list[Series]:
        """Decode one payload into the requested shape.

        Args:
            payload: Base64 text taken verbatim from the attribute.
            shape: Expected structure of the decoded JSON.

        Returns:
            A list of hour labels or a list of Series.

        Raises:
            BadEncodingError: payload is not valid base64.
            BadStructureError: bytes are not JSON of the expected shape.
        """
        raw = self._b64decode(payload, shape)
        logger.debug("Decoding %s payload (%d bytes)", shape.value, len(raw))
        try:
            return self._ADAPTERS[shape].validate_json(raw)
        except ValidationError as e:
            reason = e.errors()[0]["msg"] if e.errors() else str(e)
            raise BadStructureError(
                f"{shape.value} payload does not match expected structure: {reason}",
                context={"shape": shape.value, "reason": reason},
            ) from e

    def decode_labels(self, payload: str) -> list[int]:
        return self.decode(payload, PayloadShape.LABELS)

    def decode_series(self, payload: str) -> list[Series]:
        return self.decode(payload, PayloadShape.SERIES)

    @staticmethod
    def _b64decode(payload: str, shape: PayloadShape) -> bytes:
        try:
            return base64.b64decode(payload.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise BadEncodingError(
                f"{shape.value} payload is not valid base64: {e}",
                context={"shape": shape.value, "reason": str(e)},
            ) from e


def encode_payload(data: object) -> str:
    """Inverse of PayloadDecoder: JSON-encode then base64 an object.

    Used to build fixtures and to re-emit captured charts.
    """
    return base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")

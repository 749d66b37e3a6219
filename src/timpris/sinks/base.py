"""Sink protocol — the store-agnostic write interface.

Architecture
------------
Price points flow to every configured sink independently:

    list[PricePoint] → SinkWriter → Sink (time-series) / Sink (relational)

- **Sink** is the protocol SinkWriter depends on. A sink owns its
  connection lifecycle: it connects inside ``write`` and releases the
  connection before returning or raising.

- Adding a store (object storage, another database) means writing one
  class with ``name``, ``kind`` and ``write``. Extraction and point
  building are untouched.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from timpris.core.models import PricePoint, SinkKind


@runtime_checkable
class Sink(Protocol):
    """A persistent store receiving one batch of price points per run."""

    @property
    def name(self) -> str: ...

    @property
    def kind(self) -> SinkKind: ...

    def write(self, points: Sequence[PricePoint]) -> int:
        """Persist all points. Returns the number written.

        Raises
        ------
        WriteError
            The sink-specific subclass, on any failure.
        """
        ...

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from sorodecode.core.models import DecodedEvent
from sorodecode.matching.specs import EventSpec


# ---------------------------------------------------------------------------
# ISpecProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class ISpecProvider(Protocol):
    """
    Abstract provider of the ordered candidate spec list.

    Domain expectations:
    - The order of the returned specs is the match order (first accept wins).
    - The list is treated as read-only for the duration of a run.
    - Where specs come from (JSON files, a contract's embedded spec, a
      database...) is an infrastructure concern.
    """

    def get_specs(self) -> Sequence[EventSpec]:
        """
        Return the candidate specs in match order.

        Implementations:
        - Static provider wrapping an already-built list
        - Loader reading stellar-xdr JSON spec entries
        """
        ...


# ---------------------------------------------------------------------------
# IDecodedSink
# ---------------------------------------------------------------------------

@runtime_checkable
class IDecodedSink(Protocol):
    """
    Abstract sink for assembled records.

    Domain expectations:
    - It accepts records one at a time, tagged with the index of the event
      they were decoded from.
    - Events that did not match are never handed to a sink.
    """

    def add(self, event_index: int, record: DecodedEvent) -> None:
        """Buffer one decoded record."""
        ...

    def close(self) -> Path | None:
        """
        Flush and finalize any buffered records.

        Returns
        -------
        Path | None
            Identifier of the written output, or None if nothing was written.
        """
        ...

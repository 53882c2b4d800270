"""Output assembler: build `DecodedEvent` records from events and spec lists."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sorodecode.core.models import ContractEvent, DecodedEvent
from sorodecode.matching.mapper import resolve
from sorodecode.matching.matcher import NoMatchError, select_spec
from sorodecode.matching.specs import EventSpec


@dataclass(slots=True)
class DecodeOutcome:
    """Result for one event of a batch: exactly one of `record` / `error` is set."""

    index: int
    event: ContractEvent
    record: DecodedEvent | None = None
    error: NoMatchError | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def decode_event(event: ContractEvent, specs: Sequence[EventSpec]) -> DecodedEvent:
    """Match `event` against `specs` (first accept wins) and assemble the record.

    Raises `NoMatchError` when no spec accepts.
    """
    accept = select_spec(event, specs)
    return DecodedEvent(
        event_type=accept.spec.name,
        contract_id=event.contract_id,
        params=resolve(event, accept),
    )


def decode_many(events: Iterable[ContractEvent], specs: Sequence[EventSpec]) -> list[DecodeOutcome]:
    """Decode a batch; a `NoMatchError` is recorded on its own outcome only."""
    outcomes: list[DecodeOutcome] = []
    for i, event in enumerate(events):
        try:
            outcomes.append(DecodeOutcome(i, event, record=decode_event(event, specs)))
        except NoMatchError as e:
            outcomes.append(DecodeOutcome(i, event, error=e))
    return outcomes

"""Shape matcher: decide whether an event fits an `EventSpec`.

`match_event` runs three gates in order and stops at the first failure:

1. prefix gate      – leading topics are the spec's literal symbols
2. topic-arity gate – remaining topics == topic-located params (exactly)
3. data-shape gate  – data section fits the spec's data format

Accepted matches carry one `SlotRef` per param; reading the values is the
field mapper's job. Declared param types are never compared with value tags.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from sorodecode.core.models import ContractEvent
from sorodecode.core.values import ScVals, symbol_token, val_type
from sorodecode.matching.specs import EventSpec, SlotRef, SlotRefs

logger = logging.getLogger(__name__)

RejectKind = Literal[
    "insufficient_topics",
    "prefix_mismatch",
    "topic_arity_mismatch",
    "data_arity_mismatch",
    "missing_data_key",
]


# ---------- verdicts ----------


@dataclass(frozen=True, slots=True)
class Accept:
    """The event fits `spec`; `slots` maps param name → raw slot, in param order."""

    spec: EventSpec
    slots: dict[str, SlotRef]


@dataclass(frozen=True, slots=True)
class Reject:
    """The event does not fit `spec`; `kind` names the first failing gate."""

    spec: EventSpec
    kind: RejectKind
    detail: str


MatchVerdict = Accept | Reject


class NoMatchError(LookupError):
    """No candidate spec accepted the event."""

    def __init__(self, rejections: Sequence[Reject]) -> None:
        self.rejections = list(rejections)
        names = ", ".join(f"{r.spec.name}: {r.kind}" for r in self.rejections)
        super().__init__(f"no spec matched the event ({names})")


# ---------- gates ----------


def _prefix_gate(event: ContractEvent, spec: EventSpec) -> Reject | None:
    k = len(spec.prefix_topics)
    if len(event.topics) < k:
        return Reject(spec, "insufficient_topics", f"event has {len(event.topics)} topics, prefix needs {k}")
    for i, expected in enumerate(spec.prefix_topics):
        token = symbol_token(event.topics[i])
        if token != expected:
            got = repr(token) if token is not None else val_type(event.topics[i])
            return Reject(spec, "prefix_mismatch", f"topic {i}: expected symbol {expected!r}, got {got}")
    return None


def _topic_arity_gate(event: ContractEvent, spec: EventSpec) -> Reject | None:
    remaining = len(event.topics) - len(spec.prefix_topics)
    if remaining != len(spec.topic_params):
        return Reject(
            spec,
            "topic_arity_mismatch",
            f"{remaining} topics after prefix, spec declares {len(spec.topic_params)} topic params",
        )
    return None


def _count_symbol_key(data: ScVals.Map, name: str) -> int:
    """Count map entries whose key is the symbol `name`."""
    return sum(1 for key, _ in data.entries if symbol_token(key) == name)


def _data_gate(event: ContractEvent, spec: EventSpec) -> Reject | None:
    data = event.data
    n_params = len(spec.data_params)
    match spec.data_format:
        case None:
            # no data params (enforced by EventSpec), nothing to locate
            return None
        case "vec":
            if not isinstance(data, ScVals.Vec):
                return Reject(spec, "data_arity_mismatch", f"expected vec data, got {val_type(data)}")
            if len(data.items) != n_params:
                return Reject(
                    spec,
                    "data_arity_mismatch",
                    f"vec data has {len(data.items)} items, spec declares {n_params} data params",
                )
            return None
        case "map":
            if not isinstance(data, ScVals.Map):
                return Reject(spec, "missing_data_key", f"expected map data, got {val_type(data)}")
            for p in spec.data_params:
                hits = _count_symbol_key(data, p.name)
                if hits != 1:
                    what = "missing" if hits == 0 else f"present {hits} times"
                    return Reject(spec, "missing_data_key", f"map key {p.name!r} {what}")
            return None
        case "single_value":
            if n_params == 0 and not isinstance(data, ScVals.Void):
                return Reject(spec, "data_arity_mismatch", f"expected void data, got {val_type(data)}")
            return None
    raise RuntimeError(f"Unsupported data format {spec.data_format!r}")


def _slots_for(spec: EventSpec) -> dict[str, SlotRef]:
    """Build the slot skeleton for an accepted spec, in param declaration order."""
    k = len(spec.prefix_topics)
    topic_pos = {p.name: k + j for j, p in enumerate(spec.topic_params)}
    data_pos = {p.name: j for j, p in enumerate(spec.data_params)}

    slots: dict[str, SlotRef] = {}
    for p in spec.params:
        if p.location == "topic_list":
            slots[p.name] = SlotRefs.Topic(index=topic_pos[p.name])
            continue
        match spec.data_format:
            case "vec":
                slots[p.name] = SlotRefs.VecItem(index=data_pos[p.name])
            case "map":
                slots[p.name] = SlotRefs.MapKey(name=p.name)
            case "single_value":
                slots[p.name] = SlotRefs.WholeData()
            case _:
                raise RuntimeError(f"{spec.name}.{p.name}: data param without data format")
    return slots


# ---------- public API ----------


def match_event(event: ContractEvent, spec: EventSpec) -> MatchVerdict:
    """Test one event against one spec. The first failing gate rejects."""
    for gate in (_prefix_gate, _topic_arity_gate, _data_gate):
        rejection = gate(event, spec)
        if rejection is not None:
            logger.debug("spec %s rejected: %s (%s)", spec.name, rejection.kind, rejection.detail)
            return rejection
    return Accept(spec, _slots_for(spec))


def select_spec(event: ContractEvent, specs: Sequence[EventSpec]) -> Accept:
    """Return the first spec (in caller order) that accepts `event`.

    Raises `NoMatchError` carrying every rejection when none accepts.
    """
    if not specs:
        raise ValueError("at least one candidate spec is required")

    rejections: list[Reject] = []
    for spec in specs:
        verdict = match_event(event, spec)
        if isinstance(verdict, Accept):
            logger.debug("event from %s matched spec %s", event.contract_id, spec.name)
            return verdict
        rejections.append(verdict)
    raise NoMatchError(rejections)

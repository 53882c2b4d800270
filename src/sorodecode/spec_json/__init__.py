import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel

from sorodecode.core.models import ContractEvent, DecodedEvent
from sorodecode.matching.specs import EventSpec, ParamSpec
from sorodecode.spec_json.scval import scval_from_json, scval_to_json


class EventBodyV0(BaseModel):
    topics: list[Any]
    data: Any


class EventBody(BaseModel):
    v0: EventBodyV0


class ContractEventJson(BaseModel):
    contract_id: str | None = None
    type_: Literal["contract", "system", "diagnostic"] = "contract"
    body: EventBody


class SpecEventParamV0(BaseModel):
    doc: str = ""
    name: str
    type_: str | dict[str, Any]
    location: Literal["topic_list", "data"]


class SpecEventV0(BaseModel):
    doc: str = ""
    lib: str = ""
    name: str
    prefix_topics: list[str] = []
    params: list[SpecEventParamV0] = []
    data_format: Literal["single_value", "vec", "map"] | None = None


JsonSource = Path | dict[str, Any] | list[Any]


def _load_json(src: JsonSource) -> Any:
    if isinstance(src, Path):
        return json.loads(src.read_text())
    return src


# ---- events ----


def get_contract_event(event: ContractEventJson) -> ContractEvent:
    return ContractEvent(
        contract_id=event.contract_id,
        topics=tuple(scval_from_json(t) for t in event.body.v0.topics),
        data=scval_from_json(event.body.v0.data),
        type=event.type_,
    )


def load_event(src: JsonSource) -> ContractEvent:
    return get_contract_event(ContractEventJson.model_validate(_load_json(src)))


def load_events(src: JsonSource) -> list[ContractEvent]:
    """Load one event object or a JSON array of events."""
    raw = _load_json(src)
    if isinstance(raw, list):
        return [load_event(entry) for entry in raw]
    return [load_event(raw)]


# ---- specs ----


def get_param_type_tag(type_: str | dict[str, Any]) -> str:
    """Reduce a spec type (`"address"` or `{"vec": {...}}`) to its tag."""
    if isinstance(type_, str):
        return type_
    if len(type_) != 1:
        raise ValueError(f"expected a single-key type object, got {type_!r}")
    return next(iter(type_))


def get_event_spec(event: SpecEventV0) -> EventSpec:
    return EventSpec(
        name=event.name,
        prefix_topics=tuple(event.prefix_topics),
        params=tuple(
            ParamSpec(
                name=p.name,
                type=get_param_type_tag(p.type_),
                location=p.location,
                doc=p.doc,
            )
            for p in event.params
        ),
        data_format=event.data_format,
        doc=event.doc,
        lib=event.lib,
    )


def get_events_from_spec_entries(entries: Iterable[Any]) -> list[SpecEventV0]:
    """Keep the `event_v0` entries of a contract spec; functions, UDTs etc. are skipped."""
    events: list[SpecEventV0] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"expected a spec entry object, got {entry!r}")
        if "event_v0" in entry:
            events.append(SpecEventV0.model_validate(entry["event_v0"]))
    return events


def load_spec_entries(src: JsonSource) -> list[EventSpec]:
    """Load event specs from one spec entry or a list of entries."""
    raw = _load_json(src)
    entries = raw if isinstance(raw, list) else [raw]
    return [get_event_spec(event) for event in get_events_from_spec_entries(entries)]


# ---- output ----


def decoded_event_to_json(record: DecodedEvent) -> dict[str, Any]:
    return {
        "event_type": record.event_type,
        "contract_id": record.contract_id,
        "params": {name: scval_to_json(v) for name, v in record.params.items()},
    }


__all__ = [
    "ContractEventJson",
    "SpecEventV0",
    "SpecEventParamV0",
    "load_event",
    "load_events",
    "load_spec_entries",
    "get_event_spec",
    "get_events_from_spec_entries",
    "decoded_event_to_json",
    "scval_from_json",
    "scval_to_json",
]

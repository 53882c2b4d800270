"""Event specification primitives.

Defines lightweight dataclasses to describe how to read a contract event:
- `ParamSpec`: one named field, located in the topic list or the data section
- `EventSpec`: one event rule (name, literal prefix topics, params, data format)
- `SlotRefs`: where a matched param's raw value lives in the event
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Literal

Location = Literal["topic_list", "data"]
DataFormat = Literal["single_value", "vec", "map"]


# ---- Raw slot references ----
# Produced by the matcher for every param of an accepted spec:
#   - SlotRefs.Topic(index=<i>)    → event.topics[i]
#   - SlotRefs.VecItem(index=<i>)  → event.data.items[i]
#   - SlotRefs.MapKey(name="<k>")  → value paired with symbol key <k> in event.data
#   - SlotRefs.WholeData()         → event.data itself (single-value format)
class SlotRefs:
    @dataclass(frozen=True, kw_only=True)
    class Topic:
        index: int

    @dataclass(frozen=True, kw_only=True)
    class VecItem:
        index: int

    @dataclass(frozen=True, kw_only=True)
    class MapKey:
        name: str

    @dataclass(frozen=True, kw_only=True)
    class WholeData:
        pass


SlotRef = SlotRefs.Topic | SlotRefs.VecItem | SlotRefs.MapKey | SlotRefs.WholeData


@dataclass(frozen=True)
class ParamSpec:
    """Describe one named event field."""

    name: str
    type: str  # advisory tag, e.g. "address", "i128", "vec"
    location: Location
    doc: str = ""


@dataclass(frozen=True)
class EventSpec:
    """One event rule: literal prefix topics followed by typed params."""

    name: str
    prefix_topics: tuple[str, ...]
    params: tuple[ParamSpec, ...]
    data_format: DataFormat | None = None
    doc: str = ""
    lib: str = ""
    topic_params: tuple[ParamSpec, ...] = field(init=False, repr=False, compare=False)
    data_params: tuple[ParamSpec, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Accept lists from callers; store tuples so specs stay hashable
        object.__setattr__(self, "prefix_topics", tuple(self.prefix_topics))
        object.__setattr__(self, "params", tuple(self.params))

        dupes = [n for n, c in Counter(p.name for p in self.params).items() if c > 1]
        if dupes:
            raise ValueError(f"{self.name}: duplicate param names {dupes}")

        for p in self.params:
            if p.location not in ("topic_list", "data"):
                raise ValueError(f"{self.name}.{p.name}: unknown location {p.location!r}")
        if self.data_format not in (None, "single_value", "vec", "map"):
            raise ValueError(f"{self.name}: unknown data format {self.data_format!r}")

        topic_params = tuple(p for p in self.params if p.location == "topic_list")
        data_params = tuple(p for p in self.params if p.location == "data")

        if data_params and self.data_format is None:
            raise ValueError(f"{self.name}: data params present but no data format declared")
        if self.data_format == "single_value" and len(data_params) > 1:
            raise ValueError(f"{self.name}: single_value data format allows at most one data param")

        object.__setattr__(self, "topic_params", topic_params)
        object.__setattr__(self, "data_params", data_params)

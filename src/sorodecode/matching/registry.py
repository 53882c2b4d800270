"""Ordered candidate spec lists.

This module exposes:
- `make_spec_list(specs)` → SpecList prefilled in match order
- `add_event_spec(spec_list, spec)` → append one spec (names must be unique)
- `add_many(spec_list, specs)` → append multiple

Unlike a lookup table keyed by topic, order matters here: the first spec in
the list that accepts an event wins.
"""

from __future__ import annotations

from collections.abc import Iterable

from sorodecode.core.interfaces import ISpecProvider
from sorodecode.matching.specs import EventSpec

SpecList = list[EventSpec]


def make_spec_list(specs: Iterable[EventSpec] = ()) -> SpecList:
    """Build a spec list, keeping the given order."""
    spec_list: SpecList = []
    add_many(spec_list, specs)
    return spec_list


def add_event_spec(spec_list: SpecList, spec: EventSpec) -> None:
    """Append one spec; a second spec with the same name is an error."""
    if any(s.name == spec.name for s in spec_list):
        raise ValueError(f"duplicate event spec name {spec.name!r}")
    spec_list.append(spec)


def add_many(spec_list: SpecList, specs: Iterable[EventSpec]) -> None:
    """Append many specs in order."""
    for s in specs:
        add_event_spec(spec_list, s)


class SpecListProvider(ISpecProvider):
    """
    Simple provider that always returns the same ordered spec list.

    This is the bridge between the spec loaders (JSON files, embedded
    contract specs) and callers that only depend on the interface.
    """

    def __init__(self, specs: SpecList) -> None:
        self._specs = specs

    def get_specs(self) -> SpecList:
        return self._specs

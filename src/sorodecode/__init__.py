from __future__ import annotations

from .core.models import ContractEvent, DecodedEvent
from .core.values import ScVal, ScVals
from .matching.assembler import decode_event, decode_many
from .matching.matcher import NoMatchError, match_event, select_spec
from .matching.registry import add_event_spec, add_many, make_spec_list
from .matching.specs import EventSpec, ParamSpec

__all__ = [
    "make_spec_list",
    "add_event_spec",
    "add_many",
    "EventSpec",
    "ParamSpec",
    "ContractEvent",
    "DecodedEvent",
    "ScVal",
    "ScVals",
    "decode_event",
    "decode_many",
    "match_event",
    "select_spec",
    "NoMatchError",
]

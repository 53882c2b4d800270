"""Event matching and binding.

This package provides:
- Event specification system (EventSpec, ParamSpec, SlotRefs)
- Shape matcher producing Accept / Reject verdicts
- Field mapper resolving accepted slots into named values
- Output assembler building DecodedEvent records
- Ordered spec lists
"""

from sorodecode.matching.assembler import DecodeOutcome, decode_event, decode_many
from sorodecode.matching.mapper import MatchBinding, resolve
from sorodecode.matching.matcher import Accept, NoMatchError, Reject, match_event, select_spec
from sorodecode.matching.registry import SpecListProvider, add_event_spec, add_many, make_spec_list
from sorodecode.matching.specs import EventSpec, ParamSpec, SlotRefs

__all__ = [
    "DecodeOutcome",
    "decode_event",
    "decode_many",
    "MatchBinding",
    "resolve",
    "Accept",
    "NoMatchError",
    "Reject",
    "match_event",
    "select_spec",
    "SpecListProvider",
    "add_event_spec",
    "add_many",
    "make_spec_list",
    "EventSpec",
    "ParamSpec",
    "SlotRefs",
]

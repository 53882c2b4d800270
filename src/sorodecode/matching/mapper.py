"""Field mapper: read the raw value behind every slot of an accepted match."""

from __future__ import annotations

from sorodecode.core.models import ContractEvent
from sorodecode.core.values import ScVal, ScVals, symbol_token
from sorodecode.matching.matcher import Accept
from sorodecode.matching.specs import SlotRef, SlotRefs

MatchBinding = dict[str, ScVal]


def _map_value(data: ScVals.Map, name: str) -> ScVal:
    for key, val in data.entries:
        if symbol_token(key) == name:
            return val
    raise KeyError(name)


def resolve_slot(event: ContractEvent, slot: SlotRef) -> ScVal:
    """Resolve one slot reference against the event it was matched on."""
    data = event.data
    match slot:
        case SlotRefs.Topic():
            return event.topics[slot.index]
        case SlotRefs.VecItem():
            assert isinstance(data, ScVals.Vec)
            return data.items[slot.index]
        case SlotRefs.MapKey():
            assert isinstance(data, ScVals.Map)
            return _map_value(data, slot.name)
        case SlotRefs.WholeData():
            return data
    raise RuntimeError("Unsupported SlotRef type")


def resolve(event: ContractEvent, accept: Accept) -> MatchBinding:
    """Bind every param of the accepted spec to its value, in param order.

    The matcher has already proven each slot exists, so this cannot fail for
    an `Accept` produced from the same event.
    """
    return {p.name: resolve_slot(event, accept.slots[p.name]) for p in accept.spec.params}

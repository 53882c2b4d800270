"""Core data models and dynamic column buffer.

This module defines:
- `ContractEvent`: one decoded contract event (topics + data section).
- `DecodedEvent`: the self-describing record assembled for a matched event.
- `Column`: dynamic, append-only columnar buffer where *any* param name
   becomes its own Parquet column.

Design notes
------------
- Events are frozen; the matcher only ever reads them.
- `DecodedEvent.params` preserves the winning spec's param order.
- Dynamic column values are stored as strings (compact value JSON) so that
  every param, whatever its tag, fits one Arrow string column.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import pyarrow as pa

from sorodecode.core.values import ScVal

# === Base schema (Arrow) ===

_BASE_FIELDS: list[tuple[str, pa.DataType]] = [
    ("event_index", pa.uint64()),
    ("contract_id", pa.string()),
    ("event_type", pa.string()),
]

EventType = Literal["contract", "system", "diagnostic"]


# === Events ===


@dataclass(slots=True, frozen=True)
class ContractEvent:
    """Contract event as read from the ledger, already in value-model form."""

    contract_id: str | None  # "C..." strkey; None for system events
    topics: tuple[ScVal, ...]
    data: ScVal
    type: EventType = "contract"


@dataclass(slots=True)
class DecodedEvent:
    """Event re-projected onto the field names of the spec it matched."""

    event_type: str  # name of the winning spec
    contract_id: str | None
    params: dict[str, ScVal]


# === Dynamic column buffer ===


@dataclass(slots=True)
class Column:
    """Dynamic columnar buffer for decoded events.

    - Base columns are always present and strongly typed.
    - Dynamic columns are created lazily upon first param name appearance.
    - Events of different types may share a buffer; params absent from a
      row are None.
    """

    event_index: list[int] = field(default_factory=list)
    contract_id: list[str | None] = field(default_factory=list)
    event_type: list[str] = field(default_factory=list)

    # Dynamic columns created on-demand for any param name
    dyn: dict[str, list[str | None]] = field(default_factory=dict)
    _rows: int = 0

    @staticmethod
    def empty() -> Column:
        """Return an empty buffer."""
        return Column()

    def size(self) -> int:
        """Number of rows currently stored."""
        return self._rows

    def _append_base(self, event_index: int, contract_id: str | None, event_type: str) -> None:
        """Append one row to base columns and pad existing dynamic cols."""
        self.event_index.append(event_index)
        self.contract_id.append(contract_id)
        self.event_type.append(event_type)
        self._rows += 1
        for col in self.dyn.values():
            col.append(None)

    def _ensure_dyn_col(self, name: str) -> list[str | None]:
        """Ensure a dynamic column exists and is aligned to current row count."""
        col = self.dyn.get(name)
        if col is None:
            col = [None] * self._rows
            self.dyn[name] = col
        return col

    def append_decoded(
        self,
        *,
        event_index: int,
        event_type: str,
        contract_id: str | None,
        values: dict[str, str | None],
    ) -> None:
        """Append one decoded event (already rendered to strings)."""
        self._append_base(event_index, contract_id, event_type)
        for k, v in values.items():
            self._ensure_dyn_col(k)[-1] = v

    def to_arrow_table(self) -> pa.Table:
        """Convert the buffer to an Arrow table ordered by event index."""
        fields = [pa.field(n, t) for n, t in _BASE_FIELDS]
        arrays: dict[str, pa.Array] = {
            "event_index": pa.array(self.event_index, type=pa.uint64()),
            "contract_id": pa.array(self.contract_id, type=pa.string()),
            "event_type": pa.array(self.event_type, type=pa.string()),
        }
        # Dynamic columns in first-seen order, so a single spec's
        # columns follow its param declaration order
        for name, col in self.dyn.items():
            fields.append(pa.field(name, pa.string()))
            arrays[name] = pa.array(col, type=pa.string())
        schema = pa.schema(fields)
        return pa.Table.from_pydict(arrays, schema=schema).sort_by([("event_index", "ascending")])

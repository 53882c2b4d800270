from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from sorodecode.core.interfaces import IDecodedSink
from sorodecode.core.models import Column, DecodedEvent
from sorodecode.spec_json.scval import scval_to_json

logger = logging.getLogger(__name__)


class ParquetSink(IDecodedSink):
    """
    Parquet writer using dynamic columns:
    any param name becomes a `params.<name>` column on the fly.

    Each cell holds the compact JSON form of the bound value, so params of
    any tag (and events of different types) share one file. Rows are written
    once, on `close()`.
    """

    def __init__(self, path: Path, *, codec: str = "zstd") -> None:
        self.path = path
        self.codec = codec
        self.buf = Column.empty()

    def add(self, event_index: int, record: DecodedEvent) -> None:
        self.buf.append_decoded(
            event_index=event_index,
            event_type=record.event_type,
            contract_id=record.contract_id,
            values={
                f"params.{name}": json.dumps(scval_to_json(v), separators=(",", ":"))
                for name, v in record.params.items()
            },
        )

    def _atomic_write(self, table: pa.Table) -> Path:
        """Write Parquet atomically (tmp + replace)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        try:
            pq.write_table(table, tmp, compression=self.codec)
            os.replace(tmp, self.path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        logger.info("wrote %s (rows=%d, cols=%d)", self.path, len(table), len(table.schema))
        return self.path

    def close(self) -> Path | None:
        if self.buf.size() == 0:
            return None
        out = self._atomic_write(self.buf.to_arrow_table())
        self.buf = Column.empty()
        return out

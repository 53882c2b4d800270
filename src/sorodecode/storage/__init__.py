"""Storage components for decoded events.

This package provides:
- ParquetSink: Parquet writer with dynamic per-param columns
"""

from sorodecode.storage.parquet import ParquetSink

__all__ = [
    "ParquetSink",
]

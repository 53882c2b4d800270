from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MatchConfig:
    """Configuration for one `sorodecode match` run (CLI)."""

    event_path: Path
    spec_paths: tuple[Path, ...]
    parquet_out: Path | None = None
    show_rejections: bool = False
    compact: bool = False  # one JSON record per line instead of indented output
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not self.spec_paths:
            raise ValueError("at least one spec path is required")

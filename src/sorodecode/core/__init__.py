"""Core data models, value model and configuration.

This package provides:
- Value model (ScVal, ScVals)
- Data models (ContractEvent, DecodedEvent, Column)
- Configuration classes (MatchConfig)
"""

from sorodecode.core.config import MatchConfig
from sorodecode.core.models import Column, ContractEvent, DecodedEvent
from sorodecode.core.values import ScVal, ScVals, val_type

__all__ = [
    "MatchConfig",
    "Column",
    "ContractEvent",
    "DecodedEvent",
    "ScVal",
    "ScVals",
    "val_type",
]

"""Recursive tagged value model for Soroban contract data.

Every topic and data section of a contract event is an `ScVal`: a closed
union of the small frozen dataclasses declared under `ScVals`. Composites
(`Vec`, `Map`) hold their children in tuples, so a value is an immutable,
hashable tree.

Design notes
------------
- 128-bit integers keep the XDR split into `hi` / `lo` halves; `.value`
  gives the combined Python int.
- 256-bit integers are held as a single Python int.
- Map keys are not unique at the type level. Field lookups by symbol key
  live in the matcher, which decides what duplicates mean.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

_U64_MASK = (1 << 64) - 1


class ScVals:
    @dataclass(frozen=True, slots=True)
    class Void:
        pass

    @dataclass(frozen=True, slots=True)
    class Bool:
        value: bool

    @dataclass(frozen=True, slots=True)
    class U32:
        value: int

    @dataclass(frozen=True, slots=True)
    class I32:
        value: int

    @dataclass(frozen=True, slots=True)
    class U64:
        value: int

    @dataclass(frozen=True, slots=True)
    class I64:
        value: int

    @dataclass(frozen=True, slots=True)
    class U128:
        hi: int  # upper 64 bits, unsigned
        lo: int  # lower 64 bits, unsigned

        @property
        def value(self) -> int:
            return (self.hi << 64) | self.lo

    @dataclass(frozen=True, slots=True)
    class I128:
        hi: int  # upper 64 bits, signed
        lo: int  # lower 64 bits, unsigned

        @property
        def value(self) -> int:
            return (self.hi << 64) | self.lo

    @dataclass(frozen=True, slots=True)
    class Timepoint:
        value: int  # unix seconds, u64

    @dataclass(frozen=True, slots=True)
    class Duration:
        value: int  # seconds, u64

    @dataclass(frozen=True, slots=True)
    class U256:
        value: int

    @dataclass(frozen=True, slots=True)
    class I256:
        value: int

    @dataclass(frozen=True, slots=True)
    class Bytes:
        value: bytes

    @dataclass(frozen=True, slots=True)
    class String:
        value: str

    @dataclass(frozen=True, slots=True)
    class Symbol:
        value: str

    @dataclass(frozen=True, slots=True)
    class Address:
        value: str  # strkey, e.g. "G..." (account) or "C..." (contract)

    @dataclass(frozen=True, slots=True)
    class Vec:
        items: tuple[ScVal, ...] = ()

        def __len__(self) -> int:
            return len(self.items)

    @dataclass(frozen=True, slots=True)
    class Map:
        entries: tuple[tuple[ScVal, ScVal], ...] = ()

        def __len__(self) -> int:
            return len(self.entries)


ScVal = (
    ScVals.Void
    | ScVals.Bool
    | ScVals.U32
    | ScVals.I32
    | ScVals.U64
    | ScVals.I64
    | ScVals.U128
    | ScVals.I128
    | ScVals.Timepoint
    | ScVals.Duration
    | ScVals.U256
    | ScVals.I256
    | ScVals.Bytes
    | ScVals.String
    | ScVals.Symbol
    | ScVals.Address
    | ScVals.Vec
    | ScVals.Map
)

ScValType = Literal[
    "void",
    "bool",
    "u32",
    "i32",
    "u64",
    "i64",
    "u128",
    "i128",
    "timepoint",
    "duration",
    "u256",
    "i256",
    "bytes",
    "string",
    "symbol",
    "address",
    "vec",
    "map",
]


def val_type(v: ScVal) -> ScValType:
    """Return the lowercase tag of a value (the key used in its JSON form)."""
    match v:
        case ScVals.Void():
            return "void"
        case ScVals.Bool():
            return "bool"
        case ScVals.U32():
            return "u32"
        case ScVals.I32():
            return "i32"
        case ScVals.U64():
            return "u64"
        case ScVals.I64():
            return "i64"
        case ScVals.U128():
            return "u128"
        case ScVals.I128():
            return "i128"
        case ScVals.Timepoint():
            return "timepoint"
        case ScVals.Duration():
            return "duration"
        case ScVals.U256():
            return "u256"
        case ScVals.I256():
            return "i256"
        case ScVals.Bytes():
            return "bytes"
        case ScVals.String():
            return "string"
        case ScVals.Symbol():
            return "symbol"
        case ScVals.Address():
            return "address"
        case ScVals.Vec():
            return "vec"
        case ScVals.Map():
            return "map"
    raise TypeError(f"not an ScVal: {v!r}")


def symbol_token(v: ScVal) -> str | None:
    """Return the token of a symbol value, None for any other tag."""
    if isinstance(v, ScVals.Symbol):
        return v.value
    return None


# ---- 128-bit helpers ----


def u128_from_int(n: int) -> ScVals.U128:
    if not 0 <= n < 1 << 128:
        raise ValueError(f"{n} out of range for u128")
    return ScVals.U128(hi=n >> 64, lo=n & _U64_MASK)


def i128_from_int(n: int) -> ScVals.I128:
    if not -(1 << 127) <= n < 1 << 127:
        raise ValueError(f"{n} out of range for i128")
    # Python's >> is arithmetic, so hi keeps the sign
    return ScVals.I128(hi=n >> 64, lo=n & _U64_MASK)

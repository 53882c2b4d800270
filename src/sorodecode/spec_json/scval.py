"""Convert between `ScVal` trees and their stellar-xdr JSON form.

Each value is a single-key object naming its tag (`{"u32": 7}`), except
`"void"` which is a bare string. 64-bit and 128-bit integers are accepted as
JSON numbers or decimal strings; 128-bit integers may also use the
`{"hi": ..., "lo": ...}` split form, which is what `scval_to_json` emits.
256-bit integers take a decimal string or the four-part
`{"hi_hi", "hi_lo", "lo_hi", "lo_lo"}` form and are emitted as decimal strings.
"""

from __future__ import annotations

from typing import Any

from sorodecode.core.values import ScVal, ScVals, i128_from_int, u128_from_int


def _as_int(raw: Any, tag: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(raw, bool):
        raise ValueError(f"{tag}: expected integer, got bool")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw, 10)
        except ValueError:
            raise ValueError(f"{tag}: invalid integer string {raw!r}") from None
    raise ValueError(f"{tag}: expected integer, got {type(raw).__name__}")


def _ranged(raw: Any, tag: str, lo: int, hi: int) -> int:
    n = _as_int(raw, tag)
    if not lo <= n <= hi:
        raise ValueError(f"{tag}: {n} out of range")
    return n


def _int128(raw: Any, tag: str) -> ScVals.U128 | ScVals.I128:
    if isinstance(raw, dict):
        if set(raw) != {"hi", "lo"}:
            raise ValueError(f"{tag}: expected {{hi, lo}}, got keys {sorted(raw)}")
        lo = _ranged(raw["lo"], tag, 0, (1 << 64) - 1)
        if tag == "u128":
            return ScVals.U128(hi=_ranged(raw["hi"], tag, 0, (1 << 64) - 1), lo=lo)
        return ScVals.I128(hi=_ranged(raw["hi"], tag, -(1 << 63), (1 << 63) - 1), lo=lo)
    n = _as_int(raw, tag)
    return u128_from_int(n) if tag == "u128" else i128_from_int(n)


_INT256_PARTS = ("hi_hi", "hi_lo", "lo_hi", "lo_lo")


def _int256(raw: Any, tag: str) -> ScVals.U256 | ScVals.I256:
    if isinstance(raw, dict):
        if set(raw) != set(_INT256_PARTS):
            raise ValueError(f"{tag}: expected {{hi_hi, hi_lo, lo_hi, lo_lo}}, got keys {sorted(raw)}")
        hi_hi_lo = -(1 << 63) if tag == "i256" else 0
        hi_hi_hi = (1 << 63) - 1 if tag == "i256" else (1 << 64) - 1
        n = _ranged(raw["hi_hi"], tag, hi_hi_lo, hi_hi_hi)
        for part in _INT256_PARTS[1:]:
            n = (n << 64) | _ranged(raw[part], tag, 0, (1 << 64) - 1)
    else:
        n = _as_int(raw, tag)
    if tag == "u256":
        return ScVals.U256(_ranged(n, tag, 0, (1 << 256) - 1))
    return ScVals.I256(_ranged(n, tag, -(1 << 255), (1 << 255) - 1))


def scval_from_json(obj: Any) -> ScVal:
    """Build an `ScVal` from its JSON form. Raises ValueError on anything else."""
    if obj == "void":
        return ScVals.Void()
    if not isinstance(obj, dict) or len(obj) != 1:
        raise ValueError(f"expected a single-key value object, got {obj!r}")

    ((tag, raw),) = obj.items()
    match tag:
        case "void":
            return ScVals.Void()
        case "bool":
            if not isinstance(raw, bool):
                raise ValueError(f"bool: expected true/false, got {raw!r}")
            return ScVals.Bool(raw)
        case "u32":
            return ScVals.U32(_ranged(raw, tag, 0, (1 << 32) - 1))
        case "i32":
            return ScVals.I32(_ranged(raw, tag, -(1 << 31), (1 << 31) - 1))
        case "u64":
            return ScVals.U64(_ranged(raw, tag, 0, (1 << 64) - 1))
        case "i64":
            return ScVals.I64(_ranged(raw, tag, -(1 << 63), (1 << 63) - 1))
        case "u128" | "i128":
            return _int128(raw, tag)
        case "timepoint":
            return ScVals.Timepoint(_ranged(raw, tag, 0, (1 << 64) - 1))
        case "duration":
            return ScVals.Duration(_ranged(raw, tag, 0, (1 << 64) - 1))
        case "u256" | "i256":
            return _int256(raw, tag)
        case "bytes":
            try:
                return ScVals.Bytes(bytes.fromhex(raw))
            except (TypeError, ValueError):
                raise ValueError(f"bytes: expected hex string, got {raw!r}") from None
        case "string" | "symbol" | "address":
            if not isinstance(raw, str):
                raise ValueError(f"{tag}: expected string, got {raw!r}")
            if tag == "string":
                return ScVals.String(raw)
            if tag == "symbol":
                return ScVals.Symbol(raw)
            return ScVals.Address(raw)
        case "vec":
            if raw is None:
                return ScVals.Vec()
            if not isinstance(raw, list):
                raise ValueError(f"vec: expected list, got {raw!r}")
            return ScVals.Vec(tuple(scval_from_json(item) for item in raw))
        case "map":
            if raw is None:
                return ScVals.Map()
            if not isinstance(raw, list):
                raise ValueError(f"map: expected list of entries, got {raw!r}")
            entries = []
            for entry in raw:
                if not isinstance(entry, dict) or set(entry) != {"key", "val"}:
                    raise ValueError(f"map: expected {{key, val}} entry, got {entry!r}")
                entries.append((scval_from_json(entry["key"]), scval_from_json(entry["val"])))
            return ScVals.Map(tuple(entries))
    raise ValueError(f"unsupported value type {tag!r}")


def scval_to_json(v: ScVal) -> Any:
    """Render an `ScVal` in the JSON form `scval_from_json` reads."""
    match v:
        case ScVals.Void():
            return "void"
        case ScVals.Bool():
            return {"bool": v.value}
        case ScVals.U32():
            return {"u32": v.value}
        case ScVals.I32():
            return {"i32": v.value}
        case ScVals.U64():
            return {"u64": v.value}
        case ScVals.I64():
            return {"i64": v.value}
        case ScVals.U128():
            return {"u128": {"hi": v.hi, "lo": v.lo}}
        case ScVals.I128():
            return {"i128": {"hi": v.hi, "lo": v.lo}}
        case ScVals.Timepoint():
            return {"timepoint": v.value}
        case ScVals.Duration():
            return {"duration": v.value}
        case ScVals.U256():
            return {"u256": str(v.value)}
        case ScVals.I256():
            return {"i256": str(v.value)}
        case ScVals.Bytes():
            return {"bytes": v.value.hex()}
        case ScVals.String():
            return {"string": v.value}
        case ScVals.Symbol():
            return {"symbol": v.value}
        case ScVals.Address():
            return {"address": v.value}
        case ScVals.Vec():
            return {"vec": [scval_to_json(item) for item in v.items]}
        case ScVals.Map():
            return {"map": [{"key": scval_to_json(k), "val": scval_to_json(val)} for k, val in v.entries]}
    raise TypeError(f"not an ScVal: {v!r}")

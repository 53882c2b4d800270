import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from conftest import ALICE, BOB, TOKEN
from sorodecode.core.values import ScVals
from sorodecode.spec_json import (
    decoded_event_to_json,
    load_event,
    load_events,
    load_spec_entries,
    scval_from_json,
    scval_to_json,
)
from sorodecode.matching.assembler import decode_event


def test_load_event(fixtures_dir: Path) -> None:
    event = load_event(fixtures_dir / "event_approve.json")

    assert event.contract_id == TOKEN
    assert event.type == "contract"
    assert event.topics == (ScVals.Symbol("approve"), ScVals.Address(ALICE), ScVals.Address(BOB))
    assert event.data == ScVals.Vec((ScVals.I128(hi=0, lo=10000), ScVals.U32(1998742)))


def test_load_events_accepts_arrays(fixtures_dir: Path) -> None:
    assert len(load_events(fixtures_dir / "events_batch.json")) == 3
    assert len(load_events(fixtures_dir / "event_approve.json")) == 1


def test_load_spec_entry(fixtures_dir: Path) -> None:
    (spec,) = load_spec_entries(fixtures_dir / "spec_approve.json")

    assert spec.name == "approve"
    assert spec.prefix_topics == ("approve",)
    assert spec.data_format == "vec"
    assert spec.doc == "Emitted when an allowance is set."
    assert [(p.name, p.type, p.location) for p in spec.params] == [
        ("from", "address", "topic_list"),
        ("spender", "address", "topic_list"),
        ("amount", "i128", "data"),
        ("live_until_ledger", "u32", "data"),
    ]


def test_contract_spec_skips_non_events(fixtures_dir: Path) -> None:
    specs = load_spec_entries(fixtures_dir / "spec_contract.json")

    assert [s.name for s in specs] == ["transfer", "set_admin", "mint"]
    assert specs[2].params[2].type == "option"


def test_missing_data_format_is_rejected() -> None:
    entry = {
        "event_v0": {
            "name": "bad",
            "prefix_topics": ["bad"],
            "params": [{"name": "x", "type_": "u32", "location": "data"}],
        }
    }
    with pytest.raises(ValueError, match="no data format"):
        load_spec_entries(entry)


def test_bad_location_is_a_validation_error() -> None:
    entry = {"event_v0": {"name": "bad", "params": [{"name": "x", "type_": "u32", "location": "body"}]}}
    with pytest.raises(ValidationError):
        load_spec_entries(entry)


@pytest.mark.parametrize(
    "obj, expected",
    [
        ("void", ScVals.Void()),
        ({"bool": False}, ScVals.Bool(False)),
        ({"i32": -3}, ScVals.I32(-3)),
        ({"u64": "18446744073709551615"}, ScVals.U64((1 << 64) - 1)),
        ({"i64": -9}, ScVals.I64(-9)),
        ({"i128": "-1"}, ScVals.I128(hi=-1, lo=(1 << 64) - 1)),
        ({"u128": {"hi": 1, "lo": 2}}, ScVals.U128(hi=1, lo=2)),
        ({"bytes": "deadbeef"}, ScVals.Bytes(b"\xde\xad\xbe\xef")),
        ({"timepoint": "1700000000"}, ScVals.Timepoint(1700000000)),
        ({"duration": 3600}, ScVals.Duration(3600)),
        ({"u256": "10000"}, ScVals.U256(10000)),
        (
            {"u256": {"hi_hi": 1, "hi_lo": 0, "lo_hi": 0, "lo_lo": 5}},
            ScVals.U256((1 << 192) | 5),
        ),
        (
            {"i256": {"hi_hi": -1, "hi_lo": (1 << 64) - 1, "lo_hi": (1 << 64) - 1, "lo_lo": (1 << 64) - 2}},
            ScVals.I256(-2),
        ),
        ({"string": "hello"}, ScVals.String("hello")),
        ({"vec": None}, ScVals.Vec()),
        (
            {"map": [{"key": {"symbol": "k"}, "val": {"u32": 1}}]},
            ScVals.Map(((ScVals.Symbol("k"), ScVals.U32(1)),)),
        ),
    ],
)
def test_scval_from_json(obj, expected) -> None:
    assert scval_from_json(obj) == expected


@pytest.mark.parametrize(
    "obj",
    [
        {"u32": -1},
        {"u32": True},
        {"i64": "12x"},
        {"bytes": "zz"},
        {"symbol": 5},
        {"map": [{"key": "void"}]},
        {"u512": "1"},
        {"timepoint": -1},
        {"u256": "-1"},
        {"i256": {"hi": 0, "lo": 1}},
        {"u32": 1, "i32": 1},
        42,
    ],
)
def test_scval_from_json_rejects(obj) -> None:
    with pytest.raises(ValueError):
        scval_from_json(obj)


def test_scval_to_json_uses_split_int128() -> None:
    assert scval_to_json(ScVals.I128(hi=0, lo=500)) == {"i128": {"hi": 0, "lo": 500}}
    assert scval_to_json(ScVals.Void()) == "void"


def test_scval_to_json_time_and_wide_ints() -> None:
    assert scval_to_json(ScVals.Timepoint(1700000000)) == {"timepoint": 1700000000}
    assert scval_to_json(ScVals.Duration(60)) == {"duration": 60}
    assert scval_to_json(ScVals.U256(1 << 200)) == {"u256": str(1 << 200)}
    assert scval_to_json(ScVals.I256(-7)) == {"i256": "-7"}


def test_decoded_event_to_json(fixtures_dir: Path) -> None:
    event = load_event(fixtures_dir / "event_approve.json")
    specs = load_spec_entries(fixtures_dir / "spec_approve.json")

    doc = decoded_event_to_json(decode_event(event, specs))

    assert doc == {
        "event_type": "approve",
        "contract_id": TOKEN,
        "params": {
            "from": {"address": ALICE},
            "spender": {"address": BOB},
            "amount": {"i128": {"hi": 0, "lo": 10000}},
            "live_until_ledger": {"u32": 1998742},
        },
    }
    assert list(doc["params"]) == ["from", "spender", "amount", "live_until_ledger"]


def test_timepoint_and_u256_data_decode(fixtures_dir: Path) -> None:
    raw = json.loads((fixtures_dir / "event_approve.json").read_text())
    raw["body"]["v0"]["data"]["vec"] = [{"u256": "10000"}, {"timepoint": "1700000000"}]
    specs = load_spec_entries(fixtures_dir / "spec_approve.json")

    doc = decoded_event_to_json(decode_event(load_event(raw), specs))

    assert doc["params"]["amount"] == {"u256": "10000"}
    assert doc["params"]["live_until_ledger"] == {"timepoint": 1700000000}


@pytest.mark.parametrize("entries", [[1], ["event_v0"], [None]])
def test_non_object_spec_entries_are_rejected(entries) -> None:
    with pytest.raises(ValueError, match="expected a spec entry object"):
        load_spec_entries(entries)

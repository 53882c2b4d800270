from pathlib import Path

import pytest

from sorodecode.core.models import ContractEvent
from sorodecode.core.values import ScVals
from sorodecode.matching.specs import EventSpec, ParamSpec

FIXTURES = Path(__file__).parent / "fixtures"

ALICE = "GCEZWKCA5VLDNRLN3RPRJMRZOX3Z6G5CHCGSNFHEYVXM3XOJMDS674JZ"
BOB = "GBDEVU63Y6NTHJQQZIKVTC23NWLQVP3WJ2RI2OTSJTNYOIGICST6DUXR"
TOKEN = "CDLZFC3SYJYDZT7K67VZ75HPJVIEUVNIXF47ZG2FB2RMQQVU2HHGCYSC"


def sym(s: str) -> ScVals.Symbol:
    return ScVals.Symbol(s)


def addr(s: str) -> ScVals.Address:
    return ScVals.Address(s)


def smap(**entries) -> ScVals.Map:
    """Map with symbol keys, in keyword order."""
    return ScVals.Map(tuple((sym(k), v) for k, v in entries.items()))


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def approve_event() -> ContractEvent:
    return ContractEvent(
        contract_id=TOKEN,
        topics=(sym("approve"), addr(ALICE), addr(BOB)),
        data=ScVals.Vec((ScVals.I128(hi=0, lo=10000), ScVals.U32(1998742))),
    )


@pytest.fixture
def approve_spec() -> EventSpec:
    return EventSpec(
        name="approve",
        prefix_topics=("approve",),
        params=(
            ParamSpec("from", "address", "topic_list"),
            ParamSpec("spender", "address", "topic_list"),
            ParamSpec("amount", "i128", "data"),
            ParamSpec("live_until_ledger", "u32", "data"),
        ),
        data_format="vec",
    )


@pytest.fixture
def transfer_spec() -> EventSpec:
    return EventSpec(
        name="transfer",
        prefix_topics=("transfer",),
        params=(
            ParamSpec("from", "address", "topic_list"),
            ParamSpec("to", "address", "topic_list"),
            ParamSpec("amount", "i128", "data"),
        ),
        data_format="vec",
    )


@pytest.fixture
def memo_spec() -> EventSpec:
    return EventSpec(
        name="transfer_memo",
        prefix_topics=("transfer",),
        params=(
            ParamSpec("amount", "i128", "data"),
            ParamSpec("memo", "string", "data"),
        ),
        data_format="map",
    )

from pathlib import Path

import pyarrow.compute as pc
import pyarrow.parquet as pq

from sorodecode.matching.assembler import decode_many
from sorodecode.matching.registry import make_spec_list
from sorodecode.spec_json import decoded_event_to_json, load_events, load_spec_entries
from sorodecode.storage.parquet import ParquetSink

EXAMPLES_ROOT = Path(__file__).parent
assert EXAMPLES_ROOT.name == "examples"
OUT = EXAMPLES_ROOT.parent / "data_examples" / "token_events.parquet"

EVENTS = EXAMPLES_ROOT / "token" / "events.json"
SPEC = EXAMPLES_ROOT / "token" / "contract_spec.json"
assert EVENTS.is_file() and SPEC.is_file()

specs = make_spec_list(load_spec_entries(SPEC))
events = load_events(EVENTS)


def main():
    sink = ParquetSink(OUT)
    for outcome in decode_many(events, specs):
        if outcome.record is None:
            assert outcome.error is not None
            print(f"event #{outcome.index}: no match")
            for r in outcome.error.rejections:
                print(f"  {r.spec.name:<12} {r.kind:<22} {r.detail}")
            continue
        print(decoded_event_to_json(outcome.record))
        sink.add(outcome.index, outcome.record)

    path = sink.close()
    if path is None:
        return

    # Read the shard back and show the columns built from param names
    table = pq.read_table(path)
    print(len(table))
    print(table.column_names)
    print(table.filter(pc.equal(table["event_type"], "mint")).to_pylist())


main()

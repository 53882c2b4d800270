import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from sorodecode.core.config import MatchConfig
from sorodecode.core.models import ContractEvent
from sorodecode.matching.assembler import DecodeOutcome, decode_many
from sorodecode.matching.registry import SpecListProvider, add_many, make_spec_list
from sorodecode.spec_json import decoded_event_to_json, load_events, load_spec_entries
from sorodecode.storage.parquet import ParquetSink

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("sorodecode")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_inputs(config: MatchConfig) -> tuple[list[ContractEvent], SpecListProvider]:
    try:
        events = load_events(config.event_path)
        specs = make_spec_list()
        for path in config.spec_paths:
            loaded = load_spec_entries(path)
            logger.info("loaded %d event specs from %s", len(loaded), path)
            add_many(specs, loaded)
    except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    if not specs:
        raise click.UsageError("no event specs found in the given --spec files")
    logger.info("loaded %d events, %d candidate specs", len(events), len(specs))
    return events, SpecListProvider(specs)


def _print_rejections(outcome: DecodeOutcome) -> None:
    assert outcome.error is not None
    table = Table(title=f"event #{outcome.index}: no matching spec")
    table.add_column("spec")
    table.add_column("gate", style="red", no_wrap=True)
    table.add_column("detail")
    for r in outcome.error.rejections:
        table.add_row(r.spec.name, r.kind, r.detail)
    err_console.print(table)


@click.group()
def cli() -> None:
    """sorodecode — match Soroban contract events against event specs."""


@cli.command("match")
@click.option(
    "--event",
    "event_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Contract event JSON (one event or an array of events)",
)
@click.option(
    "--spec",
    "spec_paths",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    multiple=True,
    required=True,
    help="Spec entry JSON (one entry or a list); repeat to add candidates, in match order",
)
@click.option("--parquet-out", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Also write matched events to a Parquet file")
@click.option("--show-rejections", is_flag=True, default=False, help="Print per-spec rejection reasons for unmatched events")
@click.option("--compact", is_flag=True, default=False, help="One JSON record per line")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
)
def match_cmd(
    event_path: Path,
    spec_paths: tuple[Path, ...],
    parquet_out: Path | None,
    show_rejections: bool,
    compact: bool,
    log_level: str,
) -> None:
    """Print the decoded record of every event that matches one of the specs."""
    config = MatchConfig(
        event_path=event_path,
        spec_paths=spec_paths,
        parquet_out=parquet_out,
        show_rejections=show_rejections,
        compact=compact,
        log_level=log_level.upper(),
    )
    _setup_logging(config.log_level)

    events, provider = _load_inputs(config)
    outcomes = decode_many(events, provider.get_specs())

    sink = ParquetSink(config.parquet_out) if config.parquet_out else None
    failed = 0
    for outcome in outcomes:
        if outcome.record is None:
            failed += 1
            err_console.print(f"[red]no match[/]: event #{outcome.index} ({outcome.event.contract_id})")
            if config.show_rejections:
                _print_rejections(outcome)
            continue
        doc = decoded_event_to_json(outcome.record)
        if config.compact:
            console.print(json.dumps(doc, separators=(",", ":")), soft_wrap=True, markup=False, emoji=False, highlight=False)
        else:
            console.print_json(data=doc)
        if sink is not None:
            sink.add(outcome.index, outcome.record)

    if sink is not None:
        sink.close()

    if failed:
        logger.warning("%d of %d events matched no spec", failed, len(outcomes))
        raise SystemExit(1)


if __name__ == "__main__":
    cli()

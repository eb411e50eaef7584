from __future__ import annotations

import json
import sys
from typing import Optional

import typer

from sqlbulk.batching.statements import StatementOptions
from sqlbulk.config import get_settings
from sqlbulk.domain.fields import mapping_for, register_mapping
from sqlbulk.domain.models import EVENTS_DDL, EventRecord, generate_records
from sqlbulk.infrastructure.db_factory import get_sync_connection
from sqlbulk.infrastructure.executors import ConnectionExecutor, RecordingExecutor
from sqlbulk.orchestrator import available_modes, run_insert
from sqlbulk.reporter import print_results
from sqlbulk.utils.logging import configure_logging

app = typer.Typer(help="sqlbulk CLI: chunked multi-row INSERT loader.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"dialect={settings.bulk_dialect} chunk={settings.bulk_chunk_size} "
        f"max_parameters={settings.bulk_max_parameters} "
        f"option={settings.bulk_insert_option!r} table={settings.bulk_table}"
    )


@app.command()
def modes() -> None:
    """
    List available insert modes.
    """
    typer.echo("Available modes: " + ", ".join(available_modes()))


@app.command()
def ddl(
    table: Optional[str] = typer.Option(None, "--table", "-t", help="Target table name."),
) -> None:
    """
    Print the DDL for the sample events table.
    """
    typer.echo(EVENTS_DDL.format(table=table or get_settings().bulk_table).strip())


@app.command()
def load(
    rows: int = typer.Option(10_000, "--rows", "-r", help="Number of events to generate."),
    mode: str = typer.Option(
        "strict",
        "--mode",
        "-m",
        help="Insert mode (strict, ignore_duplicates).",
    ),
    chunk_size: Optional[int] = typer.Option(
        None,
        "--chunk-size",
        "-c",
        help="Records per INSERT statement (default from settings).",
    ),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
    table: Optional[str] = typer.Option(None, "--table", "-t", help="Target table name."),
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
    create_table: bool = typer.Option(
        False, "--create-table", help="Create the target table if it does not exist."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Build statements without touching the database."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """
    Generate synthetic events and bulk insert them.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    if mode not in available_modes():
        typer.echo(f"Unknown mode '{mode}'. Available: {', '.join(available_modes())}", err=True)
        raise typer.Exit(code=2)

    target = table or settings.bulk_table
    if mapping_for(EventRecord).table != target:
        register_mapping(EventRecord, mapping_for(EventRecord).fields, table=target)

    records = list(generate_records(rows, seed=seed))
    options = StatementOptions.from_settings(settings)
    typer.echo(
        f"Loading {rows:,} events into '{target}' mode={mode} "
        f"(chunk={chunk_size or settings.bulk_chunk_size}, dialect={options.dialect.value})."
    )

    if dry_run:
        executor = RecordingExecutor()
        result = run_insert(records, mode, executor, chunk_size=chunk_size, options=options)
        typer.echo(f"Dry run: built {len(executor.statements)} statement(s).")
    else:
        with get_sync_connection(dsn) as conn:
            if create_table:
                conn.execute(EVENTS_DDL.format(table=target))
            result = run_insert(
                records, mode, ConnectionExecutor(conn), chunk_size=chunk_size, options=options
            )

    if as_json:
        typer.echo(json.dumps(result, indent=2, default=str))
    else:
        print_results([result])

    if result.get("error") and mode == "strict":
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()

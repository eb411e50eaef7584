from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table


def build_results_table(results: List[Dict[str, Any]], title: str = "Bulk Insert Results") -> Table:
    """
    Build a rich table summarizing insert runs, one row per run.
    """
    table = Table(title=title, box=box.ROUNDED)

    table.add_column("Mode", style="cyan", no_wrap=True)
    table.add_column("Records", justify="right", style="magenta")
    table.add_column("Rows Affected", justify="right", style="magenta")
    table.add_column("Chunks", justify="right", style="blue")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Throughput (rows/s)", justify="right", style="bold green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")

    for res in results:
        mem_bytes = res.get("peak_rss_bytes") or 0
        table.add_row(
            str(res.get("mode", "unknown")),
            f"{res.get('records', 0):,}",
            f"{res.get('rows_affected', 0):,}",
            str(res.get("chunks", 0)),
            str(res.get("failed_chunks", 0)),
            f"{res.get('duration_seconds', 0.0):.2f}",
            f"{res.get('throughput_rows_per_sec', 0.0):,.2f}",
            f"{mem_bytes / (1024 * 1024):.2f}",
        )
    return table


def print_results(results: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render insert results and any chunk errors to the console.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    console.print(build_results_table(results))

    for res in results:
        for message in res.get("errors") or []:
            console.print(f"[red]{res.get('mode')}: {message}[/red]")
        if res.get("error") and not res.get("errors"):
            console.print(f"[red]{res.get('mode')}: {res['error']}[/red]")


__all__ = ["build_results_table", "print_results"]

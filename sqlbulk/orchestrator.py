"""
Orchestrator for running an insert strategy with profiling.

Usage (example from CLI):
    from sqlbulk.orchestrator import run_insert

    result = run_insert(records, mode="ignore_duplicates", executor=executor, chunk_size=500)
    print(result["rows_affected"], result["throughput_rows_per_sec"])
"""

from __future__ import annotations

from typing import Any, Callable, Collection, Dict, Iterable, List, Optional

from sqlbulk.batching.statements import StatementOptions
from sqlbulk.config import get_settings
from sqlbulk.errors import BulkInsertError
from sqlbulk.infrastructure.executors import StatementExecutor
from sqlbulk.strategies.abstract import AbstractInsertStrategy, InsertResult
from sqlbulk.strategies.ignore_duplicates import IgnoreDuplicatesStrategy
from sqlbulk.strategies.strict import StrictInsertStrategy
from sqlbulk.utils.logging import get_logger
from sqlbulk.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _strategy_factories() -> Dict[str, Callable[..., AbstractInsertStrategy]]:
    """Registry of available insert modes."""
    return {
        "strict": StrictInsertStrategy,
        "ignore_duplicates": IgnoreDuplicatesStrategy,
    }


def available_modes() -> List[str]:
    """List available insert mode names."""
    return sorted(_strategy_factories().keys())


def _resolve_strategy(
    name: str,
    executor: StatementExecutor,
    options: Optional[StatementOptions],
    max_parameters: Optional[int],
) -> AbstractInsertStrategy:
    factories = _strategy_factories()
    if name not in factories:
        raise ValueError(f"Unknown mode '{name}'. Available: {', '.join(factories)}")
    return factories[name](executor, options=options, max_parameters=max_parameters)


def _merge_result(result: InsertResult, stats: ProfileStats) -> dict:
    """Merge a strategy result with profiler stats, rounding floats for readability."""
    merged = dict(result)
    merged.setdefault("rows_affected", 0)
    merged["duration_seconds"] = _round_float(stats.duration_seconds)
    merged["throughput_rows_per_sec"] = (
        _round_float(merged["rows_affected"] / stats.duration_seconds)
        if stats.duration_seconds
        else 0.0
    )
    merged["peak_rss_bytes"] = stats.peak_rss_bytes
    merged["cpu_percent"] = _round_float(stats.cpu_percent, 1) if stats.cpu_percent else None
    return merged


def run_insert(
    records: Iterable[Any],
    mode: str,
    executor: StatementExecutor,
    chunk_size: Optional[int] = None,
    exclude_columns: Collection[str] = (),
    options: Optional[StatementOptions] = None,
    max_parameters: Optional[int] = None,
) -> dict:
    """
    Run one insert mode under the profiler and return a flat result dict.

    Parameters
    ----------
    records : iterable
        Records to insert.
    mode : str
        One of ``available_modes()``.
    executor : StatementExecutor
        Execution layer for the generated statements.
    chunk_size : int | None
        Records per statement. Defaults to settings.bulk_chunk_size.
    exclude_columns : collection of str
        Attribute or column names left out of the INSERT.
    options : StatementOptions | None
        Defaults to options built from settings.
    max_parameters : int | None
        Bound-parameter budget. Defaults to settings.bulk_max_parameters.

    Returns
    -------
    dict
        Result including rows affected, chunk counts, errors and profiler stats.
        A strict-mode failure is reported in ``error`` rather than raised.
    """
    settings = get_settings()
    batch = list(records)
    effective_chunk = settings.bulk_chunk_size if chunk_size is None else chunk_size
    budget = settings.bulk_max_parameters if max_parameters is None else max_parameters
    strategy = _resolve_strategy(
        mode, executor, options or StatementOptions.from_settings(settings), budget
    )

    log.info(
        f"[INSERT START] {strategy.name}",
        extra={"mode": strategy.name, "records": len(batch), "chunk_size": effective_chunk},
    )
    with profile_block(strategy.name) as stats:
        try:
            report = strategy.execute(batch, effective_chunk, exclude_columns)
            result = report.as_result(strategy.name, len(batch))
        except BulkInsertError as exc:
            log.exception(f"[INSERT FAILED] {strategy.name}", extra={"mode": strategy.name})
            result = InsertResult(
                mode=strategy.name,
                records=len(batch),
                rows_affected=0,
                error=str(exc),
            )

    return _merge_result(result, stats)


__all__ = ["available_modes", "run_insert"]

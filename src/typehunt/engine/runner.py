"""End-to-end duplicate-type scan runner.

Architecture Flow:
    Stage 1: Discovery (directory walk or tsconfig resolution)
    Stage 2: Extraction (bounded worker pool, one task per source unit)
    Stage 3: Grouping (single serial pass per requested mode)

Extraction results are collected in input order, so repeated runs over the
same inputs produce identical record and group ordering. A unit that cannot
be read or parsed is recorded as a ``UnitError`` and never aborts the run.
"""

import time
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from typehunt.audit import AuditLogger
from typehunt.discovery import (
    discover_directory,
    discover_tsconfig,
    matches_exclude,
    to_unit_id,
)
from typehunt.engine.config import ScanConfig, ScanResult
from typehunt.errors import UnitParseError, UnitReadError
from typehunt.grouping import GroupingMode, by_name, by_shape, group_records
from typehunt.models import DeclarationRecord, DuplicateGroup, UnitError
from typehunt.parse import extract_declarations, read_unit

__all__ = [
    "SourceUnit",
    "build_groups",
    "collect_declarations",
    "collect_file_declarations",
    "run_scan",
    "scan_units",
]

SourceUnit = tuple[str, str]

_Item = TypeVar("_Item")
_Result = TypeVar("_Result")

UnitOutcome = tuple[list[DeclarationRecord], UnitError | None]


# ---------------------------------------------------------------------------
# Bounded parallel extraction
# ---------------------------------------------------------------------------


def _map_in_batches(
    func: Callable[[_Item], _Result],
    items: Sequence[_Item],
    concurrency: int,
) -> list[_Result]:
    """Apply ``func`` to items on a worker pool, one fixed-size batch at a time.

    At most ``concurrency`` items are in flight; results keep input order.
    """
    results: list[_Result] = []
    if not items:
        return results

    with ThreadPoolExecutor(max_workers=min(concurrency, len(items))) as executor:
        for offset in range(0, len(items), concurrency):
            batch = items[offset : offset + concurrency]
            results.extend(executor.map(func, batch))
    return results


def _extract_text(unit_id: str, source_text: str, include_enums: bool) -> UnitOutcome:
    try:
        return extract_declarations(unit_id, source_text, include_enums=include_enums), None
    except UnitParseError as e:
        return [], UnitError(unit_id=unit_id, message=str(e), kind="parse")
    except Exception as e:
        return [], UnitError(unit_id=unit_id, message=f"{type(e).__name__}: {e}", kind="parse")


def _extract_file(path: Path, unit_id: str, include_enums: bool) -> UnitOutcome:
    try:
        source_text = read_unit(path, unit_id=unit_id)
    except UnitReadError as e:
        return [], UnitError(unit_id=unit_id, message=str(e), kind="read")
    return _extract_text(unit_id, source_text, include_enums)


def _merge_outcomes(
    outcomes: Iterable[UnitOutcome],
) -> tuple[list[DeclarationRecord], list[UnitError]]:
    declarations: list[DeclarationRecord] = []
    errors: list[UnitError] = []
    for records, error in outcomes:
        declarations.extend(records)
        if error is not None:
            errors.append(error)
    return declarations, errors


def collect_declarations(
    units: Sequence[SourceUnit],
    *,
    include_enums: bool = True,
    concurrency: int = 50,
) -> tuple[list[DeclarationRecord], list[UnitError]]:
    """Extract declarations from in-memory source units.

    Parameters
    ----------
    units : Sequence[SourceUnit]
        ``(unit_id, source_text)`` pairs.
    include_enums : bool, optional
        Extract enum declarations, by default True.
    concurrency : int, optional
        Worker pool size, by default 50.

    Returns
    -------
    tuple[list[DeclarationRecord], list[UnitError]]
        Records concatenated in unit order, and per-unit errors.
    """
    outcomes = _map_in_batches(
        lambda unit: _extract_text(unit[0], unit[1], include_enums),
        units,
        concurrency,
    )
    return _merge_outcomes(outcomes)


def collect_file_declarations(
    files: Sequence[Path],
    *,
    base: Path | None = None,
    include_enums: bool = True,
    concurrency: int = 50,
) -> tuple[list[DeclarationRecord], list[UnitError]]:
    """Read and extract declarations from files in parallel batches.

    Parameters
    ----------
    files : Sequence[Path]
        Files to scan.
    base : Path | None, optional
        Base directory for unit ids, by default the current working directory.
    include_enums : bool, optional
        Extract enum declarations, by default True.
    concurrency : int, optional
        Maximum number of files open at once, by default 50.

    Returns
    -------
    tuple[list[DeclarationRecord], list[UnitError]]
        Records concatenated in file order, and per-file errors.
    """
    outcomes = _map_in_batches(
        lambda path: _extract_file(path, to_unit_id(path, base), include_enums),
        files,
        concurrency,
    )
    return _merge_outcomes(outcomes)


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


def build_groups(
    records: Sequence[DeclarationRecord],
    mode: GroupingMode,
    min_count: int,
) -> tuple[list[DuplicateGroup], list[DuplicateGroup]]:
    """Build name and shape groups for the requested mode.

    Returns
    -------
    tuple[list[DuplicateGroup], list[DuplicateGroup]]
        ``(name_groups, shape_groups)``; a mode that is not requested
        yields an empty list.
    """
    name_groups = group_records(records, by_name, min_count) if mode.includes_name else []
    shape_groups = group_records(records, by_shape, min_count) if mode.includes_shape else []
    return name_groups, shape_groups


def _finish(
    declarations: list[DeclarationRecord],
    errors: list[UnitError],
    files_scanned: int,
    file_source: str,
    config: ScanConfig,
    logger: AuditLogger | None,
) -> ScanResult:
    mode = GroupingMode(config.mode)

    if logger:
        logger.set_stage("extraction")
        for error in errors:
            logger.unit_failed(error.unit_id, error.kind, error.message)
        logger.stage_finished(
            "extraction_complete",
            "extraction",
            {
                "units": files_scanned,
                "declarations": len(declarations),
                "errors": len(errors),
            },
        )

    if config.skip_reexports:
        declarations = [d for d in declarations if not d.is_reexport]

    name_groups, shape_groups = build_groups(declarations, mode, config.min_group_size)

    if logger:
        logger.stage_finished(
            "grouping_complete",
            "grouping",
            {"name_groups": len(name_groups), "shape_groups": len(shape_groups)},
        )

    return ScanResult(
        files_scanned=files_scanned,
        file_source=file_source,
        declarations=declarations,
        errors=errors,
        mode=mode,
        name_groups=name_groups,
        shape_groups=shape_groups,
    )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def scan_units(
    units: Sequence[SourceUnit],
    config: ScanConfig | None = None,
    logger: AuditLogger | None = None,
) -> ScanResult:
    """Find duplicate declarations across in-memory source units.

    Parameters
    ----------
    units : Sequence[SourceUnit]
        ``(unit_id, source_text)`` pairs; ``.tsx`` unit ids use the TSX grammar.
    config : ScanConfig | None, optional
        Scan configuration; ``root``/``tsconfig``/``exclude`` are ignored.
    logger : AuditLogger | None, optional
        Audit logger. If None, no logging.

    Returns
    -------
    ScanResult
        Records, unit errors and duplicate groups.
    """
    config = config or ScanConfig()

    declarations, errors = collect_declarations(
        units,
        include_enums=config.include_enums,
        concurrency=config.concurrency,
    )
    return _finish(declarations, errors, len(units), "in-memory units", config, logger)


def _discover(config: ScanConfig, base: Path) -> tuple[list[Path], str]:
    if config.tsconfig is not None:
        tsconfig_path = config.tsconfig if config.tsconfig.is_absolute() else base / config.tsconfig
        files = discover_tsconfig(tsconfig_path)
        if config.exclude:
            files = [f for f in files if not matches_exclude(to_unit_id(f, base), config.exclude)]
        return files, f"tsconfig ({config.tsconfig})"

    root = config.root if config.root.is_absolute() else base / config.root
    files = discover_directory(root, config.exclude, base=base)
    return files, f"directory walk ({config.root})"


def run_scan(
    config: ScanConfig,
    logger: AuditLogger | None = None,
    base: Path | None = None,
) -> ScanResult:
    """Discover TypeScript files and report duplicate declarations.

    Parameters
    ----------
    config : ScanConfig
        Scan configuration.
    logger : AuditLogger | None, optional
        Audit logger. If None, no logging.
    base : Path | None, optional
        Directory that relative paths and unit ids are resolved against,
        by default the current working directory.

    Returns
    -------
    ScanResult
        Records, unit errors and duplicate groups.

    Raises
    ------
    ConfigurationError
        If the root directory or tsconfig is invalid. Raised before any
        file is read.
    """
    base_dir = base if base is not None else Path.cwd()
    start = time.perf_counter()

    if logger:
        logger.scan_started(config.to_dict())

    try:
        files, file_source = _discover(config, base_dir)
    except Exception as e:
        if logger:
            logger.error(type(e).__name__, str(e), stage="discovery")
            logger.scan_finished("failed", time.perf_counter() - start)
        raise

    if logger:
        logger.stage_finished("discovery_complete", "discovery", {"files": len(files)})

    declarations, errors = collect_file_declarations(
        files,
        base=base_dir,
        include_enums=config.include_enums,
        concurrency=config.concurrency,
    )
    result = _finish(declarations, errors, len(files), file_source, config, logger)

    if logger:
        logger.scan_finished("success", time.perf_counter() - start, result.duplicate_count)

    return result

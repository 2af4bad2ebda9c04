"""Public API for finding duplicate TypeScript types.

This module provides the main public API for typehunt, enabling:
- Scanning a directory or tsconfig project for duplicate declarations
- Scanning in-memory sources (editor buffers, tests, other tools)
- Writing reports to disk
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from typehunt.engine import ScanConfig, run_scan, scan_units

if TYPE_CHECKING:
    from typehunt.engine.config import ScanResult

__all__ = [
    "find_duplicates",
    "find_duplicates_in_sources",
    "write_report",
]


def find_duplicates(
    root: str | Path = "src",
    *,
    tsconfig: str | Path | None = None,
    mode: str = "both",
    min_group_size: int = 2,
    exclude: Iterable[str] | None = None,
    include_enums: bool = True,
    skip_reexports: bool = True,
) -> ScanResult:
    """Find duplicate type declarations in a TypeScript project.

    Parameters
    ----------
    root : str | Path, optional
        Directory to walk when no tsconfig is given, by default "src".
    tsconfig : str | Path | None, optional
        Path to tsconfig.json. When given, its file list is scanned.
    mode : str, optional
        ``"name"``, ``"shape"`` or ``"both"``, by default "both".
    min_group_size : int, optional
        Minimum declarations per reported group, by default 2.
    exclude : Iterable[str] | None, optional
        Path tokens to exclude.
    include_enums : bool, optional
        Extract enum declarations, by default True.
    skip_reexports : bool, optional
        Ignore ``export { X } from`` records, by default True.

    Returns
    -------
    ScanResult
        Declarations, skipped units and duplicate groups.

    Raises
    ------
    ConfigurationError
        If the options are invalid or the root/tsconfig cannot be used.

    Examples
    --------
    Report duplicate names under ``src``:

        >>> from typehunt import find_duplicates
        >>> result = find_duplicates("src", mode="name")
        >>> for group in result.name_groups:
        ...     print(group.key, group.count)
    """
    config = ScanConfig(
        root=Path(root),
        tsconfig=Path(tsconfig) if tsconfig is not None else None,
        exclude=list(exclude or []),
        mode=mode,
        min_group_size=min_group_size,
        include_enums=include_enums,
        skip_reexports=skip_reexports,
    )
    return run_scan(config)


def find_duplicates_in_sources(
    sources: Sequence[tuple[str, str]],
    *,
    mode: str = "both",
    min_group_size: int = 2,
    include_enums: bool = True,
    skip_reexports: bool = True,
) -> ScanResult:
    """Find duplicate type declarations in in-memory sources.

    Parameters
    ----------
    sources : Sequence[tuple[str, str]]
        ``(unit_id, source_text)`` pairs. Unit ids ending in ``.tsx`` are
        parsed with the TSX grammar.
    mode : str, optional
        ``"name"``, ``"shape"`` or ``"both"``, by default "both".
    min_group_size : int, optional
        Minimum declarations per reported group, by default 2.
    include_enums : bool, optional
        Extract enum declarations, by default True.
    skip_reexports : bool, optional
        Ignore ``export { X } from`` records, by default True.

    Returns
    -------
    ScanResult
        Declarations, skipped units and duplicate groups.

    Examples
    --------
        >>> result = find_duplicates_in_sources([
        ...     ("a.ts", "interface User { id: string }"),
        ...     ("b.ts", "type User = { id: string }"),
        ... ])
        >>> [g.key for g in result.name_groups]
        ['User']
    """
    config = ScanConfig(
        mode=mode,
        min_group_size=min_group_size,
        include_enums=include_enums,
        skip_reexports=skip_reexports,
    )
    return scan_units(list(sources), config)


def write_report(
    result: ScanResult,
    path: str | Path,
    *,
    output_format: str = "json",
    root: str = "src",
) -> None:
    """Write a report for ``result`` to ``path``.

    Parameters
    ----------
    result : ScanResult
        Scan result.
    path : str | Path
        Output file path. Parent directories are created.
    output_format : str, optional
        ``"json"``, ``"markdown"`` or ``"text"``, by default "json".
    root : str, optional
        Root recorded in the JSON payload, by default "src".

    Raises
    ------
    ValueError
        If ``output_format`` is unknown.
    """
    from typehunt.report import (
        build_json_payload,
        render_json,
        render_markdown,
        render_text,
        validate_payload,
    )

    if output_format == "json":
        payload = build_json_payload(result, root)
        validate_payload(payload)
        content = render_json(payload)
    elif output_format == "markdown":
        content = render_markdown(result)
    elif output_format == "text":
        content = render_text(result) + "\n"
    else:
        raise ValueError(f"Unknown output format: {output_format!r}")

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")

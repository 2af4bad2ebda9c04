"""Tests for the public API."""

import json
from pathlib import Path

import pytest

from typehunt import (
    ConfigurationError,
    find_duplicates,
    find_duplicates_in_sources,
    write_report,
)


@pytest.mark.unit
def test_find_duplicates_in_sources() -> None:
    """Test in-memory scanning groups duplicates by name."""
    result = find_duplicates_in_sources(
        [
            ("a.ts", "interface User { id: string }"),
            ("b.ts", "type User = { id: string }"),
        ],
        mode="name",
    )

    assert [g.key for g in result.name_groups] == ["User"]
    assert result.shape_groups == []


@pytest.mark.unit
def test_find_duplicates_walks_root(write_tree) -> None:
    """Test directory scanning with an absolute root."""
    base = write_tree(
        {
            "pkg/a.ts": "export type Id = string;\n",
            "pkg/b.ts": "export type Id = string;\n",
        }
    )

    result = find_duplicates(base / "pkg")

    assert [g.count for g in result.name_groups] == [2]
    assert [g.count for g in result.shape_groups] == [2]


@pytest.mark.unit
def test_find_duplicates_rejects_bad_min(tmp_path: Path) -> None:
    """Test invalid configuration raises before scanning."""
    with pytest.raises(ConfigurationError):
        find_duplicates(tmp_path, min_group_size=1)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("output_format", "marker"),
    [
        ("json", '"duplicateNameGroups"'),
        ("markdown", "# 🔍 Duplicate Types Report"),
        ("text", "── Summary"),
    ],
)
def test_write_report_formats(tmp_path: Path, output_format: str, marker: str) -> None:
    """Test each report format is written to disk."""
    result = find_duplicates_in_sources([("a.ts", "type A = 1;"), ("b.ts", "type A = 1;")])
    path = tmp_path / "out" / f"report.{output_format}"

    write_report(result, path, output_format=output_format)

    assert marker in path.read_text(encoding="utf-8")


@pytest.mark.unit
def test_write_report_json_is_parseable(tmp_path: Path) -> None:
    """Test JSON reports carry the given root."""
    result = find_duplicates_in_sources([("a.ts", "type A = 1;")])
    path = tmp_path / "report.json"

    write_report(result, path, root="lib")

    assert json.loads(path.read_text(encoding="utf-8"))["root"] == "lib"


@pytest.mark.unit
def test_write_report_unknown_format(tmp_path: Path) -> None:
    """Test unknown formats raise ValueError."""
    result = find_duplicates_in_sources([])

    with pytest.raises(ValueError, match="Unknown output format"):
        write_report(result, tmp_path / "r.txt", output_format="yaml")

"""Tests for text, JSON and Markdown report rendering."""

import json

import jsonschema
import pytest

from typehunt.engine import ScanConfig, ScanResult, scan_units
from typehunt.grouping import GroupingMode
from typehunt.models import UnitError
from typehunt.report import (
    MAX_PREVIEW_LENGTH,
    build_json_payload,
    load_schema,
    render_errors,
    render_json,
    render_markdown,
    render_text,
    validate_payload,
)

UNITS = [
    ("src/a.ts", "interface User { id: string; name: string; }\n"),
    ("src/b.ts", "\n\ntype User = { id: string; name: string; };\n"),
    ("src/c.ts", "interface Account { id: string; name: string; }\n"),
]


@pytest.fixture
def result() -> ScanResult:
    """Scan result with one name group and one three-member shape group."""
    return scan_units(UNITS)


@pytest.fixture
def empty_result() -> ScanResult:
    """Scan result without duplicates."""
    return scan_units([("src/a.ts", "type A = string;\n")])


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_text_summary(result: ScanResult) -> None:
    """Test the summary lists counts and source."""
    text = render_text(result)

    assert "── Summary" in text
    assert "  Files scanned:          3" in text
    assert "  Declarations found:     3" in text
    assert "  Source:                 in-memory units" in text
    assert "  Duplicate name groups:  1" in text
    assert "  Duplicate shape groups: 1" in text


@pytest.mark.unit
def test_text_name_section(result: ScanResult) -> None:
    """Test name groups list kind and location per member."""
    text = render_text(result)

    assert "── Duplicate type names" in text
    assert "  User (2 occurrences)" in text
    assert "    interface  src/a.ts:1" in text
    assert "    type       src/b.ts:3" in text


@pytest.mark.unit
def test_text_shape_section(result: ScanResult) -> None:
    """Test shape groups list names, members and a preview."""
    text = render_text(result)

    assert "  shape#1 — names: User, Account (3 occurrences)" in text
    assert f"    interface  {'Account':<24}  src/c.ts:1" in text
    assert "    shape:   interface User { id: string; name: string; }" in text


@pytest.mark.unit
def test_text_preview_truncated() -> None:
    """Test long shape previews are cut to the preview limit."""
    members = " ".join(f"f{i}: string;" for i in range(40))
    units = [(f"{n}.ts", f"interface {n} {{ {members} }}") for n in ("A", "B")]

    text = render_text(scan_units(units, ScanConfig(mode="shape")))
    preview = next(line for line in text.splitlines() if line.startswith("    shape:"))

    assert len(preview.removeprefix("    shape:   ")) == MAX_PREVIEW_LENGTH
    assert preview.endswith("...")


@pytest.mark.unit
def test_text_no_duplicates(empty_result: ScanResult) -> None:
    """Test empty sections say so."""
    text = render_text(empty_result)

    assert text.count("✓ No duplicates found") == 2


@pytest.mark.unit
def test_text_mode_filters_sections() -> None:
    """Test only requested sections are rendered."""
    text = render_text(scan_units(UNITS, ScanConfig(mode="shape")))

    assert "Duplicate type shapes" in text
    assert "Duplicate type names" not in text
    assert "Duplicate name groups" not in text


@pytest.mark.unit
def test_render_errors_capped() -> None:
    """Test the skipped-unit list shows five entries and a remainder."""
    errors = [UnitError(f"src/{i}.ts", "Syntax error at line 1", kind="parse") for i in range(8)]

    text = render_errors(errors)

    assert "⚠ Skipped 8 file(s) with read or parse errors:" in text
    assert "  src/4.ts: Syntax error at line 1" in text
    assert "src/5.ts" not in text
    assert text.endswith("  ... and 3 more")


@pytest.mark.unit
def test_render_errors_empty() -> None:
    """Test no errors renders nothing."""
    assert render_errors([]) == ""


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_json_payload_structure(result: ScanResult) -> None:
    """Test payload keys, groups and declaration entries."""
    payload = build_json_payload(result, "src")

    assert payload["root"] == "src"
    assert payload["mode"] == "both"
    assert payload["filesScanned"] == 3
    assert payload["declarationsScanned"] == 3
    assert "errors" not in payload

    (name_group,) = payload["duplicateNameGroups"]
    assert name_group["name"] == "User"
    assert name_group["count"] == 2
    assert name_group["declarations"][1] == {
        "file": "src/b.ts",
        "line": 3,
        "kind": "type",
        "name": "User",
        "snippet": "type User = { id: string; name: string; };",
        "isReExport": False,
    }

    (shape_group,) = payload["duplicateShapeGroups"]
    assert shape_group["shape"] == "type __NAME__ = { id: string; name: string; }"
    assert shape_group["count"] == 3


@pytest.mark.unit
def test_json_payload_validates_against_schema(result: ScanResult) -> None:
    """Test generated payloads conform to the bundled schema."""
    payload = build_json_payload(result, "src")

    validate_payload(payload)
    jsonschema.validate(instance=json.loads(render_json(payload)), schema=load_schema())


@pytest.mark.unit
def test_json_payload_includes_errors() -> None:
    """Test skipped units appear under errors."""
    result = scan_units([("bad.ts", "interface X {")])

    payload = build_json_payload(result, "src")

    assert payload["errors"] == [{"file": "bad.ts", "error": "Syntax error at line 1"}]
    validate_payload(payload)


@pytest.mark.unit
def test_json_payload_mode_name_has_empty_shapes() -> None:
    """Test groups for modes not requested are empty lists."""
    result = scan_units(UNITS, ScanConfig(mode="name"))

    payload = build_json_payload(result, "tsconfig.json")

    assert payload["mode"] == "name"
    assert payload["duplicateShapeGroups"] == []
    assert payload["duplicateNameGroups"]


@pytest.mark.unit
def test_schema_rejects_invalid_payload(result: ScanResult) -> None:
    """Test the schema rejects unknown modes and missing keys."""
    payload = build_json_payload(result, "src")

    with pytest.raises(jsonschema.ValidationError):
        validate_payload({**payload, "mode": "fuzzy"})

    del payload["filesScanned"]
    with pytest.raises(jsonschema.ValidationError):
        validate_payload(payload)


@pytest.mark.unit
def test_render_json_trailing_newline(empty_result: ScanResult) -> None:
    """Test rendered JSON is indented and newline-terminated."""
    rendered = render_json(build_json_payload(empty_result, "src"))

    assert rendered.endswith("}\n")
    assert '\n  "root": "src",' in rendered


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_markdown_report(result: ScanResult) -> None:
    """Test Markdown headings, tables and preview block."""
    md = render_markdown(result)

    assert md.startswith("# 🔍 Duplicate Types Report")
    assert "> **2 duplicate group(s) found** across 3 files (3 declarations)" in md
    assert "| Duplicate name groups | 1 |" in md
    assert "### `User` (2 occurrences)" in md
    assert "| `type` | `src/b.ts` | 3 |" in md
    assert "### Shape #1 — `User`, `Account` (3 occurrences)" in md
    assert "| `interface` | `Account` | `src/c.ts` | 1 |" in md
    assert "```typescript\ninterface User { id: string; name: string; }\n```" in md
    assert md.endswith("*Generated by [typehunt](https://github.com/CihanBir7/typehunt)*\n")


@pytest.mark.unit
def test_markdown_no_duplicates(empty_result: ScanResult) -> None:
    """Test the clean report header and empty sections."""
    md = render_markdown(empty_result)

    assert md.startswith("# ✅ Duplicate Types Report")
    assert "> **No duplicates found** across 1 files (1 declarations)" in md
    assert "✅ No duplicate names found." in md
    assert "✅ No duplicate shapes found." in md


@pytest.mark.unit
def test_markdown_mode_shape_omits_names() -> None:
    """Test only requested sections are rendered."""
    empty = ScanResult(
        files_scanned=0,
        file_source="directory walk (src)",
        declarations=[],
        errors=[],
        mode=GroupingMode.SHAPE,
    )

    md = render_markdown(empty)

    assert "## Duplicate Type Shapes" in md
    assert "## Duplicate Type Names" not in md

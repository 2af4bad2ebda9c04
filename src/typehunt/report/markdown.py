"""Markdown report for pull-request comments and CI summaries."""

from typehunt.engine.config import ScanResult
from typehunt.models import DuplicateGroup

__all__ = ["render_markdown"]

FOOTER = "*Generated by [typehunt](https://github.com/CihanBir7/typehunt)*"


def _summary(result: ScanResult) -> list[str]:
    totals = f"across {result.files_scanned} files ({result.declarations_scanned} declarations)"
    if result.duplicate_count > 0:
        lines = [
            "# 🔍 Duplicate Types Report",
            "",
            f"> **{result.duplicate_count} duplicate group(s) found** {totals}",
        ]
    else:
        lines = [
            "# ✅ Duplicate Types Report",
            "",
            f"> **No duplicates found** {totals}",
        ]

    lines += [
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Files scanned | {result.files_scanned} |",
        f"| Declarations found | {result.declarations_scanned} |",
        f"| Source | {result.file_source} |",
    ]
    if result.mode.includes_name:
        lines.append(f"| Duplicate name groups | {len(result.name_groups)} |")
    if result.mode.includes_shape:
        lines.append(f"| Duplicate shape groups | {len(result.shape_groups)} |")
    lines.append("")
    return lines


def _name_section(groups: list[DuplicateGroup]) -> list[str]:
    lines = ["## Duplicate Type Names", ""]
    if not groups:
        return lines + ["✅ No duplicate names found.", ""]

    for group in groups:
        lines += [
            f"### `{group.key}` ({group.count} occurrences)",
            "",
            "| Kind | File | Line |",
            "| --- | --- | --- |",
        ]
        lines += [f"| `{r.kind}` | `{r.unit_id}` | {r.line} |" for r in group.members]
        lines.append("")
    return lines


def _shape_section(groups: list[DuplicateGroup]) -> list[str]:
    lines = ["## Duplicate Type Shapes", ""]
    if not groups:
        return lines + ["✅ No duplicate shapes found.", ""]

    for index, group in enumerate(groups, start=1):
        badge = ", ".join(f"`{name}`" for name in group.names)
        lines += [
            f"### Shape #{index} — {badge} ({group.count} occurrences)",
            "",
            "| Kind | Name | File | Line |",
            "| --- | --- | --- | --- |",
        ]
        lines += [
            f"| `{r.kind}` | `{r.name}` | `{r.unit_id}` | {r.line} |" for r in group.members
        ]
        lines += [
            "",
            "<details>",
            "<summary>Shape preview</summary>",
            "",
            "```typescript",
            group.members[0].snippet,
            "```",
            "</details>",
            "",
        ]
    return lines


def render_markdown(result: ScanResult) -> str:
    """Render a scan result as a Markdown document.

    Parameters
    ----------
    result : ScanResult
        Scan result.

    Returns
    -------
    str
        Markdown with a summary table, one section per requested mode
        and a footer.
    """
    lines = _summary(result)
    if result.mode.includes_name:
        lines += _name_section(result.name_groups)
    if result.mode.includes_shape:
        lines += _shape_section(result.shape_groups)
    lines += ["---", FOOTER, ""]
    return "\n".join(lines)

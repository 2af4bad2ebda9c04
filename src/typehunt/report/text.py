"""Plain-text terminal report."""

from collections.abc import Sequence

from typehunt.engine.config import ScanResult
from typehunt.models import DuplicateGroup, UnitError
from typehunt.normalize._helpers import truncate

__all__ = [
    "MAX_DISPLAYED_ERRORS",
    "MAX_PREVIEW_LENGTH",
    "render_errors",
    "render_text",
]

# Maximum length of the representative shape line
MAX_PREVIEW_LENGTH = 120

# Maximum number of skipped units listed before "... and N more"
MAX_DISPLAYED_ERRORS = 5

KIND_WIDTH = 9
NAME_WIDTH = 24

_RULE = "─"
_NO_DUPLICATES = "  ✓ No duplicates found"


def _heading(title: str, width: int = 58) -> str:
    head = f"── {title} "
    return head + _RULE * max(width - len(head), 2)


def _name_section(groups: Sequence[DuplicateGroup]) -> list[str]:
    lines = ["", _heading("Duplicate type names")]
    if not groups:
        lines.append(_NO_DUPLICATES)
        return lines

    for group in groups:
        lines.append("")
        lines.append(f"  {group.key} ({group.count} occurrences)")
        for record in group.members:
            lines.append(f"    {record.kind:<{KIND_WIDTH}}  {record.location}")
    return lines


def _shape_section(groups: Sequence[DuplicateGroup]) -> list[str]:
    lines = ["", _heading("Duplicate type shapes")]
    if not groups:
        lines.append(_NO_DUPLICATES)
        return lines

    for index, group in enumerate(groups, start=1):
        names = ", ".join(group.names)
        lines.append("")
        lines.append(f"  shape#{index} — names: {names} ({group.count} occurrences)")
        for record in group.members:
            lines.append(
                f"    {record.kind:<{KIND_WIDTH}}  {record.name:<{NAME_WIDTH}}  {record.location}"
            )
        preview = truncate(group.members[0].snippet, MAX_PREVIEW_LENGTH)
        lines.append(f"    shape:   {preview}")
    return lines


def render_text(result: ScanResult) -> str:
    """Render a scan result as a human-readable report.

    Parameters
    ----------
    result : ScanResult
        Scan result.

    Returns
    -------
    str
        Summary block followed by one detail section per requested mode.
    """
    mode = result.mode
    lines = [
        "",
        _heading("Summary"),
        f"  Files scanned:          {result.files_scanned}",
        f"  Declarations found:     {result.declarations_scanned}",
        f"  Source:                 {result.file_source}",
    ]
    if mode.includes_name:
        lines.append(f"  Duplicate name groups:  {len(result.name_groups)}")
    if mode.includes_shape:
        lines.append(f"  Duplicate shape groups: {len(result.shape_groups)}")
    lines.append("")

    if mode.includes_name:
        lines.extend(_name_section(result.name_groups))
    if mode.includes_shape:
        lines.extend(_shape_section(result.shape_groups))

    return "\n".join(lines)


def render_errors(errors: Sequence[UnitError], limit: int = MAX_DISPLAYED_ERRORS) -> str:
    """Render the skipped-unit notice shown on stderr.

    Returns an empty string when there are no errors.
    """
    if not errors:
        return ""

    lines = ["", f"⚠ Skipped {len(errors)} file(s) with read or parse errors:"]
    lines.extend(f"  {e.unit_id}: {e.message}" for e in errors[:limit])
    if len(errors) > limit:
        lines.append(f"  ... and {len(errors) - limit} more")
    return "\n".join(lines)

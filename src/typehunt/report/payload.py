"""JSON report payload builder and schema validation."""

import json
from functools import cache
from importlib import resources
from typing import Any

import jsonschema

from typehunt.engine.config import ScanResult
from typehunt.models import DuplicateGroup

__all__ = [
    "REPORT_SCHEMA_NAME",
    "build_json_payload",
    "load_schema",
    "render_json",
    "validate_payload",
]

REPORT_SCHEMA_NAME = "report.schema.json"


@cache
def load_schema(name: str = REPORT_SCHEMA_NAME) -> dict[str, Any]:
    """Load a JSON schema shipped with the package.

    Parameters
    ----------
    name : str, optional
        Schema file name under ``typehunt/schemas``.

    Returns
    -------
    dict[str, Any]
        Parsed schema document.
    """
    text = (resources.files("typehunt") / "schemas" / name).read_text(encoding="utf-8")
    return json.loads(text)


def _group_entries(groups: list[DuplicateGroup], key_field: str) -> list[dict[str, Any]]:
    return [
        {
            key_field: group.key,
            "count": group.count,
            "declarations": [record.to_dict() for record in group.members],
        }
        for group in groups
    ]


def build_json_payload(result: ScanResult, root: str) -> dict[str, Any]:
    """Build the machine-readable report payload.

    Parameters
    ----------
    result : ScanResult
        Scan result.
    root : str
        Scan root as given by the user (directory or tsconfig path).

    Returns
    -------
    dict[str, Any]
        Payload with camelCase keys. Groups for a mode that was not
        requested are empty lists; ``errors`` is present only when at least
        one unit was skipped.
    """
    mode = result.mode
    payload: dict[str, Any] = {
        "root": root,
        "mode": str(mode),
        "fileSource": result.file_source,
        "filesScanned": result.files_scanned,
        "declarationsScanned": result.declarations_scanned,
        "duplicateNameGroups": (
            _group_entries(result.name_groups, "name") if mode.includes_name else []
        ),
        "duplicateShapeGroups": (
            _group_entries(result.shape_groups, "shape") if mode.includes_shape else []
        ),
    }
    if result.errors:
        payload["errors"] = [e.to_dict() for e in result.errors]
    return payload


def validate_payload(payload: dict[str, Any]) -> None:
    """Validate a payload against the bundled report schema.

    Raises
    ------
    jsonschema.ValidationError
        If the payload does not conform.
    """
    jsonschema.validate(instance=payload, schema=load_schema(REPORT_SCHEMA_NAME))


def render_json(payload: dict[str, Any]) -> str:
    """Serialize a payload as indented JSON with a trailing newline."""
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

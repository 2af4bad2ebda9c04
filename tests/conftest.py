"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from typehunt.models import (  # noqa: E402
    DeclarationKind,
    DeclarationRecord,
    SourceLocation,
)
from typehunt.normalize import normalize_shape  # noqa: E402


@pytest.fixture
def make_record() -> Callable[..., DeclarationRecord]:
    """Factory for declaration records with minimal boilerplate.

    The fingerprint is derived from the snippet unless given explicitly.
    """

    def _factory(
        name: str = "User",
        *,
        kind: DeclarationKind = DeclarationKind.INTERFACE,
        unit_id: str = "src/a.ts",
        line: int = 1,
        raw_snippet: str | None = None,
        shape_fingerprint: str | None = None,
        is_reexport: bool = False,
        property_names: tuple[str, ...] = (),
    ) -> DeclarationRecord:
        snippet = raw_snippet if raw_snippet is not None else f"interface {name} {{ id: string; }}"
        if shape_fingerprint is None:
            shape_fingerprint = normalize_shape(snippet, name)
        return DeclarationRecord(
            name=name,
            kind=kind,
            location=SourceLocation(unit_id, line),
            raw_snippet=snippet,
            shape_fingerprint=shape_fingerprint,
            is_reexport=is_reexport,
            property_names=property_names,
        )

    return _factory


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write a mapping of relative paths to file contents under tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write

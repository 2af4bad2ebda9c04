"""TypeScript source parsing and declaration extraction.

Main entry points:
- parse_source: Parse source text with the tree-sitter TypeScript grammar
- extract_declarations: Parse a unit and extract its declaration records
- read_unit: Read a source file from disk
"""

from typehunt.parse.base import UnitParseError, UnitReadError, read_unit
from typehunt.parse.extractor import (
    DECLARATION_NODE_KINDS,
    extract_declarations,
    extract_from_tree,
    extract_unit,
)
from typehunt.parse.frontend import ParsedUnit, parse_source

__all__ = [
    "DECLARATION_NODE_KINDS",
    "ParsedUnit",
    "UnitParseError",
    "UnitReadError",
    "extract_declarations",
    "extract_from_tree",
    "extract_unit",
    "parse_source",
    "read_unit",
]

"""Find duplicate type definitions across a TypeScript codebase.

This package provides:
- Data models (typehunt.models) — declaration records and groups
- Parsing (typehunt.parse) — tree-sitter front end and declaration extraction
- Normalization (typehunt.normalize) — shape fingerprints and snippets
- Grouping (typehunt.grouping) — name and shape duplicate groups
- Discovery (typehunt.discovery) — directory walk and tsconfig resolution
- Engine (typehunt.engine) — scan orchestration
- Report (typehunt.report) — text, JSON and Markdown output
- Audit (typehunt.audit) — structured JSONL event log
- CLI (typehunt.cli) — command-line interface
- Public API (typehunt.api) — high-level convenience functions
"""

__version__ = "0.3.0"
__license__ = "MIT"

from typehunt.api import find_duplicates, find_duplicates_in_sources, write_report
from typehunt.engine import ScanConfig, ScanResult
from typehunt.errors import ConfigurationError, UnitParseError, UnitReadError
from typehunt.models import DeclarationKind, DeclarationRecord, DuplicateGroup

__all__ = [
    "__version__",
    "__license__",
    "ConfigurationError",
    "DeclarationKind",
    "DeclarationRecord",
    "DuplicateGroup",
    "ScanConfig",
    "ScanResult",
    "UnitParseError",
    "UnitReadError",
    "find_duplicates",
    "find_duplicates_in_sources",
    "write_report",
]

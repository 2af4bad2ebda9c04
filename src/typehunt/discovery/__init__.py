"""Source file discovery.

Main entry points:
- discover_directory: Walk a directory tree for TypeScript files
- discover_tsconfig: Resolve the file list of a tsconfig.json
"""

from typehunt.discovery.tsconfig import discover_tsconfig, load_tsconfig, parse_jsonc
from typehunt.discovery.walker import (
    DEFAULT_IGNORED_DIRS,
    TYPE_EXTENSIONS,
    discover_directory,
    is_type_file,
    matches_exclude,
    to_unit_id,
)

__all__ = [
    "DEFAULT_IGNORED_DIRS",
    "TYPE_EXTENSIONS",
    "discover_directory",
    "discover_tsconfig",
    "is_type_file",
    "load_tsconfig",
    "matches_exclude",
    "parse_jsonc",
    "to_unit_id",
]

"""Directory walk and path filtering for TypeScript sources."""

import os
from pathlib import Path

from typehunt.errors import ConfigurationError

__all__ = [
    "DEFAULT_IGNORED_DIRS",
    "TYPE_EXTENSIONS",
    "discover_directory",
    "is_type_file",
    "matches_exclude",
    "to_unit_id",
]

# File extensions recognized as TypeScript source files (.d.ts included via .ts)
TYPE_EXTENSIONS = frozenset({".ts", ".tsx", ".mts", ".cts"})

# Directories always excluded from directory walks
DEFAULT_IGNORED_DIRS = frozenset(
    {
        "node_modules",
        ".next",
        ".git",
        "dist",
        "build",
        "coverage",
        ".turbo",
    }
)


def is_type_file(path: Path) -> bool:
    return path.suffix.lower() in TYPE_EXTENSIONS


def to_unit_id(path: Path, base: Path | None = None) -> str:
    """Convert a path to a POSIX-style path relative to ``base``.

    Parameters
    ----------
    path : Path
        File path.
    base : Path | None, optional
        Base directory, by default the current working directory.

    Returns
    -------
    str
        Relative POSIX path (e.g. ``src/models/user.ts``).
    """
    base_dir = base if base is not None else Path.cwd()
    return Path(os.path.relpath(path, base_dir)).as_posix()


def _strip_dot_prefix(value: str) -> str:
    while value.startswith("./"):
        value = value[2:].lstrip("/")
    return value


def matches_exclude(rel_path_posix: str, patterns: list[str]) -> bool:
    """Check whether a relative POSIX path matches any exclude pattern.

    Match rules:
    - Exact match against the token
    - Token is a prefix followed by ``/``
    - Token appears anywhere as a substring

    Parameters
    ----------
    rel_path_posix : str
        Path relative to the scan base, with forward slashes.
    patterns : list[str]
        Exclude tokens. Blank tokens are ignored.

    Returns
    -------
    bool
        True if the path is excluded.
    """
    if not patterns:
        return False

    rel = _strip_dot_prefix(rel_path_posix)

    for raw in patterns:
        token = _strip_dot_prefix(raw.strip())
        if not token:
            continue
        if rel == token or rel.startswith(f"{token}/") or token in rel:
            return True
    return False


def discover_directory(
    root: Path,
    exclude: list[str] | None = None,
    base: Path | None = None,
) -> list[Path]:
    """Walk a directory tree and collect TypeScript source files.

    Symlinks and ``DEFAULT_IGNORED_DIRS`` are skipped, as is any entry whose
    path relative to ``base`` matches an exclude token. Entries are visited
    in sorted order so results are deterministic.

    Parameters
    ----------
    root : Path
        Directory to walk.
    exclude : list[str] | None, optional
        Exclude tokens (see ``matches_exclude``).
    base : Path | None, optional
        Base for relative paths, by default the current working directory.

    Returns
    -------
    list[Path]
        Absolute paths of discovered files.

    Raises
    ------
    ConfigurationError
        If ``root`` does not exist or is not a directory.
    """
    root_path = root if root.is_absolute() else Path.cwd() / root
    if not root_path.is_dir():
        raise ConfigurationError(f"Root path does not exist or is not a directory: {root}")

    patterns = exclude or []
    results: list[Path] = []
    pending = [root_path]

    while pending:
        current = pending.pop()
        try:
            entries = sorted(current.iterdir(), key=lambda p: p.name)
        except OSError:
            continue

        subdirs: list[Path] = []
        for entry in entries:
            if entry.is_symlink():
                continue
            if entry.is_dir() and entry.name in DEFAULT_IGNORED_DIRS:
                continue
            if matches_exclude(to_unit_id(entry, base), patterns):
                continue

            if entry.is_dir():
                subdirs.append(entry)
            elif entry.is_file() and is_type_file(entry):
                results.append(entry)

        pending.extend(reversed(subdirs))

    return sorted(results)

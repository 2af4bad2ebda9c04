"""Resolve the source file list of a ``tsconfig.json``.

Supports the subset of project configuration that decides which files are
compiled: ``files``, ``include``, ``exclude``, ``compilerOptions.outDir``
and ``extends`` chains (relative paths and packages under ``node_modules``).
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from typehunt.discovery.walker import is_type_file
from typehunt.errors import ConfigurationError

__all__ = ["TsConfig", "discover_tsconfig", "load_tsconfig", "parse_jsonc"]

DEFAULT_INCLUDE = ("**/*",)
DEFAULT_EXCLUDE = ("node_modules", "bower_components", "jspm_packages")

# Strings are matched first so comment markers inside them survive
_JSONC_TOKEN_RE = re.compile(
    r'"(?:\\.|[^"\\])*"|//[^\n]*|/\*.*?\*/|,(?=\s*[}\]])',
    re.DOTALL,
)

_MAX_EXTENDS_DEPTH = 32


@dataclass
class TsConfig:
    """Resolved project configuration.

    Attributes
    ----------
    path : Path
        Absolute path to the config file.
    files : list[Path]
        Explicitly listed files (absolute).
    include : list[str] | None
        Include globs; None when not set anywhere in the chain.
    include_base : Path
        Directory ``include`` globs are relative to.
    exclude : list[str] | None
        Exclude globs; None when not set anywhere in the chain.
    exclude_base : Path
        Directory ``exclude`` globs are relative to.
    out_dir : Path | None
        Resolved ``compilerOptions.outDir``.
    """

    path: Path
    files: list[Path] | None = None
    include: list[str] | None = None
    include_base: Path = field(default_factory=Path)
    exclude: list[str] | None = None
    exclude_base: Path = field(default_factory=Path)
    out_dir: Path | None = None


def parse_jsonc(text: str) -> Any:
    """Parse JSON that may contain comments and trailing commas.

    Raises
    ------
    json.JSONDecodeError
        If the text is not valid JSON after comment removal.
    """

    def _keep_strings(match: re.Match[str]) -> str:
        token = match.group(0)
        return token if token.startswith('"') else ""

    return json.loads(_JSONC_TOKEN_RE.sub(_keep_strings, text))


def _resolve_extends(spec: str, config_dir: Path) -> Path:
    if spec.startswith(".") or Path(spec).is_absolute():
        candidate = (config_dir / spec).resolve()
        if candidate.suffix != ".json" and not candidate.is_file():
            candidate = candidate.with_name(candidate.name + ".json")
        return candidate

    for directory in (config_dir, *config_dir.parents):
        package_path = directory / "node_modules" / spec
        for candidate in (package_path, Path(f"{package_path}.json"), package_path / "tsconfig.json"):
            if candidate.is_file():
                return candidate
    raise ConfigurationError(f"Cannot resolve extended tsconfig: {spec}")


def _read_config(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read tsconfig file: {path}") from e

    try:
        data = parse_jsonc(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Failed to parse {path}: expected a JSON object")
    return data


def load_tsconfig(path: Path, _depth: int = 0) -> TsConfig:
    """Load a tsconfig file, merging its ``extends`` chain.

    Values from the extending config override the extended one; relative
    paths are resolved against the directory of the config that sets them.

    Parameters
    ----------
    path : Path
        Path to ``tsconfig.json``.

    Returns
    -------
    TsConfig
        Merged configuration.

    Raises
    ------
    ConfigurationError
        If a config in the chain cannot be read, parsed or resolved.
    """
    if _depth > _MAX_EXTENDS_DEPTH:
        raise ConfigurationError(f"tsconfig extends chain too deep at {path}")

    config_path = path.resolve()
    config_dir = config_path.parent
    data = _read_config(config_path)

    extends = data.get("extends")
    bases = [extends] if isinstance(extends, str) else list(extends or [])
    if bases:
        resolved = load_tsconfig(_resolve_extends(bases[0], config_dir), _depth + 1)
        for spec in bases[1:]:
            _merge(resolved, load_tsconfig(_resolve_extends(spec, config_dir), _depth + 1))
        resolved.path = config_path
    else:
        resolved = TsConfig(path=config_path, include_base=config_dir, exclude_base=config_dir)

    own = TsConfig(path=config_path, include_base=config_dir, exclude_base=config_dir)
    if "files" in data:
        own.files = [(config_dir / f).resolve() for f in data["files"]]
    if "include" in data:
        own.include = list(data["include"])
    if "exclude" in data:
        own.exclude = list(data["exclude"])
    out_dir = (data.get("compilerOptions") or {}).get("outDir")
    if out_dir:
        own.out_dir = (config_dir / out_dir).resolve()

    _merge(resolved, own)
    return resolved


def _merge(target: TsConfig, override: TsConfig) -> None:
    if override.files is not None:
        target.files = override.files
    if override.include is not None:
        target.include = override.include
        target.include_base = override.include_base
    if override.exclude is not None:
        target.exclude = override.exclude
        target.exclude_base = override.exclude_base
    if override.out_dir is not None:
        target.out_dir = override.out_dir


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a tsconfig glob (``*``, ``?``, ``**/``) to a regex."""
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts))


def _clean_pattern(pattern: str) -> str:
    pattern = pattern.replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/")


def _include_glob(pattern: str) -> str:
    """Directory patterns (last segment without wildcard or extension) match all files below."""
    if pattern in ("", "."):
        return "**/*"
    last = pattern.rsplit("/", 1)[-1]
    if "*" not in last and "?" not in last and "." not in last:
        return f"{pattern}/**/*"
    return pattern


def _split_literal(base: Path, pattern: str) -> tuple[Path, str]:
    """Split a pattern into its resolved literal directory and wildcard remainder."""
    if pattern.startswith("/"):
        base, pattern = Path("/"), pattern.lstrip("/")
    segments = pattern.split("/")
    literal: list[str] = []
    for segment in segments:
        if "*" in segment or "?" in segment:
            break
        literal.append(segment)
    rest = "/".join(segments[len(literal) :])
    return base.joinpath(*literal).resolve(), rest


def _expand_include(base: Path, pattern: str) -> list[Path]:
    root, rest = _split_literal(base, _include_glob(pattern))
    if not rest:
        return [root] if root.is_file() else []
    if not root.is_dir():
        return []
    return [p.resolve() for p in root.glob(rest)]


ExcludeRule = tuple[Path, re.Pattern[str] | None]


def _exclude_rule(base: Path, pattern: str) -> ExcludeRule:
    root, rest = _split_literal(base, pattern)
    return root, _glob_to_regex(rest) if rest else None


def _is_excluded(path: Path, rules: list[ExcludeRule]) -> bool:
    for root, regex in rules:
        if not path.is_relative_to(root):
            continue
        if regex is None:
            return True
        segments = path.relative_to(root).as_posix().split("/")
        candidates = ["/".join(segments[: i + 1]) for i in range(len(segments))]
        if any(regex.fullmatch(c) for c in candidates):
            return True
    return False


def discover_tsconfig(tsconfig_path: Path) -> list[Path]:
    """Resolve the TypeScript source files selected by a tsconfig.

    ``files`` entries are always kept; ``include`` globs (default ``**/*``
    when ``files`` is absent) are filtered by ``exclude`` globs (default
    ``node_modules``, ``bower_components``, ``jspm_packages`` and ``outDir``).

    Parameters
    ----------
    tsconfig_path : Path
        Path to ``tsconfig.json``.

    Returns
    -------
    list[Path]
        Sorted absolute paths with TypeScript extensions.

    Raises
    ------
    ConfigurationError
        If the config cannot be read or parsed.
    """
    config = load_tsconfig(tsconfig_path)

    selected: set[Path] = {f for f in (config.files or []) if f.is_file() and is_type_file(f)}

    include = config.include
    if include is None and config.files is None:
        include = list(DEFAULT_INCLUDE)

    if include:
        patterns = config.exclude if config.exclude is not None else DEFAULT_EXCLUDE
        rules = [
            _exclude_rule(config.exclude_base, _clean_pattern(p))
            for p in patterns
            if _clean_pattern(p)
        ]
        if config.exclude is None and config.out_dir is not None:
            rules.append((config.out_dir, None))

        for pattern in include:
            for candidate in _expand_include(config.include_base, _clean_pattern(pattern)):
                if not candidate.is_file() or not is_type_file(candidate):
                    continue
                if _is_excluded(candidate, rules):
                    continue
                selected.add(candidate)

    return sorted(selected)

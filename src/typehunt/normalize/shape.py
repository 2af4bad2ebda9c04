"""Shape fingerprint normalization.

Turns the raw text of a declaration into a canonical string used as a
structural-equality key. The canonicalization is textual, not semantic:
member order, spelling of equivalent types and whitespace inside string
literals are preserved.

The rewrite sequence below is applied in a fixed order. Inserting a new
rewrite changes previously computed fingerprints, so any change to
``SHAPE_REWRITES`` must bump ``SHAPE_VERSION``.
"""

import re
from collections.abc import Callable

from ._helpers import collapse_whitespace, strip_comments

__all__ = [
    "NAME_PLACEHOLDER",
    "SHAPE_REWRITES",
    "SHAPE_VERSION",
    "normalize_shape",
]

SHAPE_VERSION = "2"

NAME_PLACEHOLDER = "__NAME__"

INTERFACE_HEAD_RE = re.compile(r"\binterface\s+" + NAME_PLACEHOLDER + r"\s*\{")
LEADING_EXPORT_RE = re.compile(r"^export\s+")
CONST_ENUM_RE = re.compile(r"\bconst\s+enum\b")
TRAILING_SEMICOLON_RE = re.compile(r"\s*;\s*$")

Rewrite = Callable[[str, str], str]


def _replace_name(text: str, name: str) -> str:
    if not name:
        return text
    pattern = re.compile(r"(?<![\w$])" + re.escape(name) + r"(?![\w$])")
    return pattern.sub(NAME_PLACEHOLDER, text)


def _interface_to_type(text: str, name: str) -> str:
    return INTERFACE_HEAD_RE.sub(f"type {NAME_PLACEHOLDER} = {{", text, count=1)


def _strip_export(text: str, name: str) -> str:
    return LEADING_EXPORT_RE.sub("", text, count=1)


def _const_enum_to_enum(text: str, name: str) -> str:
    return CONST_ENUM_RE.sub("enum", text, count=1)


def _strip_trailing_semicolon(text: str, name: str) -> str:
    return TRAILING_SEMICOLON_RE.sub("", text, count=1)


SHAPE_REWRITES: tuple[tuple[str, Rewrite], ...] = (
    ("strip_comments", lambda text, name: strip_comments(text)),
    ("collapse_whitespace", lambda text, name: collapse_whitespace(text)),
    ("replace_name", _replace_name),
    ("interface_to_type", _interface_to_type),
    ("strip_export", _strip_export),
    ("const_enum_to_enum", _const_enum_to_enum),
    ("strip_trailing_semicolon", _strip_trailing_semicolon),
)


def normalize_shape(raw_snippet: str, name: str) -> str:
    """Create the shape fingerprint of a declaration.

    Parameters
    ----------
    raw_snippet : str
        Exact source text of the declaration.
    name : str
        Declared name; whole-identifier occurrences (``$`` counts as an identifier character) become ``__NAME__``.

    Returns
    -------
    str
        Fingerprint string. Empty for empty or whitespace-only input.

    Examples
    --------
        >>> normalize_shape("interface Foo { bar: string; }", "Foo")
        'type __NAME__ = { bar: string; }'
        >>> normalize_shape("export type Foo = { bar: string; };", "Foo")
        'type __NAME__ = { bar: string; }'
    """
    text = raw_snippet
    for _, rewrite in SHAPE_REWRITES:
        text = rewrite(text, name)
    return text

"""Helper functions and compiled regex patterns for normalization.

This module provides the text primitives shared by the shape normalizer
and the display snippet formatter.
"""

import re

# Pre-compiled regex patterns
BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
WHITESPACE_RE = re.compile(r"\s+")

# Maximum length for inline snippet display
MAX_SNIPPET_LENGTH = 200

ELLIPSIS = "..."


def strip_comments(text: str) -> str:
    """Replace block and line comments with a single space.

    Parameters
    ----------
    text : str
        Source text.

    Returns
    -------
    str
        Text without comments.

    Notes
    -----
    Purely textual: comment markers inside string literals are stripped too.
    """
    text = BLOCK_COMMENT_RE.sub(" ", text)
    return LINE_COMMENT_RE.sub(" ", text)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and trim."""
    return WHITESPACE_RE.sub(" ", text).strip()


def normalize_whitespace(text: str) -> str:
    """Strip comments, then collapse whitespace."""
    return collapse_whitespace(strip_comments(text))


def truncate(text: str, max_length: int) -> str:
    """Truncate text to ``max_length`` characters, ending with an ellipsis.

    Parameters
    ----------
    text : str
        Text to truncate.
    max_length : int
        Maximum length of the result, ellipsis included.

    Returns
    -------
    str
        ``text`` unchanged if short enough, otherwise its prefix plus ``...``.
    """
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def format_snippet(raw_snippet: str, max_length: int = MAX_SNIPPET_LENGTH) -> str:
    """Produce a compact, truncated snippet for display.

    The result is never used for fingerprinting.
    """
    return truncate(normalize_whitespace(raw_snippet), max_length)

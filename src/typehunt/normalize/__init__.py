"""Declaration text normalization.

Main entry points:
- normalize_shape: raw declaration text + name -> structural fingerprint
- format_snippet: compact display form of a declaration
"""

from typehunt.normalize._helpers import format_snippet, normalize_whitespace
from typehunt.normalize.shape import (
    NAME_PLACEHOLDER,
    SHAPE_REWRITES,
    SHAPE_VERSION,
    normalize_shape,
)

__all__ = [
    "NAME_PLACEHOLDER",
    "SHAPE_REWRITES",
    "SHAPE_VERSION",
    "format_snippet",
    "normalize_shape",
    "normalize_whitespace",
]

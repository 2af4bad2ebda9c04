"""Base types and utilities for reading source units."""

from pathlib import Path

from typehunt.errors import UnitParseError, UnitReadError

__all__ = [
    "UnitReadError",
    "UnitParseError",
    "detect_encoding",
    "normalize_line_endings",
    "read_unit",
]


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes using deterministic strategy.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        Detected encoding (utf-8-sig, utf-8 or latin-1).
    """
    if file_bytes.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def normalize_line_endings(content: str) -> str:
    """Normalize line endings to LF.

    Parameters
    ----------
    content : str
        Text content with potentially mixed line endings.

    Returns
    -------
    str
        Text with normalized line endings (\\n only).
    """
    content = content.replace("\r\n", "\n")
    return content.replace("\r", "\n")


def read_unit(path: Path, unit_id: str | None = None) -> str:
    """Read a source file as text.

    Parameters
    ----------
    path : Path
        File to read.
    unit_id : str | None, optional
        Identifier attached to the error if reading fails.

    Returns
    -------
    str
        Decoded file content with LF line endings.

    Raises
    ------
    UnitReadError
        If the file cannot be read.
    """
    try:
        file_bytes = path.read_bytes()
    except OSError as e:
        raise UnitReadError(e.strerror or str(e), unit_id=unit_id or str(path)) from e

    content = file_bytes.decode(detect_encoding(file_bytes))
    return normalize_line_endings(content)

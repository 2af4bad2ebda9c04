"""Exception types shared across typehunt.

Unit-level errors (``UnitReadError``, ``UnitParseError``) are recovered per
source unit and surfaced as data; ``ConfigurationError`` aborts the run
before any extraction starts.
"""

__all__ = ["ConfigurationError", "UnitParseError", "UnitReadError"]


class ConfigurationError(ValueError):
    """Raised when scan configuration or inputs are invalid."""


class UnitReadError(OSError):
    """Raised when a source unit cannot be read."""

    def __init__(self, message: str, unit_id: str | None = None) -> None:
        """Initialize read error.

        Parameters
        ----------
        message : str
            Error message.
        unit_id : str | None, optional
            Unit that could not be read.
        """
        super().__init__(message)
        self.unit_id = unit_id


class UnitParseError(ValueError):
    """Raised when a source unit does not parse cleanly."""

    def __init__(
        self,
        message: str,
        unit_id: str | None = None,
        line: int | None = None,
    ) -> None:
        """Initialize parse error.

        Parameters
        ----------
        message : str
            Error message.
        unit_id : str | None, optional
            Unit where the error occurred.
        line : int | None, optional
            1-based line of the first syntax error.
        """
        super().__init__(message)
        self.unit_id = unit_id
        self.line = line

"""Common utility functions for typehunt."""

from typehunt.utils.timestamps import get_iso_timestamp

__all__ = ["get_iso_timestamp"]

"""Command-line interface for typehunt."""

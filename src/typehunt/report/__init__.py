"""Report renderers: plain text, JSON payload and Markdown."""

from typehunt.report.markdown import render_markdown
from typehunt.report.payload import (
    build_json_payload,
    load_schema,
    render_json,
    validate_payload,
)
from typehunt.report.text import (
    MAX_DISPLAYED_ERRORS,
    MAX_PREVIEW_LENGTH,
    render_errors,
    render_text,
)

__all__ = [
    "MAX_DISPLAYED_ERRORS",
    "MAX_PREVIEW_LENGTH",
    "build_json_payload",
    "load_schema",
    "render_errors",
    "render_json",
    "render_markdown",
    "render_text",
    "validate_payload",
]

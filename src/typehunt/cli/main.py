"""Command-line interface for typehunt.

Provides the ``scan`` command for finding duplicate TypeScript types.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("typehunt")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"  # Fallback for development

OUTPUT_FORMATS = ("text", "json", "markdown")
MODES = ("name", "shape", "both")


def _split_tokens(values: tuple[str, ...]) -> list[str]:
    return [token.strip() for value in values for token in value.split(",") if token.strip()]


def _write_output(output: str, content: str, label: str) -> None:
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    click.echo(f"Saved {label} report to {output_path.as_posix()}", err=True)


@click.group()
@click.version_option(version=__version__, prog_name="typehunt")
def cli() -> None:
    """Find duplicate type definitions across a TypeScript codebase.

    Use 'typehunt COMMAND --help' for command-specific help.
    """


@cli.command()
@click.option(
    "--root",
    type=click.Path(),
    default="src",
    show_default=True,
    help="Root directory to scan",
)
@click.option(
    "--tsconfig",
    type=click.Path(),
    default=None,
    help="Path to tsconfig.json; its include/exclude/files decide what is scanned",
)
@click.option(
    "--mode",
    type=click.Choice(MODES),
    default="both",
    show_default=True,
    help="Duplicate detection mode",
)
@click.option(
    "--min",
    "min_group_size",
    type=int,
    default=2,
    show_default=True,
    help="Minimum declarations per reported group (>= 2)",
)
@click.option(
    "--exclude",
    multiple=True,
    help="Comma-separated path tokens to exclude (repeatable). "
    "Matches equal paths, path prefixes or substrings.",
)
@click.option("--no-enums", is_flag=True, help="Skip enum declarations")
@click.option("--include-reexports", is_flag=True, help="Include re-exports (skipped by default)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    show_default=True,
    help="Output format",
)
@click.option("--json", "as_json", is_flag=True, help="Shortcut for --format json")
@click.option("--markdown", "--md", "as_markdown", is_flag=True, help="Shortcut for --format markdown")
@click.option(
    "--output",
    "--out",
    "-o",
    type=click.Path(),
    default=None,
    help="Save the report to a file (text mode saves the JSON payload)",
)
@click.option(
    "--fail-on-duplicates",
    is_flag=True,
    help="Exit with code 1 when duplicates are found (CI mode)",
)
@click.option(
    "--concurrency",
    type=int,
    default=50,
    show_default=True,
    help="Maximum number of files read and parsed at once",
)
@click.option(
    "--audit-log",
    type=click.Path(),
    default=None,
    help="Append structured JSONL scan events to this file",
)
def scan(
    root: str,
    tsconfig: str | None,
    mode: str,
    min_group_size: int,
    exclude: tuple[str, ...],
    no_enums: bool,
    include_reexports: bool,
    output_format: str,
    as_json: bool,
    as_markdown: bool,
    output: str | None,
    fail_on_duplicates: bool,
    concurrency: int,
    audit_log: str | None,
) -> None:
    """Scan TypeScript sources for duplicate type declarations.

    Interfaces, type aliases, enums and re-exports are grouped by name
    and by normalized shape.

    Examples
    --------
        typehunt scan
        typehunt scan --tsconfig tsconfig.json
        typehunt scan --root src --mode shape --json
        typehunt scan --markdown --output report.md
        typehunt scan --exclude generated,src/vendor,.storybook
    """
    from typehunt.audit import AuditLogger
    from typehunt.engine import ScanConfig, run_scan
    from typehunt.report import (
        build_json_payload,
        render_errors,
        render_json,
        render_markdown,
        render_text,
        validate_payload,
    )

    if as_json:
        output_format = "json"
    if as_markdown:
        output_format = "markdown"

    logger = AuditLogger(Path(audit_log)) if audit_log else None
    try:
        config = ScanConfig(
            root=Path(root),
            tsconfig=Path(tsconfig) if tsconfig else None,
            exclude=_split_tokens(exclude),
            mode=mode,
            min_group_size=min_group_size,
            include_enums=not no_enums,
            skip_reexports=not include_reexports,
            concurrency=concurrency,
        )
        result = run_scan(config, logger=logger)
    except Exception as e:
        click.secho(f"typehunt failed: {e}", fg="red", err=True)
        sys.exit(1)
    finally:
        if logger:
            logger.close()

    if result.files_scanned == 0 and output_format == "text":
        click.echo("No TypeScript files found to scan.")
        return

    report_root = tsconfig or root

    if output_format == "text":
        click.echo(render_text(result))
        if result.errors:
            click.secho(render_errors(result.errors), fg="yellow", err=True)
        if output:
            payload = build_json_payload(result, report_root)
            validate_payload(payload)
            _write_output(output, render_json(payload), "JSON")
    elif output_format == "json":
        payload = build_json_payload(result, report_root)
        validate_payload(payload)
        rendered = render_json(payload)
        if output:
            _write_output(output, rendered, "JSON")
        click.echo(rendered, nl=False)
    else:
        rendered = render_markdown(result)
        if output:
            _write_output(output, rendered, "Markdown")
        click.echo(rendered, nl=False)

    if fail_on_duplicates and result.duplicate_count > 0:
        if output_format == "text":
            click.secho(
                f"\n✗ Found {result.duplicate_count} duplicate group(s). Exiting with code 1.",
                fg="red",
            )
        sys.exit(1)


if __name__ == "__main__":
    cli()

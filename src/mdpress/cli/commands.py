"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdpress.config import Settings, load_config
from mdpress.core.export import run_render
from mdpress.core.pipeline import process_markdown_preview
from mdpress.core.storage import StorageConfigError, make_storage_resolver
from mdpress.core.validate import sanitize_markdown, validate_markdown


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _read(path: Path) -> str:
    if not path.is_file():
        _fail(f"Not a file: {path}")
    return path.read_text(encoding='utf-8')


def render_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or directory to render")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    no_excerpt: Annotated[bool, typer.Option("--no-excerpt", help="Skip excerpt generation")] = False,
    line_numbers: Annotated[bool, typer.Option("--line-numbers", help="Annotate code blocks with line counts")] = False,
    sanitize: Annotated[bool, typer.Option("--sanitize", help="Strip executable content before parsing")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log pipeline stages")] = False,
    ):
    """Render markdown to <slug>.html plus a <slug>.json metadata sidecar."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    settings = _settings(overrides={"output_dir": out, "line_numbers": line_numbers or None})
    options = settings.process_options(generate_excerpt=not no_excerpt, sanitize=sanitize)
    output_dir = Path(settings.output_dir)

    try:
        results = run_render(Path(path), output_dir, options, make_storage_resolver(settings))
    except StorageConfigError as e:
        _fail("Image storage is not configured", e)
    except OSError as e:
        _fail(f"Could not render {path}", e)

    for src, html_path in results:
        typer.echo(f"  {src} -> {html_path}")
    typer.echo(f"Rendered {len(results)} document(s) to {output_dir}/")


def preview_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to preview")],
    ):
    """Print fast preview HTML (no custom transforms or metadata)."""
    settings = _settings()
    typer.echo(process_markdown_preview(_read(Path(path)), gfm=settings.gfm))


def validate_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to lint")],
    ):
    """Check fences and link/image syntax; exits 1 when problems are found."""
    report = validate_markdown(_read(Path(path)))
    if report.is_valid:
        typer.echo("OK")
        return
    for error in report.errors:
        typer.echo(f"  {error}")
    raise typer.Exit(1)


def sanitize_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to sanitize")],
    in_place: Annotated[bool, typer.Option("--in-place", help="Rewrite the file instead of printing")] = False,
    ):
    """Strip scripts, styles, event handlers, and dangerous URL schemes."""
    p = Path(path)
    cleaned = sanitize_markdown(_read(p))
    if in_place:
        p.write_text(cleaned, encoding='utf-8')
        typer.echo(f"Sanitized {p}")
    else:
        typer.echo(cleaned, nl=False)

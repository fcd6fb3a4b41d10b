"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpress.cli.commands import preview_cmd, render_cmd, sanitize_cmd, validate_cmd


app = typer.Typer(name="mdpress", no_args_is_help=True, help="Markdown to HTML publishing pipeline")

app.command(name="render")(render_cmd)
app.command(name="preview")(preview_cmd)
app.command(name="validate")(validate_cmd)
app.command(name="sanitize")(sanitize_cmd)

"""CLI entrypoint: Typer app definition and command registration"""

import typer

from logpub.cli.commands import (
    build_cmd, commit_cmd, export_cmd, extract_cmd, init_cmd, list_cmd,
    parse_cmd, stats_cmd, validate_cmd,
)


app = typer.Typer(name="logpub", no_args_is_help=True, help="Blog post authoring and publishing pipeline")

app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="commit")(commit_cmd)
app.command(name="export")(export_cmd)
app.command(name="extract")(extract_cmd)
app.command(name="init")(init_cmd)
app.command(name="parse")(parse_cmd)
app.command(name="validate")(validate_cmd)
app.command(name="stats")(stats_cmd)

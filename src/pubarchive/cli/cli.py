"""CLI entrypoint: Typer app definition and command registration"""

import typer

from pubarchive.cli.commands import build_cmd, init_cmd, list_cmd


app = typer.Typer(name="pubarchive", no_args_is_help=True, help="Static site generator for dated public archives")

app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="init")(init_cmd)

"""CLI entrypoint: Typer app definition and command registration"""

import logging
from typing import Annotated

import typer

from manupub.cli.commands import build_cmd, check_cmd, list_cmd


app = typer.Typer(name="manupub", no_args_is_help=True, help="Markdown manuscript publishing pipeline")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level")] = False,
    ):
    """Markdown manuscript -> ordered, linked HTML chapters."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"log_level": "DEBUG" if verbose else None}


app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="check")(check_cmd)

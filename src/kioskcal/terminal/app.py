# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from kioskcal.logging_config import setup_logger
from kioskcal.repository.configuration import validate_log_level
from kioskcal.terminal import configuration, schedule
from kioskcal.terminal.custom_typer import AppTyperGroup
from kioskcal.terminal.version import version
from kioskcal.view import state as view_state

app = typer.Typer(
    cls=AppTyperGroup,
    help="kioskcal - Calendar timeline layouts in the CLI",
    no_args_is_help=True,
)
app.command(name="day, d")(schedule.day)
app.command(name="week, w")(schedule.week)
app.command(name="window, wi")(schedule.window)
app.add_typer(configuration.app, name="config, c", help="View or change settings")
app.command(name="version, ve")(version)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Override the configured log level for this run",
        ),
    ] = None,
) -> None:
    """
    kioskcal - Calendar timeline layouts in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if log_level is not None:
        try:
            validate_log_level(log_level)
        except ValueError as e:
            raise typer.BadParameter(str(e))
        setup_logger(log_level)


def run() -> None:
    app()

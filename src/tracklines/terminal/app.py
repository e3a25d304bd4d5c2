# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from tracklines.terminal import chart, chartable, configuration, trackable
from tracklines.terminal.custom_typer import OrderedTyperGroup
from tracklines.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="tracklines - Daily questions, summed and charted in the CLI",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c", help="View and change settings")
app.add_typer(trackable.app, name="trackable, tr", help="Daily questions and answers")
app.add_typer(
    chartable.app, name="chartable, ch", help="Weighted sums of trackables"
)
app.add_typer(chart.app, name="chart, lc", help="Line charts")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
) -> None:
    """
    tracklines - Daily questions, summed and charted in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()

# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from tracklines.colour import COLOURS, get_random_colour, is_colour
from tracklines.model.ids import TrackableId
from tracklines.model.trackable import ICON_CATALOGUE
from tracklines.repository.configuration import CONFIGURATION_REPO
from tracklines.repository.user_data import USER_DATA_REPO
from tracklines.service import user_data as user_data_service
from tracklines.service.trackable import ANSWER_TYPES, dropped_answer_count
from tracklines.terminal.custom_typer import AliasedTyperGroup
from tracklines.terminal.errors import reported_errors
from tracklines.terminal.parse import parse_day
from tracklines.time import day_range, today
from tracklines.view.views import trackable as trackable_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _show(trackable_id: TrackableId) -> None:
    user_data = USER_DATA_REPO.get_user_data()
    trackable = user_data_service.get_trackable(user_data, trackable_id)
    days = day_range(today(), CONFIGURATION_REPO.get_config()["chart_days"])
    answered = [day for day in days if day in trackable["data"]["answers"]]
    trackable_report.single_trackable_view(trackable_id, trackable, answered)


# ─────────────────────────────────────────────────────────────
# Trackable Management
# ─────────────────────────────────────────────────────────────


@app.command("add, a")
def add(
    question: Annotated[
        Optional[str], typer.Option("--question", "-q", help="The daily question")
    ] = None,
    answer_type: Annotated[
        str,
        typer.Option("--type", "-t", help=", ".join(ANSWER_TYPES)),
    ] = "yes_no",
    colour: Annotated[
        Optional[str],
        typer.Option("--colour", "-col", help=", ".join(COLOURS)),
    ] = None,
) -> None:
    """Create a new trackable."""
    config = CONFIGURATION_REPO.get_config()

    if answer_type not in ANSWER_TYPES:
        typer.echo(
            f"Invalid answer type: {answer_type}. Valid options: {', '.join(ANSWER_TYPES)}"
        )
        raise typer.Exit(1)
    if colour is not None and not is_colour(colour):
        typer.echo(f"Invalid colour: {colour}. Valid options: {', '.join(COLOURS)}")
        raise typer.Exit(1)

    # Determine colour: use provided colour, or random if config enabled
    trackable_colour = colour
    if trackable_colour is None and config["random_colour_for_trackables"]:
        trackable_colour = get_random_colour()

    with reported_errors():
        user_data = USER_DATA_REPO.get_user_data()
        user_data, trackable_id = user_data_service.add_trackable(
            user_data, trackable_colour
        )
        if question is not None:
            user_data = user_data_service.set_trackable_question(
                user_data, trackable_id, question
            )
        if answer_type != "yes_no":
            user_data = user_data_service.set_trackable_answer_type(
                user_data, trackable_id, answer_type  # type: ignore[arg-type]
            )
        USER_DATA_REPO.commit(user_data)
        _show(trackable_id)


@app.command("list, ls")
def list_trackables() -> None:
    """List all trackables."""
    with reported_errors():
        user_data = USER_DATA_REPO.get_user_data()
    trackable_report.trackables_view("trackables", user_data["trackables"]["items"])


@app.command("show, s", no_args_is_help=True)
def show(id: int) -> None:
    """Show a trackable and its recent answers."""
    with reported_errors():
        _show(TrackableId(id))


@app.command("question, q", no_args_is_help=True)
def question(id: int, text: str) -> None:
    """Change the question a trackable asks."""
    with reported_errors():
        user_data = user_data_service.set_trackable_question(
            USER_DATA_REPO.get_user_data(), TrackableId(id), text
        )
        USER_DATA_REPO.commit(user_data)
        _show(TrackableId(id))


@app.command("colour, col", no_args_is_help=True)
def colour(
    id: int,
    colour: Annotated[str, typer.Argument(help=", ".join(COLOURS))],
) -> None:
    """Change a trackable's colour."""
    with reported_errors():
        user_data = user_data_service.set_trackable_colour(
            USER_DATA_REPO.get_user_data(), TrackableId(id), colour
        )
        USER_DATA_REPO.commit(user_data)
        _show(TrackableId(id))


@app.command("type, t", no_args_is_help=True)
def answer_type(
    id: int,
    answer_type: Annotated[str, typer.Argument(help=", ".join(ANSWER_TYPES))],
) -> None:
    """
    Change the kind of answer a trackable takes, converting existing answers.

    Answers the new type cannot represent are dropped, and the number dropped
    is reported.
    """
    if answer_type not in ANSWER_TYPES:
        typer.echo(
            f"Invalid answer type: {answer_type}. Valid options: {', '.join(ANSWER_TYPES)}"
        )
        raise typer.Exit(1)

    with reported_errors():
        before = USER_DATA_REPO.get_user_data()
        user_data = user_data_service.set_trackable_answer_type(
            before,
            TrackableId(id),
            answer_type,  # type: ignore[arg-type]
        )
        USER_DATA_REPO.commit(user_data)
        dropped = dropped_answer_count(
            user_data_service.get_trackable(before, TrackableId(id)),
            user_data_service.get_trackable(user_data, TrackableId(id)),
        )
        if dropped > 0:
            typer.echo(f"Dropped {dropped} answer(s) that {answer_type} cannot hold.")
        _show(TrackableId(id))


@app.command("answer, an", no_args_is_help=True)
def answer(
    id: int,
    value: Annotated[
        str, typer.Argument(help="the answer; an empty string clears the day")
    ],
    day: Annotated[
        Optional[str],
        typer.Option(
            "--day",
            "-d",
            help="YYYY-MM-DD, today/t, yesterday/y or a relative number of days",
        ),
    ] = None,
) -> None:
    """Record (or clear) the answer for a day, today by default."""
    answer_day = parse_day(day)
    if answer_day is None:
        answer_day = today()

    with reported_errors():
        user_data = user_data_service.update_trackable_response(
            USER_DATA_REPO.get_user_data(), TrackableId(id), answer_day, value
        )
        USER_DATA_REPO.commit(user_data)
        _show(TrackableId(id))


@app.command("scale, sc", no_args_is_help=True)
def scale(
    id: int,
    min: Annotated[Optional[int], typer.Option("--min")] = None,
    max: Annotated[Optional[int], typer.Option("--max")] = None,
) -> None:
    """
    Change the range of a scale trackable.

    Answers outside the new range are kept and reported.
    """
    with reported_errors():
        user_data = user_data_service.update_trackable_scale(
            USER_DATA_REPO.get_user_data(), TrackableId(id), min, max
        )
        USER_DATA_REPO.commit(user_data)
        _show(TrackableId(id))


@app.command("icon-add, ia", no_args_is_help=True)
def icon_add(
    id: int,
    choice: Annotated[str, typer.Argument(help=", ".join(ICON_CATALOGUE))],
) -> None:
    """Add an icon to the end of an icon trackable's choices."""
    with reported_errors():
        user_data = user_data_service.add_trackable_icon(
            USER_DATA_REPO.get_user_data(), TrackableId(id), choice
        )
        USER_DATA_REPO.commit(user_data)
        _show(TrackableId(id))


@app.command("icon-set, is", no_args_is_help=True)
def icon_set(
    id: int,
    index: int,
    choice: Annotated[str, typer.Argument(help=", ".join(ICON_CATALOGUE))],
) -> None:
    """Replace the icon at an index."""
    with reported_errors():
        user_data = user_data_service.set_trackable_icon(
            USER_DATA_REPO.get_user_data(), TrackableId(id), index, choice
        )
        USER_DATA_REPO.commit(user_data)
        _show(TrackableId(id))


@app.command("icon-delete, id", no_args_is_help=True)
def icon_delete(id: int, index: int) -> None:
    """Delete the last icon, if no answer uses it."""
    with reported_errors():
        user_data = user_data_service.delete_trackable_icon(
            USER_DATA_REPO.get_user_data(), TrackableId(id), index
        )
        USER_DATA_REPO.commit(user_data)
        _show(TrackableId(id))


@app.command("delete, del", no_args_is_help=True)
def delete(id: int) -> None:
    """Delete a trackable that has no answers and is not used anywhere."""
    with reported_errors():
        user_data = user_data_service.delete_trackable(
            USER_DATA_REPO.get_user_data(), TrackableId(id)
        )
        USER_DATA_REPO.commit(user_data)
    typer.echo(f"Deleted trackable {id}")

# SPDX-License-Identifier: MIT

import random
from typing import Literal, TypeIs, get_args

Colour = Literal[
    "red",
    "orange",
    "amber",
    "yellow",
    "lime",
    "green",
    "emerald",
    "teal",
    "cyan",
    "sky",
    "blue",
    "indigo",
    "violet",
    "purple",
    "fuchsia",
    "pink",
    "rose",
    "gray",
]

COLOURS: tuple[Colour, ...] = get_args(Colour)

# Neutral colour used when nothing better can be resolved
DEFAULT_COLOUR: Colour = "gray"

# Rich style for datasets that are hidden or not the focus of a hover/selection
DIMMED_STYLE = "bright_black"

# Rich colour names chosen to stay readable on dark and light terminals
RICH_STYLES: dict[Colour, str] = {
    "red": "red",
    "orange": "dark_orange",
    "amber": "orange1",
    "yellow": "yellow",
    "lime": "chartreuse3",
    "green": "green",
    "emerald": "spring_green3",
    "teal": "dark_cyan",
    "cyan": "cyan",
    "sky": "deep_sky_blue1",
    "blue": "blue",
    "indigo": "slate_blue1",
    "violet": "dark_violet",
    "purple": "purple",
    "fuchsia": "magenta",
    "pink": "hot_pink",
    "rose": "deep_pink3",
    "gray": "grey62",
}


def is_colour(value: str) -> TypeIs[Colour]:
    return value in COLOURS


def rich_style(colour: Colour) -> str:
    return RICH_STYLES.get(colour, RICH_STYLES[DEFAULT_COLOUR])


def get_random_colour() -> Colour:
    """Return a random non-neutral colour for new trackables."""
    return random.choice([colour for colour in COLOURS if colour != DEFAULT_COLOUR])

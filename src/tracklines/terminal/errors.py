# SPDX-License-Identifier: MIT

from collections.abc import Iterator
from contextlib import contextmanager

import typer

from tracklines.error import StorageError, ValidationError


@contextmanager
def reported_errors() -> Iterator[None]:
    """
    Turn a refused edit or a storage failure into a message and exit code 1.

    A refused edit never reaches the repository. A failed save leaves the
    repository dirty, so it is tried again when the program exits.
    """
    try:
        yield
    except ValidationError as e:
        typer.echo(str(e))
        raise typer.Exit(1)
    except StorageError as e:
        typer.echo(f"Storage error: {e}", err=True)
        raise typer.Exit(1)

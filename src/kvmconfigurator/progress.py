"""Spinner shown while a blocking external call runs."""

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console


@contextmanager
def working(message: str, console: Optional[Console] = None) -> Iterator[None]:
    """
    Animate ``message`` until the block exits.

    rich drives the animation from its own refresh thread; leaving the block,
    normally or through an exception, stops it.
    """
    console = console or Console(stderr=True)
    with console.status(f"[blue]{message}[/]", spinner="dots"):
        yield

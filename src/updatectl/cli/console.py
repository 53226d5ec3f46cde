"""CLI console helpers and logging setup.

Two Rich consoles are used:

* the **output** console on stdout — the sink handlers write to and
  where usage text goes;
* the **diagnostic** console on stderr — error messages, hints, and
  ``--debug`` log records.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def get_output_console() -> Console:
    """Create the buffered stdout console handed to command handlers."""
    return Console(highlight=False, soft_wrap=True)


def get_rich_console() -> Console:
    """Create a Rich console instance targeting stderr."""
    return Console(stderr=True, highlight=False)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy that renders on stderr.

    A fresh console is created per call so that tests capturing
    ``sys.stderr`` see the output.
    """

    def print(self, *objects: object, **kwargs: object) -> None:
        get_rich_console().print(*objects, **kwargs)  # type: ignore[arg-type]


console = _ConsoleProxy()


def configure_logging(debug: bool) -> None:
    """Route updatectl's log records through Rich on stderr.

    The handler is attached to the ``updatectl`` logger, not the root,
    and replaces the one installed by an earlier call.  ``--debug``
    lowers the threshold to DEBUG; third-party loggers are untouched.
    """
    logger = logging.getLogger("updatectl")
    for existing in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(existing)

    handler = RichHandler(
        console=get_rich_console(),
        show_path=False,
        show_time=debug,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

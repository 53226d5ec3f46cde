"""Command resolution — map a flat argument vector onto the command tree.

Resolution walks the tree one token at a time.  Each matched command
parses its own flags from the tokens that follow it, and whatever is
left over is offered to that command's subcommands.  The deepest match
wins, so ``app list --limit 5`` and ``app --verbose`` can share the
``app`` token while ``app`` and ``list`` keep disjoint flag scopes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from updatectl.core.models import Command, Resolution
from updatectl.exceptions import FlagError, UsageError

logger = logging.getLogger(__name__)


def join_name(path: str, token: str) -> str:
    """Append *token* to the space-joined command *path*."""
    return token if not path else f"{path} {token}"


def resolve(path: str, args: Sequence[str], candidates: Sequence[Command]) -> Resolution:
    """Resolve *args* against *candidates*, recursing into subcommands.

    Parameters
    ----------
    path:
        Full name consumed so far (``""`` at the top level).
    args:
        Remaining argument tokens.
    candidates:
        Commands registered at this level, in registration order.

    Returns
    -------
    Resolution
        ``command`` is ``None`` when ``args`` is empty or its first token
        names no candidate; ``name`` is then the path including that
        unmatched token.

    Raises
    ------
    UsageError
        When a matched command's flags fail to parse.  Carries that
        command and its full name.
    """
    if not args:
        return Resolution(None, path)

    token = args[0]
    name = join_name(path, token)

    for command in candidates:
        if command.name != token:
            continue

        logger.debug("matched command %r", name)
        try:
            remaining = command.flags.parse(args[1:])
        except FlagError as exc:
            raise UsageError(str(exc), command=command, name=name) from exc

        if command.subcommands:
            deeper = resolve(name, remaining, command.subcommands)
            if deeper.command is not None:
                return deeper
        return Resolution(command, name)

    return Resolution(None, name)


def lookup(tokens: Sequence[str], candidates: Sequence[Command]) -> Resolution:
    """Find the command named by *tokens* without parsing any flags.

    Every token must name a command; unlike :func:`resolve` there is no
    fallback to a parent.
    """
    command: Command | None = None
    name = ""
    level: Sequence[Command] = candidates
    for token in tokens:
        name = join_name(name, token)
        command = next((c for c in level if c.name == token), None)
        if command is None:
            return Resolution(None, name)
        level = command.subcommands
    return Resolution(command, name)

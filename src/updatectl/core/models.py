"""Domain models for updatectl.

The command tree and the global options are **frozen** dataclasses:
built once at start-up and never restructured afterwards.  The only
state that changes during an invocation is the parse result held by
each command's :class:`~updatectl.core.flags.FlagSet`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from updatectl.core.flags import FlagSet
from updatectl.core.protocols import Handler


# ---------------------------------------------------------------------------
# Command tree
# ---------------------------------------------------------------------------

class CommandKind(enum.Enum):
    """Shape of a command node."""

    GROUP = "group"
    """Only subcommands; invoking it directly is a usage error."""

    LEAF = "leaf"
    """Only a handler."""

    HYBRID = "hybrid"
    """Both.  A subcommand matching the next token wins; otherwise the
    node's own handler runs with that token as a positional argument."""


@dataclass(frozen=True, slots=True)
class Command:
    """One node of the command tree.

    ``name`` is this node's own token only (``"list"``, not
    ``"app list"``); the full name is assembled during resolution.
    """

    name: str
    summary: str = ""
    usage: str = ""
    description: str = ""
    flags: FlagSet = field(default_factory=FlagSet, compare=False, repr=False)
    handler: Handler | None = field(default=None, compare=False, repr=False)
    subcommands: tuple[Command, ...] = ()
    needs_service: bool = True
    """When false the handler receives ``None`` instead of a service and
    no client is built."""

    def __post_init__(self) -> None:
        if not self.name or " " in self.name:
            raise ValueError(f"invalid command name: {self.name!r}")
        if self.handler is None and not self.subcommands:
            raise ValueError(f"command {self.name!r} has neither a handler nor subcommands")
        if not self.flags.name:
            self.flags.name = self.name

    @property
    def kind(self) -> CommandKind:
        if self.handler is None:
            return CommandKind.GROUP
        if self.subcommands:
            return CommandKind.HYBRID
        return CommandKind.LEAF

    @property
    def is_runnable(self) -> bool:
        return self.handler is not None


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving an argument vector against the command tree."""

    command: Command | None
    """Deepest matched command, or ``None`` when nothing matched."""

    name: str
    """Full space-joined command name (the unmatched name on failure)."""

    @property
    def args(self) -> list[str]:
        """Positional arguments left over for the handler."""
        if self.command is None:
            return []
        return list(self.command.flags.args)


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Process-wide options, parsed before any command is resolved."""

    server: str
    """Base URL of the update server."""

    user: str = ""
    """API username (Hawk id)."""

    key: str = field(default="", repr=False)
    """API key (Hawk secret)."""

    debug: bool = False
    version: bool = False
    help: bool = False

"""The command tree registry and the built-in ``help`` command.

Business commands (apps, channels, groups, …) plug in by passing their
top-level :class:`~updatectl.core.models.Command` nodes to
:func:`build_tree`.  Registration order is display order, and on a
duplicate name the earliest registration wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from updatectl.cli import exit_codes
from updatectl.cli.options import CLI_NAME
from updatectl.cli.usage import print_command_usage, print_global_usage
from updatectl.core.flags import FlagSet
from updatectl.core.models import Command
from updatectl.core.protocols import ApiService, OutputSink
from updatectl.core.resolver import lookup

logger = logging.getLogger(__name__)


class CommandTree(Sequence[Command]):
    """Ordered, read-only collection of top-level commands."""

    def __init__(self, commands: Iterable[Command] = ()) -> None:
        self._commands: tuple[Command, ...] = tuple(commands)

    def __getitem__(self, index: int) -> Command:  # type: ignore[override]
        return self._commands[index]

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def names(self) -> list[str]:
        return [command.name for command in self._commands]


def help_command(tree: Sequence[Command], global_flags: FlagSet) -> Command:
    """Build ``help [command ...]`` over *tree*.

    *tree* is read when the handler runs, so it may be the very
    sequence this command is registered in.
    """

    def run_help(args: list[str], service: ApiService | None, out: OutputSink) -> int:
        if not args:
            print_global_usage(out, tree, global_flags)
            return exit_codes.SUCCESS

        found = lookup(args, tree)
        if found.command is None:
            out.print(f"{CLI_NAME}: unknown help topic: {found.name!r}", markup=False)
            return exit_codes.USAGE_ERROR

        print_command_usage(out, found.command, found.name)
        return exit_codes.SUCCESS

    return Command(
        name="help",
        summary="Show a list of commands or help for one command",
        usage="[command ...]",
        description=(
            "Print the global usage, or the usage of the named command.\n"
            "Subcommands are named by their full path, e.g. "
            f'"{CLI_NAME} help app list".'
        ),
        handler=run_help,
        needs_service=False,
    )


def build_tree(global_flags: FlagSet, commands: Iterable[Command] = ()) -> CommandTree:
    """Assemble the top-level commands with ``help`` registered among them.

    Commands keep the order given; ``help`` goes before the first
    command that sorts after it.
    """
    registered: list[Command] = list(commands)
    position = next(
        (index for index, command in enumerate(registered) if command.name > "help"),
        len(registered),
    )
    registered.insert(position, help_command(registered, global_flags))

    tree = CommandTree(registered)
    names = tree.names()
    for name in sorted({name for name in names if names.count(name) > 1}):
        logger.debug("duplicate command %r shadowed by earlier registration", name)
    return tree

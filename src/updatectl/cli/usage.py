"""Usage and version output.

Everything here renders into the output sink with Rich markup turned
off: usage strings such as ``[command options]`` are literal text.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from rich.padding import Padding
from rich.table import Table
from rich.text import Text

from updatectl.cli.options import CLI_DESCRIPTION, CLI_NAME, ENV_KEY, ENV_SERVER, ENV_USER
from updatectl.core.flags import Flag, FlagSet
from updatectl.core.models import Command
from updatectl.core.protocols import OutputSink
from updatectl.core.resolver import join_name
from updatectl.version import __version__

INDENT = 4


def _heading(out: OutputSink, title: str) -> None:
    out.print(Text(f"{title}:", style="bold"))


def _line(out: OutputSink, text: str) -> None:
    out.print(Padding(Text(text), (0, 0, 0, INDENT)))


def _columns(out: OutputSink, rows: Iterable[tuple[str, str]]) -> None:
    table = Table.grid(padding=(0, 2))
    table.add_column(no_wrap=True)
    table.add_column()
    for left, right in rows:
        table.add_row(Text(left), Text(right))
    out.print(Padding(table, (0, 0, 0, INDENT)))


def format_flag(flag: Flag) -> str:
    """Render one flag the way it is typed on the command line."""
    if flag.takes_value and flag.default:
        return f"{flag.option}={flag.default}"
    return flag.option


def walk(commands: Sequence[Command], path: str = "") -> Iterator[tuple[str, Command]]:
    """Yield ``(full name, command)`` for every node, depth first."""
    for command in commands:
        name = join_name(path, command.name)
        yield name, command
        yield from walk(command.subcommands, name)


def print_version(out: OutputSink) -> None:
    out.print(Text(f"{CLI_NAME} version {__version__}"))


def print_global_usage(out: OutputSink, commands: Sequence[Command], global_flags: FlagSet) -> None:
    """Print the top-level help: commands, global options, environment."""
    _heading(out, "NAME")
    _line(out, f"{CLI_NAME} - {CLI_DESCRIPTION}")
    out.print()
    _heading(out, "USAGE")
    _line(out, f"{CLI_NAME} [global options] <command> [command options] [arguments...]")
    out.print()
    _heading(out, "VERSION")
    _line(out, __version__)
    out.print()
    _heading(out, "COMMANDS")
    _columns(out, ((name, command.summary) for name, command in walk(commands)))
    out.print()
    _heading(out, "GLOBAL OPTIONS")
    _columns(out, ((format_flag(flag), flag.help) for flag in global_flags))
    out.print()
    out.print(
        Text(
            f"The --server, --user and --key defaults are read from "
            f"{ENV_SERVER}, {ENV_USER} and {ENV_KEY}."
        )
    )
    out.print()
    out.print(Text(f'Run "{CLI_NAME} help <command>" for more details on a specific command.'))


def print_command_usage(out: OutputSink, command: Command, name: str) -> None:
    """Print the usage block of *command*, reached as *name*."""
    _heading(out, "NAME")
    _line(out, f"{CLI_NAME} {name} - {command.summary}")
    out.print()
    _heading(out, "USAGE")
    usage = f"{CLI_NAME} {name}"
    if len(command.flags):
        usage += " [command options]"
    if command.subcommands:
        usage += " <command>"
    if command.usage:
        usage += f" {command.usage}"
    _line(out, usage)

    if command.description:
        out.print()
        _heading(out, "DESCRIPTION")
        for paragraph in command.description.strip().splitlines():
            _line(out, paragraph.strip())

    if command.subcommands:
        out.print()
        _heading(out, "COMMANDS")
        _columns(out, ((sub.name, sub.summary) for sub in command.subcommands))

    if len(command.flags):
        out.print()
        _heading(out, "OPTIONS")
        _columns(out, ((format_flag(flag), flag.help) for flag in command.flags))

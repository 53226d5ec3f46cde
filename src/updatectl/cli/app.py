"""CLI application entry point and command routing for updatectl.

This module is the **error boundary** for the entire application.
:func:`main` translates the domain exceptions raised while parsing,
resolving, and dispatching into well-defined exit codes;
:func:`cli` additionally catches ``KeyboardInterrupt`` and any
unexpected ``Exception`` and is the only place that exits the process.

Flow
----
1. Parse global flags (environment supplies the defaults).
2. ``--version`` / ``--help`` short-circuit.  Nothing is resolved and no
   client is built.
3. No arguments means ``help``.
4. Resolve the command path, binding each level's flags.
5. Build the authenticated service (unless the command needs none) and
   run the handler.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Mapping, Sequence

from rich.console import Console
from rich.markup import escape

from updatectl.cli import exit_codes
from updatectl.cli.console import configure_logging, console, get_output_console
from updatectl.cli.dispatch import ServiceFactory, run
from updatectl.cli.options import CLI_NAME, build_global_flags, parse_global_options
from updatectl.cli.registry import CommandTree, build_tree
from updatectl.cli.usage import print_command_usage, print_global_usage, print_version
from updatectl.core.flags import FlagSet
from updatectl.core.models import Command, CommandKind
from updatectl.core.resolver import resolve
from updatectl.exceptions import (
    ApiError,
    ClientConstructionError,
    FlagError,
    UnknownCommandError,
    UpdatectlError,
    UsageError,
)
from updatectl.infra.service import UpdateService

HELP_HINT = f"Run '{CLI_NAME} help' for usage."


def _report(exc: UpdatectlError) -> None:
    """Render a domain error and its hint on stderr."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------

def _dispatch(
    argv: Sequence[str],
    out: Console,
    global_flags: FlagSet,
    tree: CommandTree,
    service_factory: ServiceFactory,
) -> int:
    options, args = parse_global_options(global_flags, argv)
    configure_logging(options.debug)

    if options.version:
        print_version(out)
        return exit_codes.SUCCESS

    if options.help:
        print_global_usage(out, tree, global_flags)
        return exit_codes.SUCCESS

    # no command specified - trigger help
    if not args:
        args = ["help"]

    resolution = resolve("", args, tree)
    command = resolution.command
    if command is None:
        raise UnknownCommandError(resolution.name, hint=HELP_HINT)

    if command.kind is CommandKind.GROUP:
        raise UsageError(
            f"{resolution.name!r} needs a subcommand",
            command=command,
            name=resolution.name,
        )

    return run(resolution, options, out, service_factory)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    out: Console | None = None,
    commands: Iterable[Command] = (),
    service_factory: ServiceFactory = UpdateService.from_options,
) -> int:
    """Run the updatectl CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    environ:
        Source of ``UPDATECTL_*`` defaults.  ``os.environ`` when ``None``.
    out:
        Output sink for handlers and usage text.  A stdout console when
        ``None``.
    commands:
        Top-level commands to register alongside ``help``.
    service_factory:
        Builds the authenticated service from the global options.

    Returns
    -------
    int
        OS process exit code.
    """
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ
    out = out if out is not None else get_output_console()

    global_flags = build_global_flags(environ)
    tree = build_tree(global_flags, commands)

    # Output is buffered and flushed once, when the block exits.
    with out:
        try:
            return _dispatch(argv, out, global_flags, tree, service_factory)
        except FlagError as exc:
            _report(exc)
            print_global_usage(out, tree, global_flags)
            return exit_codes.USAGE_ERROR
        except UsageError as exc:
            _report(exc)
            print_command_usage(out, exc.command, exc.name)
            return exit_codes.USAGE_ERROR
        except UnknownCommandError as exc:
            console.print(f'{CLI_NAME}: unknown subcommand: "{exc.name}"', markup=False)
            console.print(exc.hint or HELP_HINT, markup=False)
            return exit_codes.NO_COMMAND
        except ClientConstructionError as exc:
            _report(exc)
            return exit_codes.FATAL_ERROR
        except ApiError as exc:
            _report(exc)
            return exit_codes.API_ERROR


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except UpdatectlError as exc:
        _report(exc)
        sys.exit(exit_codes.API_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

"""Global options — environment defaults overridden by global flags.

The global flag set is parsed before any command is resolved.  Parsing
stops at the first positional token (the command name), so command
flags never collide with global ones.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from updatectl.core.flags import FlagSet
from updatectl.core.models import GlobalOptions

CLI_NAME = "updatectl"
CLI_DESCRIPTION = "updatectl is a command line driven interface to the roller."

DEFAULT_SERVER = "http://localhost:8000"
ENV_PREFIX = "UPDATECTL_"
ENV_SERVER = ENV_PREFIX + "SERVER"
ENV_USER = ENV_PREFIX + "USER"
ENV_KEY = ENV_PREFIX + "KEY"


def build_global_flags(environ: Mapping[str, str]) -> FlagSet:
    """Declare the global flags with defaults taken from *environ*."""
    flags = FlagSet(CLI_NAME)
    flags.string("server", environ.get(ENV_SERVER) or DEFAULT_SERVER, "Update server to connect to")
    flags.switch("debug", "Output debugging info to stderr")
    flags.switch("version", "Print version information and exit.")
    flags.switch("help", "Print usage information and exit.")
    flags.string("user", environ.get(ENV_USER, ""), "API Username")
    flags.string("key", environ.get(ENV_KEY, ""), "API Key", secret=True)
    return flags


def parse_global_options(flags: FlagSet, argv: Sequence[str]) -> tuple[GlobalOptions, list[str]]:
    """Parse *argv* with the global *flags*.

    Returns
    -------
    tuple[GlobalOptions, list[str]]
        The options and the arguments from the command name onwards.

    Raises
    ------
    FlagError
        On an unknown or malformed global flag.
    """
    remaining = flags.parse(argv)
    options = GlobalOptions(
        server=flags["server"],
        user=flags["user"],
        key=flags["key"],
        debug=flags["debug"],
        version=flags["version"],
        help=flags["help"],
    )
    return options, remaining

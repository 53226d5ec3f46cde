"""Core layer — the command tree, flag binding, and resolution.

Rules
-----
* No ``print()`` calls.
* No network I/O.
* No imports from ``cli`` or ``infra``.
"""

from updatectl.core.flags import FlagSet, LiteralParser, NullableString, TriStateBool
from updatectl.core.models import Command, CommandKind, GlobalOptions, Resolution
from updatectl.core.protocols import ApiService, Handler, OutputSink
from updatectl.core.resolver import lookup, resolve

__all__: list[str] = [
    "ApiService",
    "Command",
    "CommandKind",
    "FlagSet",
    "GlobalOptions",
    "Handler",
    "LiteralParser",
    "NullableString",
    "OutputSink",
    "Resolution",
    "TriStateBool",
    "lookup",
    "resolve",
]

"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
Handlers return these too.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed without error."""

API_ERROR: int = 1
"""A call to the update service failed."""

USAGE_ERROR: int = 2
"""Bad flags or arguments.  The command's usage text is printed."""

NO_COMMAND: int = 3
"""No registered command matched the arguments."""

FATAL_ERROR: int = 4
"""The authenticated service client could not be constructed."""

UNEXPECTED_ERROR: int = 70
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

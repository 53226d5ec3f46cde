"""Custom exception hierarchy for updatectl.

All exceptions that cross layer boundaries must inherit from
:class:`UpdatectlError`.  Raw ``httpx`` and ``argparse`` exceptions must
NEVER propagate beyond the layer that produced them — they are caught
and re-raised as a typed subclass defined here.

Hierarchy
---------
UpdatectlError
├── FlagError
│   └── FlagValueError
├── UsageError
├── UnknownCommandError
├── ApiError
└── ClientConstructionError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from updatectl.core.models import Command


class UpdatectlError(Exception):
    """Base exception for all updatectl errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Flag parsing ----------------------------------------------------------

class FlagError(UpdatectlError):
    """Raised when a flag set cannot bind the given arguments."""


class FlagValueError(FlagError, ValueError):
    """Raised when a settable flag value rejects its input literal."""


# --- Command resolution ----------------------------------------------------

class UsageError(UpdatectlError):
    """Raised when a command is invoked with an invalid shape.

    Carries the offending command and the full space-joined name it was
    reached under, so the boundary can print *that* command's usage.
    """

    def __init__(
        self,
        message: str,
        *,
        command: Command,
        name: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.command: Command = command
        self.name: str = name


class UnknownCommandError(UpdatectlError):
    """Raised when no registered command matches the given name."""

    def __init__(self, name: str, *, hint: str | None = None) -> None:
        super().__init__(f"unknown subcommand: {name!r}", hint=hint)
        self.name: str = name


# --- Remote service --------------------------------------------------------

class ApiError(UpdatectlError):
    """Raised when a call to the update service fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int | None = status_code


class ClientConstructionError(UpdatectlError):
    """Raised when the authenticated service client cannot be built at all."""

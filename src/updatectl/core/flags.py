"""Per-command flag sets and settable flag values.

A :class:`FlagSet` binds the flags of exactly one command.  Parsing
stops at the first positional token: everything from there on is left
in :attr:`FlagSet.args` for the next level of command resolution (or
for the handler).  Unknown and malformed flags raise
:class:`~updatectl.exceptions.FlagError`.

Two settable value types are provided for flags where "never given"
must be distinguishable from "given with the default value":

* :class:`NullableString`
* :class:`TriStateBool` — backed by a :class:`LiteralParser`
"""

from __future__ import annotations

import argparse
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from updatectl.exceptions import FlagError, FlagValueError

T = TypeVar("T")

FALSE_LITERALS: tuple[str, ...] = ("0", "f", "false", "FALSE", "False")
TRUE_LITERALS: tuple[str, ...] = ("1", "t", "true", "TRUE", "True")

_REMAINING = "_remaining"


# ---------------------------------------------------------------------------
# Settable values
# ---------------------------------------------------------------------------

class SettableValue(Protocol):
    """Contract for adapter-valued flags."""

    def set(self, raw: str) -> None:
        ...  # pragma: no cover

    def __str__(self) -> str:
        ...  # pragma: no cover


class LiteralParser(Generic[T]):
    """Maps an explicit, case-sensitive set of literals to values.

    Parameters
    ----------
    mapping:
        Accepted literal → parsed value.  Insertion order is kept for
        error messages.
    """

    def __init__(self, mapping: Mapping[str, T]) -> None:
        self._mapping: dict[str, T] = dict(mapping)

    @property
    def literals(self) -> tuple[str, ...]:
        return tuple(self._mapping)

    def parse(self, raw: str) -> T:
        """Return the value mapped to *raw*.

        Raises
        ------
        FlagValueError
            When *raw* is not one of the accepted literals.
        """
        try:
            return self._mapping[raw]
        except KeyError:
            raise FlagValueError(
                f"invalid value {raw!r}: must be one of {list(self.literals)}",
            ) from None


BOOL_LITERALS: LiteralParser[bool] = LiteralParser(
    {
        **{literal: False for literal in FALSE_LITERALS},
        **{literal: True for literal in TRUE_LITERALS},
    }
)


class NullableString:
    """A string flag value that remembers whether it was ever set."""

    def __init__(self) -> None:
        self.value: str | None = None

    @property
    def is_set(self) -> bool:
        return self.value is not None

    def set(self, raw: str) -> None:
        self.value = raw

    def __str__(self) -> str:
        return self.value if self.value is not None else ""

    def __repr__(self) -> str:
        return f"NullableString({self.value!r})"


class TriStateBool:
    """A boolean flag value that is unset, true, or false.

    Only the literals in :data:`FALSE_LITERALS` and :data:`TRUE_LITERALS`
    are accepted.  A rejected literal raises and leaves the current value
    untouched; an unset value never silently becomes ``False``.
    """

    def __init__(self, parser: LiteralParser[bool] = BOOL_LITERALS) -> None:
        self.value: bool | None = None
        self._parser: LiteralParser[bool] = parser

    @property
    def is_set(self) -> bool:
        return self.value is not None

    def set(self, raw: str) -> None:
        self.value = self._parser.parse(raw)

    def __str__(self) -> str:
        if self.value is None:
            return ""
        return "true" if self.value else "false"

    def __repr__(self) -> str:
        return f"TriStateBool({self.value!r})"


# ---------------------------------------------------------------------------
# argparse plumbing
# ---------------------------------------------------------------------------

class _FlagParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of printing and exiting."""

    def error(self, message: str) -> Any:  # type: ignore[override]
        raise FlagError(message)


class _SetValueAction(argparse.Action):
    """Feeds the raw option argument into a :class:`SettableValue`."""

    def __init__(self, option_strings: list[str], dest: str, *, target: SettableValue, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)
        self.target = target

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        try:
            self.target.set(values)
        except FlagValueError as exc:
            raise argparse.ArgumentError(self, str(exc)) from exc
        setattr(namespace, self.dest, self.target)


class _SwitchAction(argparse.Action):
    """Stores a boolean parsed from the option argument.

    A bare switch reaches argparse as ``--name=true`` (see
    :meth:`FlagSet._normalize`), so this action always sees a literal.
    """

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        try:
            setattr(namespace, self.dest, BOOL_LITERALS.parse(values))
        except FlagValueError as exc:
            raise argparse.ArgumentError(self, str(exc)) from exc


# ---------------------------------------------------------------------------
# Flag set
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Flag:
    """Display description of one declared flag."""

    name: str
    default: str
    help: str
    takes_value: bool = True

    @property
    def option(self) -> str:
        return f"--{self.name}"


class FlagSet:
    """The flags owned by a single command.

    Usage::

        flags = FlagSet("app list")
        flags.integer("limit", 20, "Maximum number of apps to list")
        flags.parse(["--limit", "5", "extra"])
        flags["limit"]   # 5
        flags.args       # ["extra"]
    """

    def __init__(self, name: str = "") -> None:
        self.name: str = name
        self._parser = _FlagParser(
            prog=name or None,
            add_help=False,
            allow_abbrev=False,
            exit_on_error=False,
        )
        self._parser.add_argument(_REMAINING, nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
        self._flags: dict[str, Flag] = {}
        self._values: argparse.Namespace = self._parser.parse_args([])
        self.args: list[str] = []
        self.parsed: bool = False

    # -- declaration -----------------------------------------------------

    def string(self, name: str, default: str = "", help: str = "", *, secret: bool = False) -> None:
        """Declare a string flag; a *secret* default is hidden from usage output."""
        self._declare(Flag(name, "" if secret else default, help), default=default)

    def integer(self, name: str, default: int = 0, help: str = "") -> None:
        self._declare(Flag(name, str(default), help), type=int, default=default)

    def switch(self, name: str, help: str = "") -> None:
        """Declare a boolean flag.

        Given bare it is true; ``--name=<literal>`` accepts the
        :data:`BOOL_LITERALS`, so ``--debug=false`` is valid.
        """
        self._declare(Flag(name, "false", help, takes_value=False), action=_SwitchAction, default=False)

    def value(self, name: str, target: SettableValue, help: str = "") -> None:
        """Declare a flag bound to a settable value such as :class:`TriStateBool`."""
        self._declare(
            Flag(name, str(target), help),
            action=_SetValueAction,
            target=target,
            default=target,
        )

    def _declare(self, flag: Flag, **kwargs: Any) -> None:
        if flag.name in self._flags:
            raise ValueError(f"flag redefined: {flag.name}")
        self._flags[flag.name] = flag
        self._parser.add_argument(flag.option, dest=flag.name, **kwargs)
        self._values = self._parser.parse_args([])

    # -- parsing ---------------------------------------------------------

    def parse(self, arguments: Sequence[str]) -> list[str]:
        """Bind flags from *arguments* and return the remaining positionals.

        Raises
        ------
        FlagError
            On an unknown flag, a missing option argument, or a value
            the flag's type rejects.
        """
        try:
            namespace = self._parser.parse_args(self._normalize(arguments))
        except argparse.ArgumentError as exc:
            raise FlagError(str(exc)) from exc

        remaining: list[str] = list(getattr(namespace, _REMAINING))
        if remaining and remaining[0] == "--":
            remaining = remaining[1:]
        delattr(namespace, _REMAINING)

        self._values = namespace
        self.args = remaining
        self.parsed = True
        return remaining

    def _normalize(self, arguments: Sequence[str]) -> list[str]:
        """Rewrite the leading flags into ``--name=value`` form.

        A value flag takes the next token as its value even when that
        token starts with ``-``; a bare switch becomes ``--name=true``.
        Rewriting stops at the first positional token or ``--``.
        """
        tokens = list(arguments)
        normalized: list[str] = []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if token == "--" or token == "-" or not token.startswith("-"):
                break
            flag = self._flags.get(token[2:]) if token.startswith("--") else None
            if flag is None:
                normalized.append(token)
            elif not flag.takes_value:
                normalized.append(f"{token}=true")
            elif index + 1 < len(tokens):
                index += 1
                normalized.append(f"{token}={tokens[index]}")
            else:
                normalized.append(token)
            index += 1
        return normalized + tokens[index:]

    # -- access ----------------------------------------------------------

    def __getitem__(self, name: str) -> Any:
        if name not in self:
            raise KeyError(name)
        return getattr(self._values, name)

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __iter__(self) -> Iterator[Flag]:
        """Yield declared flags in lexical order."""
        for name in sorted(self._flags):
            yield self._flags[name]

    def __len__(self) -> int:
        return len(self._flags)

    def __repr__(self) -> str:
        return f"FlagSet({self.name!r}, flags={sorted(self._flags)})"

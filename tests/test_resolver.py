"""Tests for command resolution (core/resolver.py) and the tree models.

Coverage:
* Unknown first token resolves to nothing and reports that token.
* Multi-level paths resolve to the deepest node with the full name.
* Flag failures raise ``UsageError`` naming the failing node.
* Parent and child flag scopes stay disjoint.
* Hybrid nodes fall back to their own handler.
"""

from __future__ import annotations

from typing import Any

import pytest

from tests.conftest import Calls, build_sample_commands
from updatectl.core.models import Command, CommandKind
from updatectl.core.resolver import join_name, lookup, resolve
from updatectl.exceptions import UsageError


def _noop(args: list[str], service: Any, out: Any) -> int:
    return 0


@pytest.fixture
def commands() -> list[Command]:
    return build_sample_commands(Calls())


def _by_name(commands: list[Command], name: str) -> Command:
    return next(command for command in commands if command.name == name)


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

class TestResolve:
    def test_empty_args(self, commands: list[Command]) -> None:
        resolution = resolve("", [], commands)
        assert resolution.command is None
        assert resolution.name == ""

    def test_empty_args_keeps_path(self, commands: list[Command]) -> None:
        assert resolve("app", [], commands).name == "app"

    @pytest.mark.parametrize("argv", [["bogus"], ["bogus", "list"], ["list"], ["App"]])
    def test_unknown_first_token(self, commands: list[Command], argv: list[str]) -> None:
        resolution = resolve("", argv, commands)
        assert resolution.command is None
        assert resolution.name == argv[0]

    def test_multi_level_path(self, commands: list[Command]) -> None:
        resolution = resolve("", ["app", "list"], commands)
        assert resolution.command is not None
        assert resolution.command.name == "list"
        assert resolution.name == "app list"

    def test_positionals_reach_the_leaf(self, commands: list[Command]) -> None:
        resolution = resolve("", ["app", "create", "web"], commands)
        assert resolution.name == "app create"
        assert resolution.args == ["web"]

    def test_group_without_subcommand(self, commands: list[Command]) -> None:
        resolution = resolve("", ["app"], commands)
        assert resolution.command is _by_name(commands, "app")
        assert resolution.name == "app"
        assert not resolution.command.is_runnable

    def test_unmatched_subcommand_falls_back_to_parent(self, commands: list[Command]) -> None:
        resolution = resolve("", ["app", "bogus"], commands)
        assert resolution.command is _by_name(commands, "app")
        assert resolution.name == "app"

    def test_hybrid_runs_own_handler_with_positional(self, commands: list[Command]) -> None:
        resolution = resolve("", ["channel", "stable"], commands)
        assert resolution.command is _by_name(commands, "channel")
        assert resolution.args == ["stable"]

    def test_hybrid_child_takes_precedence(self, commands: list[Command]) -> None:
        resolution = resolve("", ["channel", "list"], commands)
        assert resolution.name == "channel list"
        assert resolution.command is not None
        assert resolution.command.handler is not _by_name(commands, "channel").handler

    def test_first_registration_wins(self) -> None:
        first = Command(name="dup", handler=_noop)
        second = Command(name="dup", handler=_noop)
        assert resolve("", ["dup"], [first, second]).command is first

    def test_nested_path_prefix(self, commands: list[Command]) -> None:
        app = _by_name(commands, "app")
        resolution = resolve("app", ["list"], app.subcommands)
        assert resolution.name == "app list"


# ---------------------------------------------------------------------------
# Flag scopes
# ---------------------------------------------------------------------------

class TestFlagScopes:
    def test_each_level_parses_its_own_flags(self, commands: list[Command]) -> None:
        resolution = resolve("", ["app", "--verbose", "list", "--limit", "3", "extra"], commands)
        app = _by_name(commands, "app")
        assert resolution.command is not None
        assert app.flags["verbose"] is True
        assert resolution.command.flags["limit"] == 3
        assert resolution.args == ["extra"]

    def test_child_flag_at_parent_level_is_a_usage_error(self, commands: list[Command]) -> None:
        with pytest.raises(UsageError) as exc_info:
            resolve("", ["app", "--limit", "3", "list"], commands)
        assert exc_info.value.command is _by_name(commands, "app")
        assert exc_info.value.name == "app"

    def test_parent_flag_at_child_level_is_a_usage_error(self, commands: list[Command]) -> None:
        with pytest.raises(UsageError) as exc_info:
            resolve("", ["app", "list", "--verbose"], commands)
        assert exc_info.value.command.name == "list"
        assert exc_info.value.name == "app list"

    def test_bad_value_names_the_leaf(self, commands: list[Command]) -> None:
        with pytest.raises(UsageError) as exc_info:
            resolve("", ["app", "list", "--published", "yes"], commands)
        assert exc_info.value.name == "app list"
        assert isinstance(exc_info.value.__cause__, Exception)


# ---------------------------------------------------------------------------
# lookup (used by ``help``)
# ---------------------------------------------------------------------------

class TestLookup:
    def test_finds_nested_command_without_parsing(self, commands: list[Command]) -> None:
        found = lookup(["app", "list"], commands)
        assert found.name == "app list"
        assert found.command is not None
        assert not found.command.flags.parsed

    def test_no_fallback_to_parent(self, commands: list[Command]) -> None:
        found = lookup(["app", "bogus"], commands)
        assert found.command is None
        assert found.name == "app bogus"

    def test_join_name(self) -> None:
        assert join_name("", "app") == "app"
        assert join_name("app", "list") == "app list"


# ---------------------------------------------------------------------------
# Command model
# ---------------------------------------------------------------------------

class TestCommand:
    def test_kinds(self, commands: list[Command]) -> None:
        app = _by_name(commands, "app")
        assert app.kind is CommandKind.GROUP
        assert app.subcommands[0].kind is CommandKind.LEAF
        assert _by_name(commands, "channel").kind is CommandKind.HYBRID

    @pytest.mark.parametrize("name", ["", "app list"])
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(ValueError):
            Command(name=name, handler=_noop)

    def test_requires_handler_or_subcommands(self) -> None:
        with pytest.raises(ValueError):
            Command(name="empty")

    def test_flag_sets_are_not_shared(self) -> None:
        first = Command(name="a", handler=_noop)
        second = Command(name="b", handler=_noop)
        assert first.flags is not second.flags
        assert first.flags.name == "a"

    def test_is_frozen(self) -> None:
        command = Command(name="a", handler=_noop)
        with pytest.raises(AttributeError):
            command.name = "b"  # type: ignore[misc]

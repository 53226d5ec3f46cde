"""Shared pytest fixtures and configuration for the updatectl test suite.

Guidelines
----------
* No network access in any test — the service is faked at the
  factory boundary, HTTP at the transport boundary.
* Output is captured through an in-memory Rich console.
* Every test builds its own command tree; flag sets are never shared.
"""

from __future__ import annotations

import io
from typing import Any

import pytest
from rich.console import Console

from updatectl.cli import exit_codes
from updatectl.core.flags import FlagSet, TriStateBool
from updatectl.core.models import Command, GlobalOptions
from updatectl.exceptions import ApiError


# ---------------------------------------------------------------------------
# Output capture
# ---------------------------------------------------------------------------

@pytest.fixture
def out() -> Console:
    """Plain, wide, in-memory output console."""
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)


def text_of(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Fake service
# ---------------------------------------------------------------------------

class FakeService:
    """Stands in for :class:`~updatectl.infra.service.UpdateService`."""

    def __init__(self, options: GlobalOptions) -> None:
        self.options = options
        self.base_path = options.server + "/_ah/api/update/v1/"
        self.closed = False

    def request(self, method: str, path: str, *, params: Any = None, json: Any = None) -> Any:
        return {"method": method, "path": path}

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def services() -> list[FakeService]:
    """Every service the factory fixture has built, in order."""
    return []


@pytest.fixture
def service_factory(services: list[FakeService]):  # type: ignore[no-untyped-def]
    def factory(options: GlobalOptions) -> FakeService:
        service = FakeService(options)
        services.append(service)
        return service

    return factory


# ---------------------------------------------------------------------------
# Sample command tree
# ---------------------------------------------------------------------------

class Calls:
    """Records handler invocations as ``(name, args)`` tuples."""

    def __init__(self) -> None:
        self.log: list[tuple[str, list[str]]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.log]


def build_sample_commands(calls: Calls) -> list[Command]:
    """Build ``app {list, create, fail}`` and the hybrid ``channel {list}``.

    ``app list`` owns ``--limit`` and ``--published``; ``app`` owns
    ``--verbose``.
    """

    def app_list(args: list[str], service: Any, out: Any) -> int:
        calls.log.append(("app list", args))
        out.print(
            f"limit={list_flags['limit']} published={list_flags['published']}",
            markup=False,
        )
        return exit_codes.SUCCESS

    def app_create(args: list[str], service: Any, out: Any) -> int:
        calls.log.append(("app create", args))
        if len(args) != 1:
            out.print("exactly one app name is required", markup=False)
            return exit_codes.USAGE_ERROR
        out.print(f"created {args[0]}", markup=False)
        return exit_codes.SUCCESS

    def app_fail(args: list[str], service: Any, out: Any) -> int:
        calls.log.append(("app fail", args))
        raise ApiError("GET apps failed: 500 backend down", status_code=500)

    def channel(args: list[str], service: Any, out: Any) -> int:
        calls.log.append(("channel", args))
        return exit_codes.SUCCESS

    def channel_list(args: list[str], service: Any, out: Any) -> int:
        calls.log.append(("channel list", args))
        return exit_codes.SUCCESS

    list_flags = FlagSet()
    list_flags.integer("limit", 20, "Maximum number of apps to list")
    list_flags.value("published", TriStateBool(), "Only published (or unpublished) apps")

    app_flags = FlagSet()
    app_flags.switch("verbose", "Print more detail")

    return [
        Command(
            name="app",
            summary="Manage applications",
            description="Create, list and inspect applications.",
            flags=app_flags,
            subcommands=(
                Command(
                    name="list",
                    summary="List all applications",
                    flags=list_flags,
                    handler=app_list,
                ),
                Command(
                    name="create",
                    summary="Create an application",
                    usage="<name>",
                    handler=app_create,
                ),
                Command(name="fail", summary="Always fails", handler=app_fail),
            ),
        ),
        Command(
            name="channel",
            summary="Show or manage channels",
            handler=channel,
            subcommands=(Command(name="list", summary="List channels", handler=channel_list),),
        ),
    ]


@pytest.fixture
def calls() -> Calls:
    return Calls()


@pytest.fixture
def sample_commands(calls: Calls) -> list[Command]:
    return build_sample_commands(calls)

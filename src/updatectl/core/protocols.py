"""Protocols (interfaces) consumed by the core layer.

These define the contracts between the dispatch machinery and the
command handlers it runs.  Core code depends ONLY on these protocols —
never on ``rich`` or ``httpx`` directly.
"""

from __future__ import annotations

from typing import Any, Protocol


class OutputSink(Protocol):
    """Where handlers write user-facing output.

    A ``rich.console.Console`` satisfies this structurally.
    """

    def print(self, *objects: Any, **kwargs: Any) -> None:
        ...  # pragma: no cover


class ApiService(Protocol):
    """Authenticated handle on the update service."""

    base_path: str

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Issue a request relative to :attr:`base_path` and return decoded JSON.

        Raises
        ------
        ApiError
            When the request fails at the transport or HTTP level.
        """
        ...  # pragma: no cover

    def close(self) -> None:
        ...  # pragma: no cover


class Handler(Protocol):
    """A terminal command implementation.

    Receives the positional arguments left after flag parsing, the
    authenticated service (``None`` for commands declared with
    ``needs_service=False``), and the output sink.  The returned integer is
    the process exit code.
    """

    def __call__(self, args: list[str], service: ApiService | None, out: OutputSink) -> int:
        ...  # pragma: no cover

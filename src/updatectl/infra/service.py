"""``httpx``-backed handle on the update service.

This module is the **only** place in the codebase that creates an
``httpx.Client``.  All ``httpx`` exceptions are caught here and
re-raised as :class:`~updatectl.exceptions.ApiError` — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from updatectl.core.models import GlobalOptions
from updatectl.exceptions import ApiError, ClientConstructionError
from updatectl.infra.hawk import HawkCredentials, HawkTransport

logger = logging.getLogger(__name__)

API_PATH = "/_ah/api/update/v1/"
DEFAULT_TIMEOUT = 30.0


class UpdateService:
    """Concrete :class:`~updatectl.core.protocols.ApiService`.

    Usage::

        with UpdateService.from_options(options) as service:
            apps = service.request("GET", "apps")
    """

    def __init__(self, client: httpx.Client, base_path: str) -> None:
        self._client = client
        self.base_path: str = base_path

    @classmethod
    def from_options(
        cls,
        options: GlobalOptions,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> UpdateService:
        """Build a Hawk-authenticated service for ``options.server``.

        Raises
        ------
        ClientConstructionError
            When the server URL cannot serve as a base path.
        """
        base_path = options.server + API_PATH
        try:
            url = httpx.URL(base_path)
        except httpx.InvalidURL as exc:
            raise ClientConstructionError(
                f"invalid server URL {options.server!r}: {exc}",
                hint="Pass --server with an http:// or https:// URL.",
            ) from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ClientConstructionError(
                f"invalid server URL {options.server!r}",
                hint="Pass --server with an http:// or https:// URL.",
            )

        credentials = HawkCredentials(options.user, options.key)
        client = httpx.Client(
            transport=HawkTransport(credentials, transport),
            timeout=DEFAULT_TIMEOUT,
        )
        logger.debug("update service at %s", base_path)
        return cls(client, base_path)

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request relative to :attr:`base_path`.

        Returns
        -------
        Any
            The decoded JSON body, or ``None`` when the body is empty.

        Raises
        ------
        ApiError
            On transport failure or an HTTP status of 400 and above.
        """
        url = self.base_path + path.lstrip("/")
        try:
            response = self._client.request(method, url, params=params, json=json)
        except httpx.HTTPError as exc:
            raise ApiError(
                f"{method} {url} failed: {exc}",
                hint="Check that --server points at a running update service.",
            ) from exc

        if response.is_error:
            raise ApiError(
                f"{method} {url} failed: {response.status_code} {_error_message(response)}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"{method} {url} returned a non-JSON body",
                status_code=response.status_code,
            ) from exc

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> UpdateService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _error_message(response: httpx.Response) -> str:
    """Extract the service's error message from a Google Endpoints envelope."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.reason_phrase

"""Hawk request signing as an ``httpx`` transport decorator.

:class:`HawkTransport` wraps another transport and, for every outbound
request, computes a Hawk 1.0 ``Authorization`` header from the request
method, URL, a wall-clock timestamp, and a fresh nonce, keyed with the
caller's credentials.  Callers build an ``httpx.Client`` on top of it
and never see the signing.

Rules
-----
* Stateless between requests apart from timestamp and nonce.
* Never fails pre-flight: empty credentials are signed like any other.
* The key is never logged.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx

logger = logging.getLogger(__name__)

HEADER_VERSION = "1"
DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443}


# ---------------------------------------------------------------------------
# Credentials and artifacts
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HawkCredentials:
    """Hawk id/key pair plus the digest the MAC is computed with."""

    id: str
    key: str = field(repr=False)
    algorithm: str = "sha256"


@dataclass(frozen=True, slots=True)
class HawkArtifacts:
    """Everything that goes into one request's MAC."""

    method: str
    resource: str
    host: str
    port: int
    ts: int
    nonce: str
    hash: str = ""
    ext: str = ""

    def normalized(self, kind: str = "header") -> str:
        """Return the Hawk normalized request string."""
        return "".join(
            f"{line}\n"
            for line in (
                f"hawk.{HEADER_VERSION}.{kind}",
                str(self.ts),
                self.nonce,
                self.method.upper(),
                self.resource,
                self.host.lower(),
                str(self.port),
                self.hash,
                self.ext,
            )
        )


def generate_nonce() -> str:
    """Return a fresh 8-character nonce."""
    return base64.b64encode(secrets.token_bytes(6)).decode("ascii")


def calculate_mac(credentials: HawkCredentials, artifacts: HawkArtifacts) -> str:
    digest = hmac.new(
        credentials.key.encode("utf-8"),
        artifacts.normalized().encode("utf-8"),
        credentials.algorithm,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def calculate_payload_hash(payload: bytes, content_type: str, algorithm: str = "sha256") -> str:
    """Hash a request body the way Hawk's optional payload validation expects."""
    mime = content_type.split(";", 1)[0].strip().lower()
    digest = hashlib.new(algorithm)
    digest.update(f"hawk.{HEADER_VERSION}.payload\n{mime}\n".encode("utf-8"))
    digest.update(payload)
    digest.update(b"\n")
    return base64.b64encode(digest.digest()).decode("ascii")


def artifacts_for(request: httpx.Request, ts: int, nonce: str, *, payload_hash: str = "", ext: str = "") -> HawkArtifacts:
    """Collect the signed fields of *request*."""
    url = request.url
    return HawkArtifacts(
        method=request.method,
        resource=url.raw_path.decode("ascii"),
        host=url.host,
        port=url.port or DEFAULT_PORTS.get(url.scheme, 80),
        ts=ts,
        nonce=nonce,
        hash=payload_hash,
        ext=ext,
    )


def authorization_header(credentials: HawkCredentials, artifacts: HawkArtifacts) -> str:
    """Format the ``Authorization`` header value for *artifacts*."""
    attributes = [
        ("id", credentials.id),
        ("ts", str(artifacts.ts)),
        ("nonce", artifacts.nonce),
    ]
    if artifacts.hash:
        attributes.append(("hash", artifacts.hash))
    if artifacts.ext:
        attributes.append(("ext", artifacts.ext))
    attributes.append(("mac", calculate_mac(credentials, artifacts)))
    return "Hawk " + ", ".join(f'{name}="{_escape(value)}"' for name, value in attributes)


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class HawkTransport(httpx.BaseTransport):
    """Sign every request with Hawk, then hand it to the wrapped transport.

    Parameters
    ----------
    credentials:
        The Hawk id/key pair.
    transport:
        Transport that actually sends requests.  Defaults to
        ``httpx.HTTPTransport()``.
    clock:
        Source of wall-clock seconds.
    nonce_factory:
        Source of per-request nonces.
    hash_payload:
        Include the optional payload hash in the signature.
    ext:
        Application-specific data to sign and send along.
    """

    def __init__(
        self,
        credentials: HawkCredentials,
        transport: httpx.BaseTransport | None = None,
        *,
        clock: Callable[[], float] = time.time,
        nonce_factory: Callable[[], str] = generate_nonce,
        hash_payload: bool = False,
        ext: str = "",
    ) -> None:
        self._credentials = credentials
        self._transport: httpx.BaseTransport = transport or httpx.HTTPTransport()
        self._clock = clock
        self._nonce_factory = nonce_factory
        self._hash_payload = hash_payload
        self._ext = ext

    def sign(self, request: httpx.Request) -> str:
        """Compute and attach the ``Authorization`` header to *request*."""
        payload_hash = ""
        if self._hash_payload:
            payload_hash = calculate_payload_hash(
                request.read(),
                request.headers.get("content-type", ""),
                self._credentials.algorithm,
            )
        artifacts = artifacts_for(
            request,
            int(self._clock()),
            self._nonce_factory(),
            payload_hash=payload_hash,
            ext=self._ext,
        )
        header = authorization_header(self._credentials, artifacts)
        request.headers["Authorization"] = header
        return header

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.sign(request)
        logger.debug("%s %s (hawk id=%r)", request.method, request.url, self._credentials.id)
        response = self._transport.handle_request(request)
        logger.debug("%s %s -> %d", request.method, request.url, response.status_code)
        return response

    def close(self) -> None:
        self._transport.close()

"""Infrastructure layer — HTTP transport and the update service client.

Every raw ``httpx`` exception must be caught here and re-raised as an
:class:`~updatectl.exceptions.UpdatectlError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from updatectl.infra.hawk import HawkCredentials, HawkTransport, generate_nonce
from updatectl.infra.service import API_PATH, UpdateService

__all__: list[str] = [
    "API_PATH",
    "HawkCredentials",
    "HawkTransport",
    "UpdateService",
    "generate_nonce",
]

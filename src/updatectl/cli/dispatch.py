"""Dispatch runner — build the service if needed, run the handler, map its exit code.

A handler's return value *is* the process exit code.  The single
translation performed here: a handler returning
:data:`~updatectl.cli.exit_codes.USAGE_ERROR` gets its command's usage
block printed after its own output.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from updatectl.cli import exit_codes
from updatectl.cli.usage import print_command_usage
from updatectl.core.models import GlobalOptions, Resolution
from updatectl.core.protocols import ApiService, OutputSink
from updatectl.infra.service import UpdateService

logger = logging.getLogger(__name__)

ServiceFactory = Callable[[GlobalOptions], ApiService]


def run(
    resolution: Resolution,
    options: GlobalOptions,
    out: OutputSink,
    service_factory: ServiceFactory = UpdateService.from_options,
) -> int:
    """Run the handler of a resolved, runnable command.

    Raises
    ------
    ClientConstructionError
        When *service_factory* cannot build the service.  This is fatal
        and is left to the error boundary.  Commands declared with
        ``needs_service=False`` never call the factory.
    """
    command = resolution.command
    if command is None or command.handler is None:
        raise ValueError(f"{resolution.name!r} is not a runnable command")

    service = service_factory(options) if command.needs_service else None
    try:
        logger.debug("running %r with args %r", resolution.name, resolution.args)
        code = command.handler(resolution.args, service, out)
    finally:
        if service is not None:
            service.close()

    if code == exit_codes.USAGE_ERROR:
        print_command_usage(out, command, resolution.name)
    return code

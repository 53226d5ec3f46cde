"""Allow ``python -m updatectl`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m updatectl`` behaves identically to the ``updatectl``
console script.
"""

from __future__ import annotations

from updatectl.cli.app import cli

if __name__ == "__main__":
    cli()

"""updatectl — command line driven interface to the update service.

Resolves multi-level commands, binds their flags, and dispatches to
handlers that talk to the update API over Hawk-signed HTTP.
"""

from updatectl.version import __version__

__all__: list[str] = ["__version__"]

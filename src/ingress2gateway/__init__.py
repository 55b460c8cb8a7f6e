"""ingress2gateway — print Gateway API resources generated from Ingresses.

A thin command-line front end: it selects an output format, resolves the
namespace scope, and hands both to a pluggable conversion engine.
"""

from ingress2gateway.version import __version__

__all__: list[str] = ["__version__"]

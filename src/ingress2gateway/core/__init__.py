"""Core / service layer — pure orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Every collaborator arrives through a protocol.
"""

from ingress2gateway.core.models import (
    ALLOWED_FORMATS,
    InvocationRequest,
    OutputFormat,
    PrintOptions,
)
from ingress2gateway.core.namespace_filter import resolve_namespace_filter
from ingress2gateway.core.print_service import PrintService
from ingress2gateway.core.protocols import (
    ConversionEngine,
    NamespaceSource,
    ResourcePrinter,
)

__all__: list[str] = [
    "ALLOWED_FORMATS",
    "ConversionEngine",
    "InvocationRequest",
    "NamespaceSource",
    "OutputFormat",
    "PrintOptions",
    "PrintService",
    "ResourcePrinter",
    "resolve_namespace_filter",
]

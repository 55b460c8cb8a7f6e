"""Infrastructure layer — external system integration.

This layer wraps kubeconfig reading (``kubernetes`` client), resource
serialization (PyYAML, json) and conversion-engine discovery
(entry points).  Every raw third-party exception is caught here and
re-raised as an :class:`~ingress2gateway.exceptions.Ingress2GatewayError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output except the printers, which write to the stream
  they are given.
"""

from ingress2gateway.infra.engine import EntryPointConversionEngine, registered_engines
from ingress2gateway.infra.kubeconfig import KubeconfigNamespaceSource
from ingress2gateway.infra.printers import (
    JSONPrinter,
    YAMLPrinter,
    get_resource_printer,
)

__all__: list[str] = [
    "EntryPointConversionEngine",
    "JSONPrinter",
    "KubeconfigNamespaceSource",
    "YAMLPrinter",
    "get_resource_printer",
    "registered_engines",
]

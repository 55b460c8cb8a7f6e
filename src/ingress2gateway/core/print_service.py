"""Core print service — orchestrates one ``print`` invocation.

The service wires flag values into the two resolvers and delegates to
a :class:`~ingress2gateway.core.protocols.ConversionEngine` injected at
construction time.  It is responsible for:

* Selecting the resource printer for the requested format.
* Resolving the namespace filter.
* Invoking the engine with both, exactly once.

Guarantees
----------
* Steps run strictly in that order and stop at the first failure, so a
  bad format or an unreadable kubeconfig never produces partial output.
* Nothing is cached: every :meth:`PrintService.run` resolves afresh.
* Only :class:`~ingress2gateway.exceptions.Ingress2GatewayError`
  subclasses escape.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ingress2gateway.core.models import InvocationRequest, PrintOptions
from ingress2gateway.core.namespace_filter import resolve_namespace_filter
from ingress2gateway.core.protocols import (
    ConversionEngine,
    NamespaceSource,
    ResourcePrinter,
)
from ingress2gateway.exceptions import ConversionError, Ingress2GatewayError

logger = logging.getLogger(__name__)

PrinterFactory = Callable[[str], ResourcePrinter]
"""Maps a format name to a printer; raises ``UnsupportedFormatError``."""


class PrintService:
    """Stateless orchestrator for the ``print`` command.

    Parameters
    ----------
    engine:
        Any callable satisfying the :class:`ConversionEngine` protocol.
    namespace_source:
        Looks up the active-context namespace when no flag decides it.
    printer_factory:
        Selects a :class:`ResourcePrinter` from a format name.
    """

    def __init__(
        self,
        engine: ConversionEngine,
        namespace_source: NamespaceSource,
        printer_factory: PrinterFactory,
    ) -> None:
        self._engine: ConversionEngine = engine
        self._namespace_source: NamespaceSource = namespace_source
        self._printer_factory: PrinterFactory = printer_factory

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, options: PrintOptions) -> InvocationRequest:
        """Resolve *options* into the request handed to the engine.

        Raises
        ------
        UnsupportedFormatError
            If ``options.output_format`` is not a known format.
        ConfigLoadError
            If the namespace must come from kubeconfig and it cannot be read.
        """
        printer = self._printer_factory(options.output_format)
        namespace_filter = resolve_namespace_filter(
            options.namespace,
            options.all_namespaces,
            self._namespace_source,
        )
        logger.debug(
            "Resolved printer=%s namespace_filter=%r",
            type(printer).__name__,
            namespace_filter,
        )
        return InvocationRequest(printer=printer, namespace_filter=namespace_filter)

    def run(self, options: PrintOptions) -> None:
        """Resolve *options* and invoke the conversion engine.

        Raises
        ------
        UnsupportedFormatError
            If ``options.output_format`` is not a known format.
        ConfigLoadError
            If the active-context namespace cannot be determined.
        EngineUnavailableError
            If no conversion engine can be loaded.
        ConversionError
            If the engine fails with a foreign exception.
        """
        request = self.resolve(options)
        try:
            self._engine(request.printer, request.namespace_filter)
        except Ingress2GatewayError:
            raise
        except Exception as exc:
            raise ConversionError(f"Conversion failed: {exc}") from exc

"""Entry-point backed :class:`~ingress2gateway.core.protocols.ConversionEngine`.

Conversion engines are installed as separate distributions that
register a callable under the ``ingress2gateway.engines`` entry-point
group::

    [project.entry-points."ingress2gateway.engines"]
    default = "my_engine:run"

The callable receives ``(printer, namespace_filter)`` and prints the
generated Gateway API resources itself.

Lookup is deferred until the engine is actually invoked, so format and
namespace errors are always reported before a missing engine is.
"""

from __future__ import annotations

import logging
from importlib.metadata import EntryPoint, entry_points
from typing import Any

from ingress2gateway.core.protocols import ResourcePrinter
from ingress2gateway.exceptions import EngineUnavailableError

logger = logging.getLogger(__name__)

ENGINE_GROUP: str = "ingress2gateway.engines"


def registered_engines() -> list[EntryPoint]:
    """Return every engine entry point, sorted by name."""
    return sorted(entry_points(group=ENGINE_GROUP), key=lambda ep: ep.name)


class EntryPointConversionEngine:
    """Load and call a conversion engine registered as an entry point.

    Parameters
    ----------
    name:
        Entry-point name to use.  When ``None``, exactly one engine must
        be installed.
    """

    def __init__(self, name: str | None = None) -> None:
        self._name = name

    def load(self) -> Any:
        """Import and return the selected engine callable.

        Raises
        ------
        EngineUnavailableError
            When no engine, or no engine with the requested name, is
            installed, when several are installed and none was named, or
            when the entry point cannot be imported.
        """
        engines = registered_engines()
        if not engines:
            raise EngineUnavailableError(
                "No conversion engine is installed.",
                hint=f"Install a package that provides the '{ENGINE_GROUP}' entry point.",
            )

        names = [ep.name for ep in engines]
        if self._name is not None:
            selected = next((ep for ep in engines if ep.name == self._name), None)
            if selected is None:
                raise EngineUnavailableError(
                    f"Conversion engine '{self._name}' is not installed.",
                    hint=f"Installed engines: {', '.join(names)}",
                )
        elif len(engines) > 1:
            raise EngineUnavailableError(
                "Several conversion engines are installed.",
                hint=f"Choose one with --engine: {', '.join(names)}",
            )
        else:
            selected = engines[0]

        logger.debug("Using conversion engine %s (%s)", selected.name, selected.value)
        try:
            engine = selected.load()
        except Exception as exc:
            raise EngineUnavailableError(
                f"Conversion engine '{selected.name}' failed to load: {exc}",
            ) from exc

        if not callable(engine):
            raise EngineUnavailableError(
                f"Conversion engine '{selected.name}' is not callable.",
            )
        return engine

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def __call__(self, printer: ResourcePrinter, namespace_filter: str) -> None:
        engine = self.load()
        engine(printer, namespace_filter)

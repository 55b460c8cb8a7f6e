"""Domain models for ingress2gateway.

All models are **frozen** dataclasses or enums — immutable values built
fresh for every command invocation and never shared between runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ingress2gateway.core.protocols import ResourcePrinter


# ---------------------------------------------------------------------------
# Output format
# ---------------------------------------------------------------------------

class OutputFormat(str, Enum):
    """Serialization formats the ``print`` command can emit."""

    YAML = "yaml"
    JSON = "json"


ALLOWED_FORMATS: tuple[str, ...] = tuple(sorted(fmt.value for fmt in OutputFormat))
"""Format names advertised in ``--output`` help, alphabetically."""

DEFAULT_FORMAT: str = OutputFormat.YAML.value


# ---------------------------------------------------------------------------
# Command configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PrintOptions:
    """Flag values for one ``print`` invocation."""

    output_format: str = DEFAULT_FORMAT
    """Requested format name, unvalidated (``--output``)."""

    namespace: str = ""
    """Explicit namespace restriction (``--namespace``)."""

    all_namespaces: bool = False
    """Ignore every namespace restriction (``--all-namespaces``)."""


# ---------------------------------------------------------------------------
# Engine hand-off
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """The resolved pair passed to the conversion engine."""

    printer: ResourcePrinter
    """Serializer selected from :attr:`PrintOptions.output_format`."""

    namespace_filter: str
    """Namespace to restrict to, or ``""`` for all namespaces."""

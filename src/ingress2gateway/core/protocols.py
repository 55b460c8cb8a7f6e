"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so every collaborator can be replaced by a stub in
tests.
"""

from __future__ import annotations

from typing import Any, Protocol, TextIO


class ResourcePrinter(Protocol):
    """Contract for serializers that render resources as text.

    Any object that implements :meth:`print_obj` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def print_obj(self, obj: Any, stream: TextIO | None = None) -> None:
        """Serialize *obj* and write it to *stream* (standard output by default).

        *obj* is a Kubernetes-style resource: either a plain mapping or
        a model generated by the ``kubernetes`` client.

        Raises
        ------
        TypeError
            When *obj* cannot be converted into a mapping.
        ValueError
            When *obj* carries neither ``apiVersion`` nor ``kind``.
        """
        ...  # pragma: no cover


class NamespaceSource(Protocol):
    """Contract for looking up the namespace of the active context."""

    def active_namespace(self) -> str:
        """Return the namespace of the currently selected context.

        Returns ``""`` when no namespace is configured.  Implementations
        must not cache the result between calls.

        Raises
        ------
        ConfigLoadError
            When the underlying configuration cannot be read or parsed.
        """
        ...  # pragma: no cover


class ConversionEngine(Protocol):
    """Contract for the Ingress → Gateway API conversion backend.

    The engine reads Ingress resources restricted to *namespace_filter*
    (``""`` meaning every namespace), converts them, and prints the
    results to standard output through *printer*.  It returns nothing;
    the caller never inspects its output.
    """

    def __call__(self, printer: ResourcePrinter, namespace_filter: str) -> None:
        ...  # pragma: no cover

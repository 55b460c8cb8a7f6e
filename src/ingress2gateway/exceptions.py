"""Custom exception hierarchy for ingress2gateway.

All exceptions that cross layer boundaries must inherit from
:class:`Ingress2GatewayError`.  Raw third-party exceptions (PyYAML,
the kubernetes client, engine plugins) must NEVER propagate beyond the
infrastructure layer — they are caught and re-raised as a typed
subclass defined here.

Hierarchy
---------
Ingress2GatewayError
├── UnsupportedFormatError
├── ConfigLoadError
├── EngineUnavailableError
└── ConversionError
"""

from __future__ import annotations


class Ingress2GatewayError(Exception):
    """Base exception for all ingress2gateway errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Output format ---------------------------------------------------------

class UnsupportedFormatError(Ingress2GatewayError):
    """Raised when the requested output format is not one we can print."""

    def __init__(self, value: str, *, hint: str | None = None) -> None:
        super().__init__(f"{value} is not a supported output format", hint=hint)
        self.value: str = value
        """The offending format name, verbatim."""


# --- Kubeconfig ------------------------------------------------------------

class ConfigLoadError(Ingress2GatewayError):
    """Raised when the active-context namespace cannot be determined.

    The underlying exception is available as :attr:`cause` and is also
    chained via ``raise ... from``.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.cause: BaseException | None = cause


# --- Conversion engine -----------------------------------------------------

class EngineUnavailableError(Ingress2GatewayError):
    """Raised when no usable conversion engine is registered."""


class ConversionError(Ingress2GatewayError):
    """Raised when the conversion engine fails with a foreign exception."""

"""Resource printers and the output-format selector.

Two serializers satisfy
:class:`~ingress2gateway.core.protocols.ResourcePrinter`:

* :class:`YAMLPrinter` — block-style YAML via PyYAML, one document per
  resource, separated by ``---``.
* :class:`JSONPrinter` — indented JSON, one object per resource.

Resources may be plain mappings or models generated by the
``kubernetes`` client; the latter are converted with the client's own
camelCase serializer so field names match the Kubernetes API.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from typing import Any, TextIO

import yaml
from kubernetes.client import ApiClient

from ingress2gateway.core.models import ALLOWED_FORMATS, OutputFormat
from ingress2gateway.core.protocols import ResourcePrinter
from ingress2gateway.exceptions import UnsupportedFormatError


# ---------------------------------------------------------------------------
# Object normalisation
# ---------------------------------------------------------------------------

def to_serializable(obj: Any, api_client: ApiClient) -> dict[str, Any]:
    """Return *obj* as a plain, JSON-compatible dict.

    Raises
    ------
    TypeError
        If *obj* is neither a mapping nor a kubernetes client model.
    ValueError
        If the result has neither ``apiVersion`` nor ``kind``.
    """
    if isinstance(obj, Mapping):
        obj = dict(obj)
    elif not hasattr(obj, "openapi_types"):
        raise TypeError(
            f"cannot print object of type {type(obj).__name__}; "
            "expected a mapping or a kubernetes model",
        )

    data = api_client.sanitize_for_serialization(obj)
    if not data.get("apiVersion") and not data.get("kind"):
        raise ValueError("missing apiVersion or kind")
    return data


# ---------------------------------------------------------------------------
# Printers
# ---------------------------------------------------------------------------

class YAMLPrinter:
    """Print resources as YAML documents.

    A ``---`` separator is written before every resource after the first
    one printed by the same instance.
    """

    def __init__(self) -> None:
        self._print_count: int = 0
        self._api_client = ApiClient()

    def print_obj(self, obj: Any, stream: TextIO | None = None) -> None:
        out = stream if stream is not None else sys.stdout
        data = to_serializable(obj, self._api_client)
        self._print_count += 1
        if self._print_count > 1:
            out.write("---\n")
        yaml.safe_dump(
            data,
            out,
            default_flow_style=False,
            sort_keys=True,
            allow_unicode=True,
        )


class JSONPrinter:
    """Print resources as JSON objects indented by four spaces."""

    def __init__(self) -> None:
        self._api_client = ApiClient()

    def print_obj(self, obj: Any, stream: TextIO | None = None) -> None:
        out = stream if stream is not None else sys.stdout
        data = to_serializable(obj, self._api_client)
        out.write(json.dumps(data, indent=4))
        out.write("\n")


# ---------------------------------------------------------------------------
# Selector
# ---------------------------------------------------------------------------

def get_resource_printer(output_format: str) -> ResourcePrinter:
    """Return a fresh printer for *output_format*.

    ``""`` is accepted as an alias for ``"yaml"``.  Matching is exact.

    Raises
    ------
    UnsupportedFormatError
        For any other format name.
    """
    if output_format in (OutputFormat.YAML.value, ""):
        return YAMLPrinter()
    if output_format == OutputFormat.JSON.value:
        return JSONPrinter()
    raise UnsupportedFormatError(
        output_format,
        hint=f"Use one of: {', '.join(ALLOWED_FORMATS)}",
    )

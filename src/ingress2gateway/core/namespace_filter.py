"""Namespace filter resolution.

Combines ``--namespace``, ``--all-namespaces`` and the active kubeconfig
context into the single filter string handed to the conversion engine.

Precedence (highest first):

1. ``--all-namespaces`` — always yields ``""``, even when a namespace
   was also given.
2. An explicit, non-empty ``--namespace`` — returned verbatim.
3. The namespace of the active context, looked up through the injected
   :class:`~ingress2gateway.core.protocols.NamespaceSource`.
"""

from __future__ import annotations

import logging

from ingress2gateway.core.protocols import NamespaceSource

logger = logging.getLogger(__name__)

ALL_NAMESPACES: str = ""
"""Filter value meaning "no namespace restriction"."""


def resolve_namespace_filter(
    requested_namespace: str,
    all_namespaces: bool,
    source: NamespaceSource,
) -> str:
    """Return the effective namespace filter.

    *source* is consulted only when neither flag settles the answer.
    A :class:`~ingress2gateway.exceptions.ConfigLoadError` raised by it
    propagates unchanged.
    """
    if all_namespaces:
        if requested_namespace:
            logger.debug(
                "--all-namespaces overrides --namespace=%s", requested_namespace,
            )
        return ALL_NAMESPACES

    if requested_namespace:
        return requested_namespace

    namespace = source.active_namespace()
    logger.debug("Using namespace from current context: %r", namespace)
    return namespace

"""Shared pytest fixtures and configuration for the ingress2gateway test suite.

Guidelines
----------
* No cluster and no network access in any test.
* Kubeconfig files are written to ``tmp_path``; the developer's own
  ``~/.kube/config`` and ``$KUBECONFIG`` are never read.
* Conversion engines are faked at the entry-point boundary.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml


def kubeconfig_document(
    *,
    current_context: str | None = "dev",
    contexts: dict[str, str | None] | None = None,
) -> dict[str, Any]:
    """Build a kubeconfig mapping.

    *contexts* maps context name → namespace (``None`` for no namespace).
    """
    if contexts is None:
        contexts = {"dev": "team-a"}
    doc: dict[str, Any] = {
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [
            {"name": "local", "cluster": {"server": "https://127.0.0.1:6443"}},
        ],
        "users": [{"name": "admin", "user": {"token": "not-a-real-token"}}],
        "contexts": [],
    }
    for name, namespace in contexts.items():
        context: dict[str, Any] = {"cluster": "local", "user": "admin"}
        if namespace is not None:
            context["namespace"] = namespace
        doc["contexts"].append({"name": name, "context": context})
    if current_context is not None:
        doc["current-context"] = current_context
    return doc


@pytest.fixture
def write_kubeconfig(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing a kubeconfig file under ``tmp_path``."""

    def _write(name: str = "config", **kwargs: Any) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(kubeconfig_document(**kwargs)), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point HOME at an empty directory and clear cluster variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "KUBECONFIG",
        "POD_NAMESPACE",
        "KUBERNETES_SERVICE_HOST",
        "KUBERNETES_SERVICE_PORT",
    ):
        monkeypatch.delenv(var, raising=False)
    return home

"""Kubeconfig-backed :class:`~ingress2gateway.core.protocols.NamespaceSource`.

This module is the **only** place in the codebase that reads kubeconfig
files.  Merging follows the ``kubernetes`` client (itself a port of the
client-go loading rules):

1. An explicit file (``--kubeconfig``) — it must exist.
2. Otherwise every existing entry of ``$KUBECONFIG``.
3. Otherwise ``~/.kube/config`` when present.

Blank files are skipped.  ``current-context`` comes from the first file
that sets one; for duplicate context names the first file also wins.

When no kubeconfig is found and the process runs inside a pod, the
namespace comes from ``$POD_NAMESPACE`` or the mounted service-account
namespace file.

Every kubernetes-client, PyYAML and OS error is caught here and
re-raised as :class:`~ingress2gateway.exceptions.ConfigLoadError`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from kubernetes.config.config_exception import ConfigException
from kubernetes.config.incluster_config import (
    SERVICE_HOST_ENV_NAME,
    SERVICE_PORT_ENV_NAME,
)
from kubernetes.config.kube_config import (
    ENV_KUBECONFIG_PATH_SEPARATOR,
    KubeConfigMerger,
)

from ingress2gateway.exceptions import ConfigLoadError

logger = logging.getLogger(__name__)

KUBECONFIG_ENV: str = "KUBECONFIG"
POD_NAMESPACE_ENV: str = "POD_NAMESPACE"
RECOMMENDED_HOME_FILE: Path = Path("~/.kube/config")
SERVICE_ACCOUNT_DIR: Path = Path("/var/run/secrets/kubernetes.io/serviceaccount")

_KUBECONFIG_HINT = "Check the file with: kubectl config view"


class KubeconfigNamespaceSource:
    """Resolve the namespace of the current kubeconfig context.

    Nothing is cached: every :meth:`active_namespace` call re-reads the
    files, so a context switched between two invocations is honoured.

    Parameters
    ----------
    explicit_path:
        File given with ``--kubeconfig``; overrides discovery.
    environ:
        Environment mapping, ``os.environ`` by default.
    home_file:
        Fallback kubeconfig location, ``~/.kube/config`` by default.
    service_account_dir:
        Directory holding the in-cluster ``token`` and ``namespace`` files.
    """

    def __init__(
        self,
        explicit_path: str | os.PathLike[str] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        home_file: Path = RECOMMENDED_HOME_FILE,
        service_account_dir: Path = SERVICE_ACCOUNT_DIR,
    ) -> None:
        self._explicit_path = Path(explicit_path) if explicit_path else None
        self._environ: Mapping[str, str] = os.environ if environ is None else environ
        self._home_file = home_file
        self._service_account_dir = service_account_dir

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def config_paths(self) -> list[Path]:
        """Return the kubeconfig files that would be merged, in order.

        Raises
        ------
        ConfigLoadError
            If an explicit path was given and does not exist.
        """
        if self._explicit_path is not None:
            path = self._explicit_path.expanduser()
            if not path.is_file():
                raise ConfigLoadError(
                    f"kubeconfig file {path} does not exist",
                    cause=FileNotFoundError(str(path)),
                    hint="Pass an existing file to --kubeconfig.",
                )
            return [path]

        env_value = self._environ.get(KUBECONFIG_ENV, "")
        if env_value:
            paths: list[Path] = []
            for entry in env_value.split(ENV_KUBECONFIG_PATH_SEPARATOR):
                if not entry:
                    continue
                path = Path(entry).expanduser()
                if path.exists() and path not in paths:
                    paths.append(path)
            return paths

        home_file = self._home_file.expanduser()
        return [home_file] if home_file.exists() else []

    def in_cluster(self) -> bool:
        """Return ``True`` when running inside a pod with a service account."""
        return bool(
            self._environ.get(SERVICE_HOST_ENV_NAME)
            and self._environ.get(SERVICE_PORT_ENV_NAME)
            and (self._service_account_dir / "token").is_file()
        )

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def active_namespace(self) -> str:
        """Return the namespace of the current context, or ``""``.

        Raises
        ------
        ConfigLoadError
            When a kubeconfig file is unreadable or malformed, or when
            ``current-context`` names a context that does not exist.
        """
        paths = self.config_paths()
        if not paths:
            logger.debug("No kubeconfig file found")
            return self._in_cluster_namespace()

        logger.debug("Loading kubeconfig from %s", ", ".join(map(str, paths)))
        try:
            paths = [p for p in paths if not self._is_empty(p)]
            if not paths:
                logger.debug("Kubeconfig files are empty")
                return self._in_cluster_namespace()
            merger = KubeConfigMerger(
                ENV_KUBECONFIG_PATH_SEPARATOR.join(str(p) for p in paths),
            )
            current = self._first_current_context(merger, paths)
            return self._context_namespace(merger.config, current)
        except ConfigException as exc:
            raise ConfigLoadError(
                f"Invalid kubeconfig: {exc}", cause=exc, hint=_KUBECONFIG_HINT,
            ) from exc
        except yaml.YAMLError as exc:
            raise ConfigLoadError(
                f"Malformed kubeconfig: {exc}", cause=exc, hint=_KUBECONFIG_HINT,
            ) from exc
        except OSError as exc:
            raise ConfigLoadError(
                f"Cannot read kubeconfig: {exc}", cause=exc,
            ) from exc
        except (AttributeError, KeyError, TypeError) as exc:
            # KubeConfigMerger assumes mapping documents with named entries.
            raise ConfigLoadError(
                f"Malformed kubeconfig: unexpected structure ({exc!r})",
                cause=exc,
                hint=_KUBECONFIG_HINT,
            ) from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _is_empty(path: Path) -> bool:
        """Return ``True`` for a blank or comment-only kubeconfig file."""
        if path.stat().st_size == 0:
            return True
        with path.open(encoding="utf-8") as fh:
            return yaml.safe_load(fh) is None

    @staticmethod
    def _first_current_context(merger: KubeConfigMerger, paths: list[Path]) -> str:
        """Return the ``current-context`` of the first file that sets one."""
        for path in paths:
            document = merger.config_files.get(str(path)) or {}
            current = document.get("current-context")
            if current:
                return str(current)
        return ""

    @staticmethod
    def _context_namespace(config: Any, current: str) -> str:
        """Look up the namespace of context *current* in a merged ``ConfigNode``."""
        if not current:
            logger.debug("Kubeconfig has no current-context")
            return ""

        context = config["contexts"].get_with_name(current, safe=True)
        if context is None:
            raise ConfigLoadError(
                f'context "{current}" does not exist in kubeconfig',
                cause=KeyError(current),
                hint="Select a context with: kubectl config use-context <name>",
            )

        details = context.safe_get("context") or {}
        if not isinstance(details, Mapping):
            raise ConfigLoadError(
                f'Malformed kubeconfig: context "{current}" is not a mapping',
                cause=TypeError(type(details).__name__),
                hint=_KUBECONFIG_HINT,
            )
        return str(details.get("namespace") or "")

    def _in_cluster_namespace(self) -> str:
        if not self.in_cluster():
            return ""
        pod_namespace = self._environ.get(POD_NAMESPACE_ENV, "")
        if pod_namespace:
            return pod_namespace
        namespace_file = self._service_account_dir / "namespace"
        try:
            return namespace_file.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return ""
        except OSError as exc:
            raise ConfigLoadError(
                f"Cannot read in-cluster namespace: {exc}", cause=exc,
            ) from exc

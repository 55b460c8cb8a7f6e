"""Tests for the kubeconfig namespace source (infra/kubeconfig.py).

Every test writes its own kubeconfig under ``tmp_path`` and passes an
explicit environment mapping, so the host's configuration is never read.

Coverage:
* Discovery order: explicit file → ``$KUBECONFIG`` → home file.
* Namespace of the current context, or ``""`` when none is set.
* Merging of several ``$KUBECONFIG`` files (first file wins), empty files skipped.
* In-cluster fallback via ``$POD_NAMESPACE`` / service-account file.
* Every read or parse failure surfaces as ``ConfigLoadError``.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from kubernetes.config.kube_config import ENV_KUBECONFIG_PATH_SEPARATOR

from ingress2gateway.exceptions import ConfigLoadError
from ingress2gateway.infra.kubeconfig import KubeconfigNamespaceSource


def _source(
    tmp_path: Path,
    explicit: Path | None = None,
    environ: dict[str, str] | None = None,
    home_file: Path | None = None,
) -> KubeconfigNamespaceSource:
    return KubeconfigNamespaceSource(
        explicit,
        environ=environ or {},
        home_file=home_file or tmp_path / "no-such-home-config",
        service_account_dir=tmp_path / "serviceaccount",
    )


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

class TestConfigPaths:
    def test_explicit_path(self, tmp_path: Path, write_kubeconfig: Callable[..., Path]) -> None:
        path = write_kubeconfig()
        assert _source(tmp_path, explicit=path).config_paths() == [path]

    def test_explicit_overrides_env(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        explicit = write_kubeconfig("explicit", contexts={"dev": "from-explicit"})
        env_file = write_kubeconfig("env", contexts={"dev": "from-env"})
        source = _source(tmp_path, explicit=explicit, environ={"KUBECONFIG": str(env_file)})
        assert source.active_namespace() == "from-explicit"

    def test_missing_explicit_path_fails(self, tmp_path: Path) -> None:
        source = _source(tmp_path, explicit=tmp_path / "missing")
        with pytest.raises(ConfigLoadError, match="does not exist") as exc_info:
            source.active_namespace()
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_env_skips_missing_and_empty_entries(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        path = write_kubeconfig()
        env = ENV_KUBECONFIG_PATH_SEPARATOR.join(["", str(tmp_path / "missing"), str(path)])
        source = _source(tmp_path, environ={"KUBECONFIG": env})
        assert source.config_paths() == [path]

    def test_env_overrides_home(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        home = write_kubeconfig("home", contexts={"dev": "from-home"})
        env_file = write_kubeconfig("env", contexts={"dev": "from-env"})
        source = _source(tmp_path, environ={"KUBECONFIG": str(env_file)}, home_file=home)
        assert source.active_namespace() == "from-env"

    def test_home_file_used_without_env(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        home = write_kubeconfig("home", contexts={"dev": "from-home"})
        source = _source(tmp_path, home_file=home)
        assert source.config_paths() == [home]
        assert source.active_namespace() == "from-home"

    def test_nothing_found(self, tmp_path: Path) -> None:
        source = _source(tmp_path)
        assert source.config_paths() == []
        assert source.active_namespace() == ""


# ---------------------------------------------------------------------------
# Current context
# ---------------------------------------------------------------------------

class TestActiveNamespace:
    def test_current_context_namespace(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        path = write_kubeconfig(
            current_context="prod",
            contexts={"dev": "team-a", "prod": "team-b"},
        )
        assert _source(tmp_path, explicit=path).active_namespace() == "team-b"

    def test_context_without_namespace(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        path = write_kubeconfig(contexts={"dev": None})
        assert _source(tmp_path, explicit=path).active_namespace() == ""

    def test_no_current_context(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        path = write_kubeconfig(current_context=None)
        assert _source(tmp_path, explicit=path).active_namespace() == ""

    def test_unknown_current_context_fails(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        path = write_kubeconfig(current_context="gone")
        with pytest.raises(ConfigLoadError, match='"gone" does not exist'):
            _source(tmp_path, explicit=path).active_namespace()

    def test_reads_file_on_every_call(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        path = write_kubeconfig(contexts={"dev": "before"})
        source = _source(tmp_path, explicit=path)
        assert source.active_namespace() == "before"
        write_kubeconfig(contexts={"dev": "after"})
        assert source.active_namespace() == "after"


class TestMerging:
    def test_context_from_second_file(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        first = write_kubeconfig("first", current_context="shared", contexts={})
        second = write_kubeconfig("second", current_context="other", contexts={"shared": "ns-2"})
        env = ENV_KUBECONFIG_PATH_SEPARATOR.join([str(first), str(second)])
        assert _source(tmp_path, environ={"KUBECONFIG": env}).active_namespace() == "ns-2"

    def test_first_file_wins_on_duplicates(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        first = write_kubeconfig("first", contexts={"dev": "ns-1"})
        second = write_kubeconfig("second", contexts={"dev": "ns-2"})
        env = ENV_KUBECONFIG_PATH_SEPARATOR.join([str(first), str(second)])
        assert _source(tmp_path, environ={"KUBECONFIG": env}).active_namespace() == "ns-1"

    def test_first_file_wins_for_current_context(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        first = write_kubeconfig("first", current_context="a", contexts={"a": "ns-a"})
        second = write_kubeconfig("second", current_context="b", contexts={"b": "ns-b"})
        env = ENV_KUBECONFIG_PATH_SEPARATOR.join([str(first), str(second)])
        assert _source(tmp_path, environ={"KUBECONFIG": env}).active_namespace() == "ns-a"

    def test_current_context_from_later_file_when_first_has_none(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        first = write_kubeconfig("first", current_context=None, contexts={"a": "ns-a"})
        second = write_kubeconfig("second", current_context="a", contexts={})
        env = ENV_KUBECONFIG_PATH_SEPARATOR.join([str(first), str(second)])
        assert _source(tmp_path, environ={"KUBECONFIG": env}).active_namespace() == "ns-a"


class TestEmptyFiles:
    @pytest.mark.parametrize("content", ["", "\n", "# nothing here\n"])
    def test_empty_explicit_file(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "config"
        path.write_text(content, encoding="utf-8")
        assert _source(tmp_path, explicit=path).active_namespace() == ""

    def test_empty_home_file(self, tmp_path: Path) -> None:
        home = tmp_path / "config"
        home.touch()
        assert _source(tmp_path, home_file=home).active_namespace() == ""

    def test_empty_file_skipped_when_merging(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        empty = tmp_path / "empty"
        empty.touch()
        real = write_kubeconfig("real", contexts={"dev": "team-a"})
        env = ENV_KUBECONFIG_PATH_SEPARATOR.join([str(empty), str(real)])
        assert _source(tmp_path, environ={"KUBECONFIG": env}).active_namespace() == "team-a"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestLoadFailures:
    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config"
        path.write_text("current-context: [unterminated\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="Malformed kubeconfig") as exc_info:
            _source(tmp_path, explicit=path).active_namespace()
        assert exc_info.value.cause is not None
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "config"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="kubeconfig"):
            _source(tmp_path, explicit=path).active_namespace()

    def test_context_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config"
        path.write_text(
            "current-context: dev\ncontexts:\n- name: dev\n  context: oops\n",
            encoding="utf-8",
        )
        with pytest.raises(ConfigLoadError, match="not a mapping"):
            _source(tmp_path, explicit=path).active_namespace()

    def test_unreadable_file(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        path = write_kubeconfig()

        def deny(*args: object, **kwargs: object) -> None:
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("ingress2gateway.infra.kubeconfig.KubeConfigMerger", deny)
        with pytest.raises(ConfigLoadError, match="Cannot read kubeconfig") as exc_info:
            _source(tmp_path, explicit=path).active_namespace()
        assert isinstance(exc_info.value.cause, PermissionError)


# ---------------------------------------------------------------------------
# In-cluster fallback
# ---------------------------------------------------------------------------

class TestInCluster:
    _ENV = {"KUBERNETES_SERVICE_HOST": "10.0.0.1", "KUBERNETES_SERVICE_PORT": "443"}

    @staticmethod
    def _service_account(tmp_path: Path, namespace: str | None = "pod-ns") -> None:
        sa = tmp_path / "serviceaccount"
        sa.mkdir()
        (sa / "token").write_text("token", encoding="utf-8")
        if namespace is not None:
            (sa / "namespace").write_text(f"{namespace}\n", encoding="utf-8")

    def test_namespace_file(self, tmp_path: Path) -> None:
        self._service_account(tmp_path)
        source = _source(tmp_path, environ=dict(self._ENV))
        assert source.in_cluster()
        assert source.active_namespace() == "pod-ns"

    def test_pod_namespace_env_wins(self, tmp_path: Path) -> None:
        self._service_account(tmp_path)
        source = _source(tmp_path, environ={**self._ENV, "POD_NAMESPACE": "env-ns"})
        assert source.active_namespace() == "env-ns"

    def test_missing_namespace_file(self, tmp_path: Path) -> None:
        self._service_account(tmp_path, namespace=None)
        assert _source(tmp_path, environ=dict(self._ENV)).active_namespace() == ""

    def test_requires_token(self, tmp_path: Path) -> None:
        source = _source(tmp_path, environ={**self._ENV, "POD_NAMESPACE": "env-ns"})
        assert not source.in_cluster()
        assert source.active_namespace() == ""

    def test_kubeconfig_preferred(
        self, tmp_path: Path, write_kubeconfig: Callable[..., Path],
    ) -> None:
        self._service_account(tmp_path)
        path = write_kubeconfig(contexts={"dev": "from-file"})
        source = _source(tmp_path, explicit=path, environ=dict(self._ENV))
        assert source.active_namespace() == "from-file"

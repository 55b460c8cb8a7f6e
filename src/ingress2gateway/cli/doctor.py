"""``ingress2gateway doctor`` — environment diagnostics command.

Gathers runtime information and renders a Rich table summarising
whether the environment can run ``ingress2gateway print``: library
versions, the kubeconfig files that would be read, the namespace the
current context resolves to, and the installed conversion engines.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.
"""

from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError, version

from rich.markup import escape
from rich.table import Table

from ingress2gateway.cli import exit_codes
from ingress2gateway.cli.console import console
from ingress2gateway.exceptions import ConfigLoadError
from ingress2gateway.infra.engine import registered_engines
from ingress2gateway.infra.kubeconfig import KubeconfigNamespaceSource
from ingress2gateway.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _tool_version_check() -> Check:
    return "ingress2gateway", __version__, OK


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", platform.python_version(), status


def _package_check(label: str, distribution: str) -> Check:
    """Return (label, value, status) for an installed distribution."""
    try:
        return label, version(distribution), OK
    except PackageNotFoundError:
        return label, "NOT INSTALLED", FAIL


def _kubeconfig_checks(source: KubeconfigNamespaceSource) -> list[Check]:
    """Return the kubeconfig-files row and the current-namespace row."""
    try:
        paths = source.config_paths()
    except ConfigLoadError as exc:
        return [("kubeconfig", str(exc), FAIL)]

    if paths:
        files_row = ("kubeconfig", ", ".join(str(p) for p in paths), OK)
    elif source.in_cluster():
        files_row = ("kubeconfig", "in-cluster service account", OK)
    else:
        files_row = ("kubeconfig", "not found", WARN)

    try:
        namespace = source.active_namespace()
    except ConfigLoadError as exc:
        return [files_row, ("namespace", str(exc), FAIL)]
    return [files_row, ("namespace", namespace or "(all namespaces)", OK)]


def _engine_check() -> Check:
    """Return (label, value, status) for the installed conversion engines."""
    names = [ep.name for ep in registered_engines()]
    if not names:
        return "engines", "none installed", WARN
    return "engines", ", ".join(names), OK


def _collect_checks(kubeconfig: str | None) -> list[Check]:
    source = KubeconfigNamespaceSource(kubeconfig)
    return [
        _tool_version_check(),
        _python_version_check(),
        _package_check("kubernetes", "kubernetes"),
        _package_check("PyYAML", "PyYAML"),
        *_kubeconfig_checks(source),
        _engine_check(),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(kubeconfig: str | None = None) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings do not
        fail the run.
    """
    checks = _collect_checks(kubeconfig)
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="ingress2gateway doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape(value), status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS

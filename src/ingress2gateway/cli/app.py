"""CLI application entry point and command routing for ingress2gateway.

This module is the **sole error boundary** for the entire application.
It catches :class:`~ingress2gateway.exceptions.Ingress2GatewayError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  service and infrastructure adapters.
* Flag values are collected into a
  :class:`~ingress2gateway.core.models.PrintOptions` per invocation;
  nothing is kept in module state.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys

from rich.markup import escape

from ingress2gateway.cli import exit_codes
from ingress2gateway.cli.console import configure_logging, console
from ingress2gateway.core.models import ALLOWED_FORMATS, DEFAULT_FORMAT, PrintOptions
from ingress2gateway.exceptions import Ingress2GatewayError
from ingress2gateway.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _kubeconfig_parent() -> argparse.ArgumentParser:
    """Options shared by every command that reads kubeconfig."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--kubeconfig",
        default=None,
        metavar="PATH",
        help="Path to the kubeconfig file to use instead of $KUBECONFIG "
        "or ~/.kube/config.",
    )
    return parent


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``ingress2gateway print``   — print generated Gateway API resources
    * ``ingress2gateway doctor``  — environment diagnostics
    * ``ingress2gateway --version``
    """
    parser = argparse.ArgumentParser(
        prog="ingress2gateway",
        description="Convert Ingress resources to Gateway API resources.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to stderr.",
    )

    kubeconfig = _kubeconfig_parent()
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    print_parser = subparsers.add_parser(
        "print",
        parents=[kubeconfig],
        help="Prints HTTPRoutes and Gateways generated from Ingress resources",
        description="Prints HTTPRoutes and Gateways generated from Ingress resources.",
    )
    print_parser.add_argument(
        "-o",
        "--output",
        dest="output_format",
        default=DEFAULT_FORMAT,
        help=f"Output format. One of: ({', '.join(ALLOWED_FORMATS)})",
    )
    print_parser.add_argument(
        "-n",
        "--namespace",
        default="",
        help="If present, the namespace scope for this CLI request",
    )
    print_parser.add_argument(
        "-A",
        "--all-namespaces",
        action="store_true",
        help="If present, list the requested object(s) across all namespaces. "
        "Namespace in current context is ignored even if specified with --namespace.",
    )
    print_parser.add_argument(
        "--engine",
        default=None,
        metavar="NAME",
        help="Conversion engine to use when more than one is installed.",
    )

    subparsers.add_parser(
        "doctor",
        parents=[kubeconfig],
        help="Check the runtime environment",
        description="Check the runtime environment.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_print(args: argparse.Namespace) -> int:
    """Dispatch the ``print`` command.

    Flow:
    1. Collect flag values into :class:`PrintOptions`.
    2. Wire infra adapters into :class:`PrintService`.
    3. Run it — format, then namespace, then the engine.
    """
    from ingress2gateway.core.print_service import PrintService
    from ingress2gateway.infra.engine import EntryPointConversionEngine
    from ingress2gateway.infra.kubeconfig import KubeconfigNamespaceSource
    from ingress2gateway.infra.printers import get_resource_printer

    options = PrintOptions(
        output_format=args.output_format,
        namespace=args.namespace,
        all_namespaces=args.all_namespaces,
    )
    service = PrintService(
        engine=EntryPointConversionEngine(args.engine),
        namespace_source=KubeconfigNamespaceSource(args.kubeconfig),
        printer_factory=get_resource_printer,
    )
    service.run(options)
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from ingress2gateway.cli.doctor import run_doctor

    return run_doctor(args.kubeconfig)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ingress2gateway CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor(args)

    return _handle_print(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except Ingress2GatewayError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

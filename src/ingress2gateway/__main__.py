"""Allow ``python -m ingress2gateway`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m ingress2gateway`` behaves identically to the
``ingress2gateway`` console script.
"""

from __future__ import annotations

from ingress2gateway.cli.app import cli

if __name__ == "__main__":
    cli()

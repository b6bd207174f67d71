"""cloudquery CLI: run a resource query from the command line.

Usage examples::

    cloudquery --resource health --action ping
    cloudquery --resource compute --project my-project-123 --zone us-central1-a \\
        --namespace default --action get --target instances.list
    cloudquery --json '{"resource": "gke_mock", "action": "get", ...}'
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from cloudquery.base.query import QUERY_ACTIONS, QUERY_RESOURCES

_QUERY_FIELDS = ("project", "zone", "region", "namespace", "target", "arg1")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``cloudquery`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="cloudquery",
        description="Query GCP resources the same way the HTTP function does",
    )
    parser.add_argument(
        "--json", "-j",
        type=str,
        default=None,
        help="Raw JSON query body; overrides the field options",
    )
    parser.add_argument(
        "--resource", "-r",
        choices=list(QUERY_RESOURCES),
        help="Resource kind",
    )
    parser.add_argument(
        "--action", "-a",
        choices=list(QUERY_ACTIONS),
        default="get",
        help="Action (default: get)",
    )
    parser.add_argument("--project", "-p", default="", help="GCP project ID")
    parser.add_argument("--zone", "-z", default="", help="GCP zone")
    parser.add_argument("--region", default="", help="GCP region")
    parser.add_argument("--namespace", "-n", default="", help="Namespace / GKE cluster name")
    parser.add_argument("--target", "-t", default="", help="Target, e.g. instances.list")
    parser.add_argument("--arg1", default="", help="Target-specific argument")
    parser.add_argument(
        "--debug-echo",
        action="store_true",
        help="Prefix the output with the decoded query fields",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, builds the query body and prints the same text the
    HTTP function would answer with.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    if ns.json is not None:
        try:
            json.loads(ns.json)
        except json.JSONDecodeError as e:
            print(f"Invalid --json: {e}", file=sys.stderr)
            sys.exit(1)
        body = ns.json
    else:
        if ns.resource is None:
            parser.error("--resource is required unless --json is given")
        fields: dict[str, Any] = {"resource": ns.resource, "action": ns.action}
        fields.update({name: getattr(ns, name) for name in _QUERY_FIELDS})
        body = json.dumps(fields)

    # Lazy-import to avoid loading the SDKs for --help
    from cloudquery.base.config import ExporterSettings
    from cloudquery.base.validator import ValidatorSet
    from cloudquery.dispatcher import Dispatcher
    from cloudquery.entrypoint import handle

    settings = ExporterSettings(debug_echo=True) if ns.debug_echo else ExporterSettings()
    dispatcher = Dispatcher(ValidatorSet.default(), settings)
    sys.stdout.write(handle(body.encode(), dispatcher))
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()

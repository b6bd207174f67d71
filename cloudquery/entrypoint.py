"""
Cloud Function HTTP entry point.

Deploy with ``--entry-point run_query``, or serve locally with::

    functions-framework --source main.py --target run_query

Example request::

    curl -X POST localhost:8080 -H 'Content-Type: application/json' \\
        -d '{"resource": "compute", "action": "get", "project": "my-project-123",
             "zone": "us-central1-a", "namespace": "default", "target": "instances.list"}'
"""

from __future__ import annotations

import html

import functions_framework
from flask import Request
from pydantic import ValidationError

from cloudquery.base.config import ExporterSettings
from cloudquery.base.logger import cq_logger
from cloudquery.base.query import Query
from cloudquery.base.validator import ValidatorSet
from cloudquery.dispatcher import Dispatcher

_TEXT = {"Content-Type": "text/plain; charset=utf-8"}

# Order of the echoed fields.
_ECHO_FIELDS = ("resource", "project", "action", "namespace", "target", "arg1", "zone", "region")

_dispatcher: Dispatcher | None = None


def get_dispatcher() -> Dispatcher:
    """Return the instance-wide dispatcher, creating it on first use."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = Dispatcher(ValidatorSet.default(), ExporterSettings())
    return _dispatcher


def debug_echo(query: Query) -> str:
    """One ``[Debug] <Field> = <value>`` line per query field, HTML-escaped."""
    return "".join(
        f"[Debug] {field.capitalize()} = {html.escape(getattr(query, field))}\n"
        for field in _ECHO_FIELDS
    )


def handle(body: bytes, dispatcher: Dispatcher) -> str:
    """Decode a raw request body and dispatch it."""
    try:
        query = Query.from_json(body)
    except ValidationError as e:
        cq_logger.info(f"Undecodable request body: {e.error_count()} error(s)")
        return f"{e}\n"

    prefix = debug_echo(query) if dispatcher.settings.debug_echo else ""
    return prefix + dispatcher.dispatch(query)


@functions_framework.http
def run_query(request: Request) -> tuple[str, int, dict[str, str]]:
    """HTTP Cloud Function: decode the JSON query and answer in plain text.

    Every response uses status 200; failures are explained in the body.
    """
    return handle(request.get_data(), get_dispatcher()), 200, _TEXT

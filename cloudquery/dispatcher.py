"""
Query dispatcher.

Validates an inbound :class:`~cloudquery.base.query.Query`, builds the
client for its resource and runs it.  :meth:`Dispatcher.run` returns a
structured :class:`QueryResult`; :func:`format_result` turns it into the
plain-text body sent back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

from cloudquery.base.config import ExporterSettings
from cloudquery.base.emitter import Emitter, PrometheusPushEmitter
from cloudquery.base.exceptions import (
    CloudQueryError,
    QueryValidationError,
    SessionError,
    UnsupportedOperationError,
)
from cloudquery.base.logger import cq_logger, query_context
from cloudquery.base.plugin import ResourceClientBlueprint
from cloudquery.base.query import Query
from cloudquery.base.validator import ValidatorSet
from cloudquery.factory import make_client

# Fields each resource needs on top of the generic checks.  Every entry is a
# group of fields of which at least one must pass ``check_len``.
RESOURCE_REQUIREMENTS: dict[str, tuple[tuple[str, ...], ...]] = {
    "health": (),
    "gke": (("namespace",), ("target",), ("zone",)),
    "gke_mock": (("namespace",), ("target",), ("zone",)),
    "network": (("namespace",), ("target",), ("region",)),
    "compute": (("namespace",), ("target",), ("zone", "region")),
}

CLIENT_KINDS: dict[str, str] = {
    "health": "Health",
    "gke": "GKE",
    "gke_mock": "mock GKE",
    "network": "Network",
    "compute": "Compute",
}

Stage = Literal["validate", "build", "do"]


@dataclass(frozen=True)
class QueryResult:
    """Outcome of one query: a payload, or the error and the stage it stopped at."""

    query: Query
    text: str = ""
    error: CloudQueryError | None = None
    stage: Stage | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _label(field: str) -> str:
    return field.capitalize()


def _scope(query: Query, resource: str) -> dict:
    """Client config for *resource* taken from the query fields."""
    if resource == "health":
        return {}
    if resource == "network":
        return {"project": query.project, "region": query.region}
    if resource == "compute":
        return {"project": query.project, "region": query.region, "zone": query.zone}
    return {
        "project": query.project,
        "zone": query.zone,
        "cluster": query.namespace,
        "arg1": query.arg1,
    }


class Dispatcher:
    """Routes validated queries to the client of their resource.

    Attributes:
        validators: The checks applied to every query.
        settings: Process settings (emitter toggle, PushGateway address).
        emitter: Metrics emitter shared by every client this dispatcher
            builds, so counters accumulate across queries. None when
            emission is disabled.
    """

    def __init__(
        self,
        validators: ValidatorSet | None = None,
        settings: ExporterSettings | None = None,
        factory: Callable[..., ResourceClientBlueprint] = make_client,
    ) -> None:
        self.validators = validators or ValidatorSet.default()
        self.settings = settings or ExporterSettings()
        self._factory = factory
        self.emitter: Emitter | None = None
        if self.settings.enable_emitter:
            self.emitter = PrometheusPushEmitter(
                self.settings.pushgateway_url, self.settings.pushgateway_job
            )
        cq_logger.logger.setLevel(self.settings.log_level)

    def validate(self, query: Query) -> None:
        """Apply generic then resource-specific checks.

        Raises:
            QueryValidationError: On the first field that fails.
        """
        v = self.validators
        if not v.check_resource.validate(query.resource):
            raise QueryValidationError("Resource", query.resource)
        if not v.check_action.validate(query.action):
            raise QueryValidationError("Action", query.action)
        if not v.check_len.validate(query.project):
            raise QueryValidationError("Project", query.project)

        for group in RESOURCE_REQUIREMENTS.get(query.resource, ()):
            values = [getattr(query, field) for field in group]
            if any(v.check_len.validate(value) for value in values):
                continue
            if len(group) == 1:
                raise QueryValidationError(_label(group[0]), values[0])
            described = " and ".join(
                f"{_label(field)} ({value})" for field, value in zip(group, values)
            )
            raise QueryValidationError(
                "/".join(_label(f) for f in group),
                ",".join(values),
                f"[debug] Both {described} failed validations",
            )

    def run(self, query: Query) -> QueryResult:
        """Serve *query*; request-scoped failures are returned, not raised."""
        context = query_context(query)
        try:
            self.validate(query)
        except QueryValidationError as e:
            cq_logger.info(f"Query rejected: {e}", **context)
            return QueryResult(query, error=e, stage="validate")

        if query.resource not in RESOURCE_REQUIREMENTS:
            cq_logger.warning("No client for resource; empty response", **context)
            return QueryResult(query)

        config = _scope(query, query.resource)
        config["enable_emitter"] = self.settings.enable_emitter
        try:
            client = self._factory(
                query.resource, config, emitter=self.emitter, settings=self.settings
            )
        except SessionError as e:
            cq_logger.error(f"Client construction failed: {e}", **context)
            return QueryResult(query, error=e, stage="build")
        except ValueError as e:
            cq_logger.error(f"Client configuration rejected: {e}", **context)
            return QueryResult(query, error=SessionError(str(e)), stage="build")

        with client:
            try:
                text = client.do(query, request_id=context["request_id"])
            except UnsupportedOperationError as e:
                cq_logger.warning(str(e), **context)
                return QueryResult(query, error=e, stage="do")
            except CloudQueryError as e:
                cq_logger.error(f"Query failed: {e}", exc_info=True, **context)
                return QueryResult(query, error=e, stage="do")
        return QueryResult(query, text=text)

    def dispatch(self, query: Query) -> str:
        """Serve *query* and return the response body text."""
        return format_result(self.run(query))


def format_result(result: QueryResult) -> str:
    """Render a :class:`QueryResult` as the plain-text response body."""
    if result.ok:
        return result.text
    err = result.error
    resource = result.query.resource
    kind = CLIENT_KINDS.get(resource, resource)
    if result.stage == "validate":
        return f"{err}\n"
    if result.stage == "build":
        return f"Error creating {kind} client: {err}\n"
    if isinstance(err, UnsupportedOperationError):
        base_kind = kind.removeprefix("mock ")
        return f"[Debug] It will call some {base_kind} operations to return json response"
    return f"Error {resource}.do(): {err}\n"


__all__ = [
    "Dispatcher",
    "QueryResult",
    "format_result",
    "RESOURCE_REQUIREMENTS",
    "CLIENT_KINDS",
]

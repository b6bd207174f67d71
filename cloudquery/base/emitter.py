"""
Post-query metric emitters.

Every client holds an :class:`Emitter`; when metrics are disabled it is a
:class:`NoopEmitter`, so call sites never check for None.

Usage::

    pusher = PrometheusPushEmitter(url, job)
    pusher.register(my_collector)
    pusher.emit(query)
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from prometheus_client import CollectorRegistry, Counter, Gauge, push_to_gateway
from prometheus_client.registry import Collector

from cloudquery.base.config import PROM_PUSHGW_JOB, PROM_PUSHGW_URL
from cloudquery.base.exceptions import EmitterError
from cloudquery.base.query import Query


class Emitter(ABC):
    """Capability invoked after a query succeeded."""

    @abstractmethod
    def emit(self, query: Query) -> None:
        """Record and forward metrics for *query*.

        Raises:
            EmitterError: If the metrics could not be delivered.
        """


class NoopEmitter(Emitter):
    def emit(self, query: Query) -> None:
        return None


class PrometheusPushEmitter(Emitter):
    """Sends metrics to a Prometheus PushGateway.

    Metrics live in a private registry so pushes only carry what this
    emitter owns plus any collector added through :meth:`register`.

    Attributes:
        url: PushGateway address.
        job: Job label under which metrics are grouped.
        registry: The registry pushed on each :meth:`emit`.
    """

    def __init__(self, url: str = PROM_PUSHGW_URL, job: str = PROM_PUSHGW_JOB) -> None:
        self.url = url
        self.job = job
        self.registry = CollectorRegistry()
        self.queries_total = Counter(
            "cloudquery_queries_total",
            "Total successful resource queries",
            labelnames=["resource", "action", "target"],
            registry=self.registry,
        )
        self.last_success = Gauge(
            "cloudquery_last_success_timestamp_seconds",
            "Unix time of the last successful resource query",
            registry=self.registry,
        )

    def register(self, collector: Collector) -> None:
        """Add an extra collector to the pushed registry."""
        self.registry.register(collector)

    def emit(self, query: Query) -> None:
        self.queries_total.labels(
            resource=query.resource, action=query.action, target=query.target
        ).inc()
        self.last_success.set(time.time())
        try:
            push_to_gateway(self.url, job=self.job, registry=self.registry)
        except OSError as e:
            raise EmitterError(f"Failed to push metrics to {self.url}") from e


__all__ = ["Emitter", "NoopEmitter", "PrometheusPushEmitter"]

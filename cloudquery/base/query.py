"""
Wire-level query model.

A :class:`Query` is decoded once per inbound request from its JSON body and
never mutated afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

REQUEST_MAX_LEN = 50
PING_OK = "ok"

QUERY_RESOURCES: tuple[str, ...] = ("gke", "gke_mock", "health", "network", "compute")
QUERY_ACTIONS: tuple[str, ...] = ("get", "ping")


class Query(BaseModel):
    """A single resource lookup request.

    Every field is a plain string; missing fields decode to ``""``.
    ``namespace`` doubles as the cluster name for GKE lookups and ``arg1``
    carries a target-specific argument (e.g. the node pool name for
    ``nodepools.get``).
    """

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    resource: str = Field(default="", description="Resource kind (compute, network, gke, ...)")
    project: str = Field(default="", description="GCP project ID")
    zone: str = Field(default="", description="GCP zone (e.g. 'us-central1-a')")
    region: str = Field(default="", description="GCP region (e.g. 'us-central1')")
    action: str = Field(default="", description="Verb applied to the resource (get, ping)")
    namespace: str = Field(default="", description="Namespace / GKE cluster name")
    target: str = Field(default="", description="Dotted operation name (e.g. 'instances.list')")
    arg1: str = Field(default="", description="Optional target-specific argument")

    @classmethod
    def from_json(cls, body: str | bytes) -> Query:
        """Decode a query from a raw JSON request body.

        Raises:
            pydantic.ValidationError: If the body is not a JSON object of strings.
        """
        return cls.model_validate_json(body)


__all__ = [
    "Query",
    "REQUEST_MAX_LEN",
    "PING_OK",
    "QUERY_RESOURCES",
    "QUERY_ACTIONS",
]

"""Google Kubernetes Engine implementation of the resource client blueprint."""

from __future__ import annotations

from typing import Any

from google.cloud import container_v1

from cloudquery.base.config import GKEConfig
from cloudquery.base.emitter import Emitter
from cloudquery.base.exceptions import QueryValidationError
from cloudquery.base.plugin import ResourceClientBlueprint, open_clients
from cloudquery.base.routing import route

NOT_IMPLEMENTED = "[Debug] Feature not implemented yet"


class GKE(ResourceClientBlueprint):
    """Queries about a GKE cluster and its node pools.

    See https://cloud.google.com/kubernetes-engine/docs/reference/rest/

    Attributes:
        project: GCP project ID.
        zone: Location (zone or region) of the cluster.
        cluster: Cluster name.
        arg1: Target-specific argument; the node pool name for ``nodepools.get``.
    """

    resource = "gke"
    kind = "GKE"

    def __init__(self, config: GKEConfig, emitter=None, **kwargs: Any) -> None:
        self.project: str = config.project
        self.zone: str = config.zone
        self.cluster: str = config.cluster
        self.arg1: str = config.arg1
        super().__init__(config, emitter, **kwargs)

    @classmethod
    def build_mock(cls, config: GKEConfig, emitter: Emitter | None = None) -> GKE:
        """Build a client with no session, for dry runs that never reach GKE.

        The mock answers ``gke_mock`` queries only, and none of the GKE
        routes apply to that resource.
        """
        client = cls(config, emitter, open_session=False)
        client.resource = "gke_mock"
        return client

    def open_session(self, config: GKEConfig) -> dict[str, Any]:
        return open_clients(
            self.kind, config.credentials, clusters=container_v1.ClusterManagerClient
        )

    @property
    def _location(self) -> str:
        return f"projects/{self.project}/locations/{self.zone}"

    @property
    def _cluster_path(self) -> str:
        return f"{self._location}/clusters/{self.cluster}"

    @route("gke", "get", "pods.list")
    def get_pods_list(self) -> str:
        # Pods live behind the Kubernetes API, not the GKE control plane API.
        return NOT_IMPLEMENTED

    @route("gke", "get", "services.list")
    def get_services_list(self) -> str:
        """List the clusters of the project in the configured location."""
        return self.fetch(
            "failed to list clusters",
            lambda: self.session["clusters"].list_clusters(parent=self._location).clusters,
        )

    @route("gke", "get", "nodepools.list")
    def get_node_pools_list(self) -> str:
        return self.fetch(
            "failed to list node pools",
            lambda: self.session["clusters"].list_node_pools(parent=self._cluster_path).node_pools,
        )

    @route("gke", "get", "nodepools.get")
    def get_node_pools_get(self) -> str:
        """Fetch the node pool named by ``arg1``."""
        if not self.arg1:
            raise QueryValidationError("Arg1", self.arg1)
        name = f"{self._cluster_path}/nodePools/{self.arg1}"
        return self.fetch(
            "failed to get node pools",
            lambda: [self.session["clusters"].get_node_pool(name=name)],
        )

    @route("gke", "get", "usablesubnets.list")
    def get_usable_subnets_list(self) -> str:
        """List subnetworks in the project usable for creating clusters."""
        request = container_v1.ListUsableSubnetworksRequest(parent=f"projects/{self.project}")
        return self.fetch(
            "failed to get usable subnetworks",
            lambda: self.session["clusters"].list_usable_subnetworks(request=request),
        )

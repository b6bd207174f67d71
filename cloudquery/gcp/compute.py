"""GCP Compute Engine implementation of the resource client blueprint."""

from __future__ import annotations

from typing import Any

from google.cloud import compute_v1

from cloudquery.base.config import ComputeConfig
from cloudquery.base.plugin import ResourceClientBlueprint, open_clients
from cloudquery.base.routing import route


class Compute(ResourceClientBlueprint):
    """GCP Compute Engine queries.

    See https://cloud.google.com/compute/docs/reference/rest/v1/

    Attributes:
        project: GCP project ID.
        region: Region scope (may be empty when a zone is given).
        zone: Zone scope for instance listings (may be empty when a region is given).
    """

    resource = "compute"
    kind = "Compute"

    def __init__(self, config: ComputeConfig, emitter=None, **kwargs: Any) -> None:
        self.project: str = config.project
        self.region: str = config.region
        self.zone: str = config.zone
        super().__init__(config, emitter, **kwargs)

    def open_session(self, config: ComputeConfig) -> dict[str, Any]:
        return open_clients(
            self.kind,
            config.credentials,
            regions=compute_v1.RegionsClient,
            instances=compute_v1.InstancesClient,
        )

    @route("compute", "get", "regions.list")
    def get_regions_list(self) -> str:
        """List the regions available to the project."""
        return self.fetch(
            "failed to list regions",
            lambda: self.session["regions"].list(project=self.project),
        )

    @route("compute", "get", "instances.list")
    def get_instances_list(self) -> str:
        """List the VM instances of the project in the configured zone."""
        return self.fetch(
            "failed to list instances",
            lambda: self.session["instances"].list(project=self.project, zone=self.zone),
        )

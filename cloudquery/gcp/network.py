"""GCP VPC networking queries, served through the Compute Engine API."""

from __future__ import annotations

from typing import Any

from google.cloud import compute_v1

from cloudquery.base.config import NetworkConfig
from cloudquery.base.plugin import ResourceClientBlueprint, open_clients
from cloudquery.base.routing import route


class Network(ResourceClientBlueprint):
    """GCP virtual networking infrastructure.

    Subnets, addresses and routers are listed for the configured region;
    every other target is global to the project.

    See https://cloud.google.com/compute/docs/reference/rest/v1/
    """

    resource = "network"
    kind = "Network"

    def __init__(self, config: NetworkConfig, emitter=None, **kwargs: Any) -> None:
        self.project: str = config.project
        self.region: str = config.region
        super().__init__(config, emitter, **kwargs)

    def open_session(self, config: NetworkConfig) -> dict[str, Any]:
        return open_clients(
            self.kind,
            config.credentials,
            subnetworks=compute_v1.SubnetworksClient,
            firewalls=compute_v1.FirewallsClient,
            addresses=compute_v1.AddressesClient,
            global_addresses=compute_v1.GlobalAddressesClient,
            networks=compute_v1.NetworksClient,
            routers=compute_v1.RoutersClient,
            routes=compute_v1.RoutesClient,
            interconnects=compute_v1.InterconnectsClient,
        )

    # --- Regional ---

    @route("network", "get", "subnets.list")
    def get_subnets_list(self) -> str:
        return self.fetch(
            "failed to list subnetworks",
            lambda: self.session["subnetworks"].list(project=self.project, region=self.region),
        )

    @route("network", "get", "addresses.list")
    def get_addresses_list(self) -> str:
        return self.fetch(
            "failed to list addresses",
            lambda: self.session["addresses"].list(project=self.project, region=self.region),
        )

    @route("network", "get", "routers.list")
    def get_routers_list(self) -> str:
        return self.fetch(
            "failed to list routers",
            lambda: self.session["routers"].list(project=self.project, region=self.region),
        )

    # --- Global ---

    @route("network", "get", "firewalls.list")
    def get_firewalls_list(self) -> str:
        return self.fetch(
            "failed to list firewalls",
            lambda: self.session["firewalls"].list(project=self.project),
        )

    @route("network", "get", "globaladdresses.list")
    def get_global_addresses_list(self) -> str:
        return self.fetch(
            "failed to list global addresses",
            lambda: self.session["global_addresses"].list(project=self.project),
        )

    @route("network", "get", "networks.list")
    def get_networks_list(self) -> str:
        return self.fetch(
            "failed to list networks",
            lambda: self.session["networks"].list(project=self.project),
        )

    @route("network", "get", "routes.list")
    def get_routes_list(self) -> str:
        return self.fetch(
            "failed to list routes",
            lambda: self.session["routes"].list(project=self.project),
        )

    @route("network", "get", "interconnects.list")
    def get_interconnects_list(self) -> str:
        return self.fetch(
            "failed to list interconnects",
            lambda: self.session["interconnects"].list(project=self.project),
        )

"""Tests for the GCP networking client."""

from unittest.mock import patch
import pytest

from google.api_core import exceptions as gcp_exceptions
from google.cloud import compute_v1

from cloudquery.base.config import NetworkConfig
from cloudquery.base.exceptions import RemoteCallError, UnsupportedOperationError
from cloudquery.base.query import Query
from cloudquery.gcp.network import Network

_CLIENTS = {
    "subnetworks": "SubnetworksClient",
    "firewalls": "FirewallsClient",
    "addresses": "AddressesClient",
    "global_addresses": "GlobalAddressesClient",
    "networks": "NetworksClient",
    "routers": "RoutersClient",
    "routes": "RoutesClient",
    "interconnects": "InterconnectsClient",
}

REGIONAL = {"project": "my-project", "region": "us-central1"}
GLOBAL = {"project": "my-project"}

# target, session key, expected call kwargs, item, diagnostic
CASES = [
    ("subnets.list", "subnetworks", REGIONAL,
     compute_v1.Subnetwork(name="sub-a"), "failed to list subnetworks"),
    ("firewalls.list", "firewalls", GLOBAL,
     compute_v1.Firewall(name="allow-ssh"), "failed to list firewalls"),
    ("addresses.list", "addresses", REGIONAL,
     compute_v1.Address(name="ip-a"), "failed to list addresses"),
    ("globaladdresses.list", "global_addresses", GLOBAL,
     compute_v1.Address(name="gip-a"), "failed to list global addresses"),
    ("networks.list", "networks", GLOBAL,
     compute_v1.Network(name="default"), "failed to list networks"),
    ("routers.list", "routers", REGIONAL,
     compute_v1.Router(name="nat-router"), "failed to list routers"),
    ("routes.list", "routes", GLOBAL,
     compute_v1.Route(name="default-route"), "failed to list routes"),
    ("interconnects.list", "interconnects", GLOBAL,
     compute_v1.Interconnect(name="ic-1"), "failed to list interconnects"),
]


def _query(target: str) -> Query:
    return Query(
        resource="network", action="get", project="my-project",
        region="us-central1", namespace="default", target=target,
    )


@pytest.fixture
def svc():
    patchers = {
        key: patch(f"cloudquery.gcp.network.compute_v1.{cls_name}")
        for key, cls_name in _CLIENTS.items()
    }
    mocks = {key: p.start() for key, p in patchers.items()}
    try:
        instance = Network(NetworkConfig(project="my-project", region="us-central1"))
        yield instance, {key: m.return_value for key, m in mocks.items()}
    finally:
        for p in patchers.values():
            p.stop()


class TestListings:
    @pytest.mark.parametrize("target,key,kwargs,item,diagnostic", CASES)
    def test_success(self, svc, fragments, target, key, kwargs, item, diagnostic):
        inst, clients = svc
        clients[key].list.return_value = [item]
        text = inst.do(_query(target))
        clients[key].list.assert_called_once_with(**kwargs)
        assert fragments(text)[0]["name"] == item.name

    @pytest.mark.parametrize("target,key,kwargs,item,diagnostic", CASES)
    def test_api_error(self, svc, target, key, kwargs, item, diagnostic):
        inst, clients = svc
        clients[key].list.side_effect = gcp_exceptions.Forbidden("denied")
        with pytest.raises(RemoteCallError, match=diagnostic):
            inst.do(_query(target))

    def test_multiple_items_keep_order(self, svc, fragments):
        inst, clients = svc
        clients["firewalls"].list.return_value = [
            compute_v1.Firewall(name="z-rule"),
            compute_v1.Firewall(name="a-rule"),
        ]
        text = inst.do(_query("firewalls.list"))
        assert [d["name"] for d in fragments(text)] == ["z-rule", "a-rule"]


class TestRouting:
    def test_unknown_target(self, svc):
        inst, clients = svc
        with pytest.raises(UnsupportedOperationError):
            inst.do(_query("vpns.list"))

    def test_ping_not_routed(self, svc):
        inst, clients = svc
        q = Query(resource="network", action="ping", target="subnets.list")
        with pytest.raises(UnsupportedOperationError):
            inst.do(q)

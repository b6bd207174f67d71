"""GCP client registry.

Maps resource names to their client builders.  ``CLIENT_REGISTRY`` is
consumed by :func:`cloudquery.factory.make_client`.
"""

from typing import Callable

from cloudquery.base.plugin import ResourceClientBlueprint
from cloudquery.gcp.compute import Compute
from cloudquery.gcp.gke import GKE
from cloudquery.gcp.health import Health
from cloudquery.gcp.network import Network


# Client registry: resource -> callable(config, emitter) returning a client
CLIENT_REGISTRY: dict[str, Callable[..., ResourceClientBlueprint]] = {
    "compute": Compute,
    "network": Network,
    "gke": GKE,
    "gke_mock": GKE.build_mock,
    "health": Health,
}

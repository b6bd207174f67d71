"""GCP resource client implementations."""

from .compute import Compute
from .gke import GKE
from .health import Health
from .network import Network

__all__ = [
    "Compute",
    "GKE",
    "Health",
    "Network",
]

"""Core query model, validation, routing and client blueprint.

Every resource client inherits from :class:`ResourceClientBlueprint`.
Import the pieces here to type-hint your own code or to add new variants.
"""

from .config import (
    ClientConfig,
    ComputeConfig,
    ExporterSettings,
    GKEConfig,
    HealthConfig,
    MockGKEConfig,
    NetworkConfig,
)
from .emitter import Emitter, NoopEmitter, PrometheusPushEmitter
from .plugin import ResourceClientBlueprint
from .query import Query
from .routing import ROUTES, route
from .supported_services import existing_resources
from .validator import StringChain, ValidatorSet


__all__ = [
    "ClientConfig",
    "ComputeConfig",
    "NetworkConfig",
    "GKEConfig",
    "MockGKEConfig",
    "HealthConfig",
    "ExporterSettings",
    "Emitter",
    "NoopEmitter",
    "PrometheusPushEmitter",
    "ResourceClientBlueprint",
    "Query",
    "ROUTES",
    "route",
    "StringChain",
    "ValidatorSet",
    "existing_resources",
]

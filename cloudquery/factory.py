"""Resource client factory.

Provides :func:`make_client`, the single entry-point for creating resource
clients.  The function looks the resource up in the GCP client registry,
validates the config into the resource's model and returns a typed
instance via ``@overload`` signatures so IDEs can autocomplete methods.
"""

from typing import Any, Literal, overload

from cloudquery.base import ClientConfig, Emitter, ExporterSettings, PrometheusPushEmitter
from cloudquery.base.config import validate_config
from cloudquery.base.supported_services import existing_resources
from cloudquery.gcp import GKE, Compute, Health, Network
from cloudquery.gcp.factory import CLIENT_REGISTRY


@overload
def make_client(
    resource: Literal["compute"], config: dict | ClientConfig, emitter: Emitter | None = ...,
    settings: ExporterSettings | None = ...,
) -> Compute: ...


@overload
def make_client(
    resource: Literal["network"], config: dict | ClientConfig, emitter: Emitter | None = ...,
    settings: ExporterSettings | None = ...,
) -> Network: ...


@overload
def make_client(
    resource: Literal["gke", "gke_mock"], config: dict | ClientConfig,
    emitter: Emitter | None = ..., settings: ExporterSettings | None = ...,
) -> GKE: ...


@overload
def make_client(
    resource: Literal["health"], config: dict | ClientConfig, emitter: Emitter | None = ...,
    settings: ExporterSettings | None = ...,
) -> Health: ...


def make_client(
    resource: existing_resources,
    config: dict | ClientConfig,
    emitter: Emitter | None = None,
    settings: ExporterSettings | None = None,
) -> Any:
    """
    Create a resource client from a resource name and its configuration.
    Args:
        resource: The resource kind (e.g. 'compute', 'gke_mock').
        config: Configuration dictionary or model for that resource.
        emitter: Explicit metrics emitter. When omitted and the config enables
            emission, a PushGateway emitter is built from *settings*.
        settings: Process settings; read from the environment when omitted.
    Returns:
        A client ready to serve one query.
    Raises:
        ValueError: If the resource is not supported.
        pydantic.ValidationError: If the config is invalid.
        SessionError: If the remote session could not be opened.
    """
    if resource not in CLIENT_REGISTRY:
        raise ValueError(f"Unsupported resource: {resource}")

    builder = CLIENT_REGISTRY[resource]
    configObj = validate_config(resource, config)
    if emitter is None and configObj.enable_emitter:
        settings = settings or ExporterSettings()
        emitter = PrometheusPushEmitter(settings.pushgateway_url, settings.pushgateway_job)
    return builder(configObj, emitter)

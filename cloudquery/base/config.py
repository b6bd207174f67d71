"""
Pydantic configuration models.

Client configs are immutable and validated when they are built, so a bad
scope is rejected before any SDK client is created.  :class:`ExporterSettings`
holds the process-wide knobs read from the environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cloudquery.base.logger import LOG_LEVELS

PROM_PUSHGW_URL = "http://prometheus.monitoring:9091"
PROM_PUSHGW_JOB = "pushgateway"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


class ClientConfig(BaseModel):
    """Settings shared by every resource client.

    Credentials are resolved in order:
    1. An explicit ``credentials`` object.
    2. A service account key file from ``credentials_path`` or
       GOOGLE_APPLICATION_CREDENTIALS.
    3. Otherwise left as None so the SDK falls back to Application Default
       Credentials (ADC).

    Subclasses that never reach Google APIs set ``load_key_file`` to False,
    which skips step 2.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    load_key_file: ClassVar[bool] = True

    credentials: Any | None = Field(default=None, description="GCP credentials object")
    credentials_path: str | None = Field(
        default=None, description="Path to service account JSON key file"
    )
    enable_emitter: bool = Field(default=False, description="Push metrics after each query")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: Any) -> Any:
        """Fall back to GOOGLE_APPLICATION_CREDENTIALS for the key file."""
        if cls.load_key_file and isinstance(values, dict) and not values.get("credentials_path"):
            values = dict(values)
            values["credentials_path"] = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
        return values

    @model_validator(mode="after")
    def load_credentials(self) -> ClientConfig:
        """Load credentials from the key file if no object was given."""
        if self.load_key_file and self.credentials is None and self.credentials_path:
            path = Path(self.credentials_path)
            if not path.exists():
                raise ValueError(f"Credentials file not found: {self.credentials_path}")
            from google.oauth2 import service_account  # lazy import

            # frozen model: bypass __setattr__ for the resolved value
            object.__setattr__(
                self,
                "credentials",
                service_account.Credentials.from_service_account_file(str(path)),
            )
        return self


class ProjectConfig(ClientConfig):
    """Base for clients scoped to a GCP project."""

    project: str = Field(min_length=1, description="GCP project ID")


class ComputeConfig(ProjectConfig):
    region: str = Field(default="", description="GCP region (e.g. 'us-central1')")
    zone: str = Field(default="", description="GCP zone (e.g. 'us-central1-a')")

    @model_validator(mode="after")
    def require_location(self) -> ComputeConfig:
        if not self.region and not self.zone:
            raise ValueError("Compute config requires a region or a zone")
        return self


class NetworkConfig(ProjectConfig):
    region: str = Field(min_length=1, description="GCP region (e.g. 'us-central1')")


class GKEConfig(ProjectConfig):
    zone: str = Field(min_length=1, description="Zone (or region) of the cluster")
    cluster: str = Field(min_length=1, description="GKE cluster name")
    arg1: str = Field(default="", description="Target-specific argument (e.g. node pool name)")


class MockGKEConfig(GKEConfig):
    """Scope of the session-less GKE client; no key file is read."""

    load_key_file: ClassVar[bool] = False


class HealthConfig(ClientConfig):
    """The health client needs no scope."""


# Map resource names to their config models for dynamic validation
CONFIG_REGISTRY: dict[str, type[ClientConfig]] = {
    "compute": ComputeConfig,
    "network": NetworkConfig,
    "gke": GKEConfig,
    "gke_mock": MockGKEConfig,
    "health": HealthConfig,
}


def validate_config(resource: str, config: dict | ClientConfig) -> ClientConfig:
    """Validate and return a typed config model for the given resource.

    Args:
        resource: The resource kind (e.g. 'compute', 'gke').
        config: Raw configuration dictionary, or an already-built model.

    Returns:
        A validated, frozen config model.

    Raises:
        ValueError: If the resource is unknown or the model does not match it.
        pydantic.ValidationError: If the config is invalid.
    """
    model = CONFIG_REGISTRY.get(resource)
    if model is None:
        raise ValueError(f"No config model registered for resource: {resource}")
    if isinstance(config, ClientConfig):
        if not isinstance(config, model):
            raise ValueError(
                f"Config {type(config).__name__} does not apply to resource: {resource}"
            )
        return config
    return model(**config)


class ExporterSettings(BaseModel):
    """Process-wide settings.

    Values are resolved in order:
    1. Explicit values passed to the constructor.
    2. Environment variables (PROM_PUSHGW_URL, PROM_PUSHGW_JOB,
       CLOUDQUERY_ENABLE_EMITTER, CLOUDQUERY_DEBUG_ECHO, CLOUDQUERY_LOG_LEVEL).
    3. Built-in defaults.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pushgateway_url: str = Field(default=PROM_PUSHGW_URL, description="Prometheus PushGateway URL")
    pushgateway_job: str = Field(default=PROM_PUSHGW_JOB, description="PushGateway job name")
    enable_emitter: bool = Field(default=False, description="Push metrics after each query")
    debug_echo: bool = Field(default=False, description="Echo query fields in the response")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level name"
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: Any) -> Any:
        """Fall back to environment variables for unset fields."""
        values = dict(values or {})
        env_map = {
            "pushgateway_url": "PROM_PUSHGW_URL",
            "pushgateway_job": "PROM_PUSHGW_JOB",
            "log_level": "CLOUDQUERY_LOG_LEVEL",
        }
        for field, env_var in env_map.items():
            if not values.get(field) and os.environ.get(env_var):
                values[field] = os.environ[env_var]
        if "enable_emitter" not in values:
            values["enable_emitter"] = _env_flag("CLOUDQUERY_ENABLE_EMITTER")
        if "debug_echo" not in values:
            values["debug_echo"] = _env_flag("CLOUDQUERY_DEBUG_ECHO")
        return values

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().upper() in LOG_LEVELS:
            return value.strip().upper()
        return value


__all__ = [
    "ClientConfig",
    "ProjectConfig",
    "ComputeConfig",
    "NetworkConfig",
    "GKEConfig",
    "MockGKEConfig",
    "HealthConfig",
    "ExporterSettings",
    "CONFIG_REGISTRY",
    "PROM_PUSHGW_URL",
    "PROM_PUSHGW_JOB",
    "validate_config",
]

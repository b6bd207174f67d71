"""Health of the running function instance itself."""

from __future__ import annotations

import time

from cloudquery import __version__
from cloudquery.base.config import HealthConfig
from cloudquery.base.plugin import ResourceClientBlueprint
from cloudquery.base.query import PING_OK
from cloudquery.base.routing import route

# Import time of this module, i.e. the cold start of the instance.
_STARTED_AT = time.monotonic()


class Health(ResourceClientBlueprint):
    resource = "health"
    kind = "Health"

    def open_session(self, config: HealthConfig) -> None:
        return None

    @route("health", "ping")
    def ping(self) -> str:
        return PING_OK

    @route("health", "get", "stats")
    def get_stats(self) -> str:
        uptime = time.monotonic() - _STARTED_AT
        return (
            "Some statistics about this running cloud function instance "
            f"(version {__version__}, uptime {uptime:.0f}s)"
        )

"""cloudquery: HTTP-triggered GCP resource lookups.

Entry point for the library. Build a client directly with
:func:`make_client`, or serve a whole query through the dispatcher::

    from cloudquery import Dispatcher, Query

    text = Dispatcher().dispatch(Query(resource="health", action="ping"))
"""

__version__ = "0.1.0"

from .base import (  # noqa: E402
    ExporterSettings,
    Query,
    ResourceClientBlueprint,
    ValidatorSet,
)
from .dispatcher import Dispatcher, QueryResult, format_result  # noqa: E402
from .factory import make_client  # noqa: E402

__all__ = [
    "__version__",
    "ExporterSettings",
    "Query",
    "ResourceClientBlueprint",
    "ValidatorSet",
    "Dispatcher",
    "QueryResult",
    "format_result",
    "make_client",
]

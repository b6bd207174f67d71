"""
cloudquery exception hierarchy.

Every failure raised while serving a query inherits from
:class:`CloudQueryError`.  SDK exceptions are translated into these types
with ``raise ... from e`` so the original cause stays attached.
"""


# ── Base ──────────────────────────────────────────────────────────────
class CloudQueryError(Exception):
    """Root exception for all cloudquery errors."""


# ── Request ───────────────────────────────────────────────────────────
class QueryValidationError(CloudQueryError):
    """A query field is missing, malformed or not allowed."""

    def __init__(self, field: str, value: str, message: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"[debug] {field} ({value}) failed validations")


class UnsupportedOperationError(CloudQueryError):
    """No handler is registered for the (resource, action, target) triple."""

    def __init__(self, resource: str, action: str, target: str) -> None:
        self.resource = resource
        self.action = action
        self.target = target
        super().__init__(
            f"Unsupported operation: resource={resource!r} action={action!r} target={target!r}"
        )


# ── Clients ───────────────────────────────────────────────────────────
class SessionError(CloudQueryError):
    """The remote API session could not be opened."""


class RemoteCallError(CloudQueryError):
    """A remote list/get call failed."""


class SerializationError(CloudQueryError):
    """A result item could not be rendered as JSON."""


# ── Metrics ───────────────────────────────────────────────────────────
class EmitterError(CloudQueryError):
    """Metrics could not be pushed to the gateway."""

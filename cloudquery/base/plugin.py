"""Resource client blueprint."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any, Callable, ClassVar, Iterable

from google.api_core import exceptions as gcp_exceptions
from google.auth import exceptions as auth_exceptions

from cloudquery.base.config import ClientConfig
from cloudquery.base.emitter import Emitter, NoopEmitter
from cloudquery.base.exceptions import (
    EmitterError,
    RemoteCallError,
    SerializationError,
    SessionError,
    UnsupportedOperationError,
)
from cloudquery.base.logger import cq_logger, query_context
from cloudquery.base.query import Query
from cloudquery.base.routing import ROUTES, RouteTable


def render_items(items: Iterable[Any]) -> str:
    """Render SDK messages as concatenated tab-indented JSON documents.

    Each item is converted to its canonical JSON form with the proto-plus
    ``Message.to_json`` classmethod and re-indented; items keep the order
    the remote listing returned them in.

    Raises:
        SerializationError: If any single item cannot be rendered.
    """
    parts: list[str] = []
    for item in items:
        try:
            parsed = json.loads(type(item).to_json(item))
        except (AttributeError, TypeError, ValueError) as e:
            raise SerializationError(
                f"Failed to serialize {type(item).__name__} result"
            ) from e
        parts.append(json.dumps(parsed, indent="\t", ensure_ascii=False))
    return "".join(parts)


def open_clients(kind: str, credentials: Any | None, **client_classes: type) -> dict[str, Any]:
    """Instantiate SDK clients sharing one set of credentials.

    Raises:
        SessionError: If credentials cannot be resolved or a transport
            cannot be created.
    """
    try:
        return {
            name: client_cls(credentials=credentials)
            for name, client_cls in client_classes.items()
        }
    except (auth_exceptions.GoogleAuthError, gcp_exceptions.GoogleAPIError) as e:
        raise SessionError(f"Failed to open {kind} session: {e}") from e


class ResourceClientBlueprint(ABC):
    """Abstract interface for a per-resource query client.

    Subclasses declare which resource they serve and mark handler methods
    with :func:`cloudquery.base.routing.route`; the marks are registered in
    the shared route table when the subclass is defined.  A handler takes
    no arguments beyond ``self`` and returns the response text.

    A client serves one query lifecycle: :meth:`do`, then :meth:`close`.
    It can be used as a context manager to guarantee the close.
    """

    resource: ClassVar[str]
    kind: ClassVar[str]
    route_table: ClassVar[RouteTable] = ROUTES

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for name, attr in vars(cls).items():
            for key in getattr(attr, "_route_keys", ()):
                cls.route_table.register(key, cls, name)

    def __init__(
        self,
        config: ClientConfig,
        emitter: Emitter | None = None,
        *,
        open_session: bool = True,
    ) -> None:
        """Resolve the scope from *config* and open the remote session.

        Args:
            config: Validated config for this resource kind.
            emitter: Metrics emitter; a :class:`NoopEmitter` when omitted.
            open_session: Skip session setup when False (mock/dry-run clients).

        Raises:
            SessionError: If the remote session could not be opened.
        """
        self.config = config
        self.emitter: Emitter = emitter or NoopEmitter()
        self.session: Any | None = self.open_session(config) if open_session else None

    @abstractmethod
    def open_session(self, config: ClientConfig) -> Any | None:
        """Create the SDK client(s) this variant calls."""

    def do(self, query: Query, request_id: str | None = None) -> str:
        """Serve *query* and return the response text.

        Every log record of the call carries *request_id*; one is generated
        when the caller passes none.

        Raises:
            UnsupportedOperationError: If no handler of this class matches.
            RemoteCallError: If the remote call failed.
            SerializationError: If a result item could not be rendered.
        """
        found = self.route_table.lookup(query.resource, query.action, query.target)
        if (
            found is None
            or found.owner is not type(self)
            or query.resource != self.resource
        ):
            raise UnsupportedOperationError(query.resource, query.action, query.target)

        context = query_context(query, request_id)
        handler: Callable[[], str] = getattr(self, found.method_name)
        result = handler()
        cq_logger.info(f"{type(self).__name__}.{found.method_name} served", **context)
        try:
            self.emitter.emit(query)
        except EmitterError as e:
            cq_logger.warning(f"Metrics emission failed: {e}", **context)
        return result

    def fetch(self, diagnostic: str, call: Callable[[], Iterable[Any]]) -> str:
        """Run a listing *call* and render its items.

        The pager is drained inside the guarded block so a failure on a
        later page is reported like a failure on the first one.

        Args:
            diagnostic: Fixed message used when the call fails
                (e.g. ``failed to list regions``).
            call: Zero-argument callable returning the items.
        """
        try:
            items = list(call())
        except (gcp_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
            raise RemoteCallError(f"{diagnostic}: {e}") from e
        return render_items(items)

    def close(self) -> None:
        """Release the SDK transports held by the session, if any."""
        if isinstance(self.session, dict):
            for client in self.session.values():
                client.transport.close()
        self.session = None

    def __enter__(self) -> ResourceClientBlueprint:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["ResourceClientBlueprint", "open_clients", "render_items"]

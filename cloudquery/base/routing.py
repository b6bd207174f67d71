"""
Process-wide action routing table.

Maps ``(resource, action, target)`` triples to the client class and method
that serve them.  Client classes register handlers with :func:`route`; the
table is filled at import time and only read afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

WILDCARD = "*"

F = TypeVar("F", bound=Callable[..., str])

RouteKey = tuple[str, str, str]


@dataclass(frozen=True)
class Route:
    owner: type
    method_name: str


class RouteTable:
    """Lookup from ``(resource, action, target)`` to a :class:`Route`."""

    def __init__(self) -> None:
        self._routes: dict[RouteKey, Route] = {}

    def register(self, key: RouteKey, owner: type, method_name: str) -> None:
        existing = self._routes.get(key)
        if existing is not None and existing.owner is not owner:
            raise ValueError(
                f"Route {key} already registered by {existing.owner.__qualname__}"
            )
        self._routes[key] = Route(owner, method_name)

    def lookup(self, resource: str, action: str, target: str) -> Route | None:
        """Exact match first, then the action-wide wildcard."""
        return self._routes.get((resource, action, target)) or self._routes.get(
            (resource, action, WILDCARD)
        )

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    def __len__(self) -> int:
        return len(self._routes)


ROUTES = RouteTable()


def route(resource: str, action: str, target: str = WILDCARD) -> Callable[[F], F]:
    """Mark a client method as the handler for a triple.

    The mark is picked up when the owning class is defined, see
    :meth:`cloudquery.base.plugin.ResourceClientBlueprint.__init_subclass__`.
    """

    def decorator(fn: F) -> F:
        keys = list(getattr(fn, "_route_keys", ()))
        keys.append((resource, action, target))
        fn._route_keys = tuple(keys)  # type: ignore[attr-defined]
        return fn

    return decorator


__all__ = ["ROUTES", "Route", "RouteTable", "RouteKey", "WILDCARD", "route"]

"""
Route Table Builder

Reads the metadata written for a controller during bootstrap and produces
an ordered list of route descriptors for an external dispatcher.
"""

from typing import Any, Callable, Dict, Iterable, List, Tuple
from dataclasses import dataclass
import logging

from ..metadata import MISSING, MetadataRegistry, subject_of

logger = logging.getLogger("lattice.controller.builder")

PATH_KEY = "path"
METHOD_KEY = "method"

_EXCLUDED_MEMBERS = frozenset(("__init__",))


@dataclass(frozen=True)
class RouteDescriptor:
    """
    A single entry of the route table.

    Attributes:
        full_path: Controller prefix + member path
        method: HTTP method (upper case)
        handler: Bound controller method
    """
    full_path: str
    method: str
    handler: Callable[..., Any]

    @property
    def handler_name(self) -> str:
        func = getattr(self.handler, "__func__", self.handler)
        return getattr(func, "__qualname__", repr(func))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict for inspection."""
        return {
            "path": self.full_path,
            "method": self.method,
            "handler": self.handler_name,
        }


class RouteTableBuilder:
    """
    Builds route descriptors from registry metadata.

    Members missing either the method or the path are skipped. Duplicate
    ``(method, full_path)`` pairs are kept as-is; see ``find_collisions``.

    Example:
        builder = RouteTableBuilder(registry)
        routes = builder.build_routes(container.resolve("ArticleController"))
        # [RouteDescriptor(full_path="/article/detail", method="GET", ...), ...]
    """

    def __init__(self, registry: MetadataRegistry):
        self.registry = registry

    def build_routes(self, controller: Any) -> List[RouteDescriptor]:
        """
        Build the routes of one realized controller, in declaration order.

        Args:
            controller: Controller instance

        Returns:
            List of route descriptors
        """
        root = self.registry.get(controller, PATH_KEY, default="")
        routes = []

        for member in self.registry.list_members(controller):
            if member in _EXCLUDED_MEMBERS:
                continue

            method = self.registry.get(controller, METHOD_KEY, member, default=MISSING)
            path = self.registry.get(controller, PATH_KEY, member, default=MISSING)
            if method is MISSING or path is MISSING:
                logger.debug(
                    "Skipping %s.%s: incomplete route metadata",
                    subject_of(controller).__name__, member,
                )
                continue

            handler = getattr(controller, member, None)
            if handler is None:
                logger.debug(
                    "Skipping %s.%s: no such attribute",
                    subject_of(controller).__name__, member,
                )
                continue

            routes.append(RouteDescriptor(
                full_path=f"{root}{path}",
                method=method,
                handler=handler,
            ))

        return routes

    def build_table(self, controllers: Iterable[Any]) -> List[RouteDescriptor]:
        """Routes of several controllers, concatenated in the given order."""
        table = []
        for controller in controllers:
            table.extend(self.build_routes(controller))
        return table


def find_collisions(
    routes: Iterable[RouteDescriptor],
) -> Dict[Tuple[str, str], List[RouteDescriptor]]:
    """
    Group routes sharing a ``(method, full_path)`` pair.

    Returns:
        Only the pairs mapped more than once
    """
    seen: Dict[Tuple[str, str], List[RouteDescriptor]] = {}
    for route in routes:
        seen.setdefault((route.method, route.full_path), []).append(route)
    return {pair: group for pair, group in seen.items() if len(group) > 1}

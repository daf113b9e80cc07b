"""
Bootstrap - the single ordered registration pass.

All container registrations, dependency-map entries and controller metadata
are written here, in the order the classes are given, before anything is
resolved. The resulting ``Wiring`` is passed explicitly to whatever needs
the container or the registry; there is no process-wide instance.

Example:
    wiring = bootstrap(Monitor27inch, AppleHost, Computer, ArticleController)

    computer = wiring.container.resolve("Computer")
    for route in wiring.routes():
        print(route.method, route.full_path)
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
import logging

from .controller.builder import RouteDescriptor, RouteTableBuilder, find_collisions
from .di.core import Container
from .di.decorators import provided_key
from .di.registrar import Registrar, iter_controllers
from .metadata import MetadataRegistry

logger = logging.getLogger("lattice.bootstrap")


@dataclass
class Wiring:
    """
    Result of a bootstrap pass.

    Attributes:
        container: Container holding every provided class
        registry: Metadata registry holding controller metadata
        controllers: Container keys of controller classes, in bootstrap order
    """
    container: Container
    registry: MetadataRegistry
    controllers: List[str] = field(default_factory=list)

    def resolve(self, key: str) -> Any:
        return self.container.resolve(key)

    def routes(self) -> List[RouteDescriptor]:
        """Realize every controller and build the combined route table."""
        builder = RouteTableBuilder(self.registry)
        return builder.build_table(self.container.resolve(key) for key in self.controllers)

    def collisions(self) -> Dict[Tuple[str, str], List[RouteDescriptor]]:
        """``(method, full_path)`` pairs claimed by more than one handler."""
        return find_collisions(self.routes())


def bootstrap(
    *classes: type,
    container: Optional[Container] = None,
    registry: Optional[MetadataRegistry] = None,
) -> Wiring:
    """
    Register ``classes`` in order and return the resulting wiring.

    Controllers without an explicit ``@Provide`` are registered under
    their class name so they can be realized like any other singleton.
    A class listed twice is registered once and contributes its routes once.

    Args:
        *classes: Classes carrying ``@Provide``, ``Inject`` or ``@Controller``
        container: Existing container to populate (a new one by default)
        registry: Existing registry to populate (a new one by default)

    Raises:
        RegistrationError: If something other than a class is given
    """
    container = container if container is not None else Container()
    registry = registry if registry is not None else MetadataRegistry()
    registrar = Registrar(container, registry)

    registrar.scan(*classes)

    controllers = []
    for cls in iter_controllers(classes):
        key = provided_key(cls)
        if key is None:
            key = cls.__name__
            container.register(key, cls)
        if key not in controllers:
            controllers.append(key)

    logger.info(
        "Bootstrapped %d classes (%d controllers)", len(classes), len(controllers)
    )
    return Wiring(container=container, registry=registry, controllers=controllers)

"""
Core DI container.

Singleton-only container with string keys, lazy realization and
post-construction property injection driven by a dependency map.
"""

from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Tuple,
    Union,
)
import logging
import threading
import time

from .diagnostics import DIDiagnostics, DIEventType
from .errors import ProviderNotFoundError, RegistrationError

logger = logging.getLogger("lattice.di.container")

Factory = Callable[[], Any]


def owner_name(owner: Union[type, str]) -> str:
    """Dependency-map owner name for a class or an explicit name."""
    if isinstance(owner, str):
        return owner
    return owner.__name__


class Container:
    """
    DI Container - registers factories and caches realized singletons.

    Property dependencies are matched against the realized instance's exact
    class name; a dependency declared on a base class does not apply to
    instances of its subclasses.

    A dependency cycle (A needs B, B needs A) is not detected. While a key is
    being injected, a nested resolve of that same key re-runs injection on
    the cached raw instance, so a cycle recurses until the interpreter
    raises ``RecursionError``.

    Example:
        container = Container()
        container.register("Monitor", Monitor27inch)
        container.register("Computer", Computer)
        container.add_dependency(Computer, "monitor", "Monitor")

        computer = container.resolve("Computer")
        assert computer.monitor is container.resolve("Monitor")
    """

    __slots__ = (
        "_factories",
        "_instances",
        "_realized",
        "_dependencies",
        "_diagnostics",
        "_lock",
    )

    def __init__(self, diagnostics: Optional[DIDiagnostics] = None):
        self._factories: Dict[str, Factory] = {}
        self._instances: Dict[str, Any] = {}  # raw instance, cached before injection
        self._realized: set = set()  # keys whose injection completed
        # {owner_name: {attribute: key}}; dicts keep declaration order
        self._dependencies: Dict[str, Dict[str, str]] = {}
        self._diagnostics = diagnostics or DIDiagnostics()
        self._lock = threading.RLock()

    @property
    def diagnostics(self) -> DIDiagnostics:
        return self._diagnostics

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, key: str, factory: Factory) -> None:
        """
        Register a zero-argument factory under ``key``.

        The factory is not invoked. Registering again before the key is
        realized replaces the factory; once realized, the cached instance
        is kept and the new factory is ignored.

        Args:
            key: Registration key
            factory: Zero-argument callable producing the instance

        Raises:
            RegistrationError: If ``factory`` is not callable
        """
        if not callable(factory):
            raise RegistrationError(factory, f"factory for key={key!r} is not callable")

        with self._lock:
            if key in self._instances:
                logger.debug("Ignoring re-registration of realized key %r", key)
                self._diagnostics.emit(DIEventType.REGISTRATION_IGNORED, key=key)
                return

            if key in self._factories:
                logger.debug("Replacing factory for key %r", key)
            self._factories[key] = factory

        self._diagnostics.emit(DIEventType.REGISTRATION, key=key)

    def add_dependency(self, owner: Union[type, str], attribute: str, key: str) -> None:
        """
        Record that ``owner.attribute`` receives ``resolve(key)``.

        Args:
            owner: Owning class, or its name
            attribute: Attribute to assign after construction
            key: Registration key of the dependency
        """
        name = owner_name(owner)
        with self._lock:
            self._dependencies.setdefault(name, {})[attribute] = key
        logger.debug("Recorded dependency %s.%s -> %r", name, attribute, key)

    def dependencies_for(self, owner: Union[type, str]) -> List[Tuple[str, str]]:
        """``(attribute, key)`` pairs declared for an owner, in declaration order."""
        with self._lock:
            return list(self._dependencies.get(owner_name(owner), {}).items())

    def dependency_map(self) -> Dict[str, Dict[str, str]]:
        """Copy of the full dependency map."""
        with self._lock:
            return {owner: dict(deps) for owner, deps in self._dependencies.items()}

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, key: str) -> Any:
        """
        Return the singleton for ``key``, realizing it on first use.

        Unknown keys are not an error: ``None`` is returned.

        Args:
            key: Registration key

        Returns:
            The fully injected instance, or None if nothing is registered
        """
        # Fast path: realized instances never change
        if key in self._realized:
            return self._instances[key]

        with self._lock:
            if key in self._realized:
                return self._instances[key]

            if key in self._instances:
                instance = self._instances[key]
            else:
                factory = self._factories.get(key)
                if factory is None:
                    logger.debug("No factory registered for key %r", key)
                    self._diagnostics.emit(DIEventType.LOOKUP_MISS, key=key)
                    return None

                self._diagnostics.emit(DIEventType.RESOLUTION_START, key=key)
                started = time.perf_counter()
                instance = factory()
                self._instances[key] = instance
                logger.debug("Realized %r as %s", key, type(instance).__name__)
                self._diagnostics.emit(
                    DIEventType.RESOLUTION_SUCCESS,
                    key=key,
                    duration=time.perf_counter() - started,
                )

            self._inject(instance)
            self._realized.add(key)
            return instance

    def require(self, key: str) -> Any:
        """
        Like ``resolve`` but raise for unknown keys.

        Raises:
            ProviderNotFoundError: If no factory is registered for ``key``
        """
        if not self.is_registered(key):
            raise ProviderNotFoundError(key, candidates=self.keys())
        return self.resolve(key)

    def _inject(self, instance: Any) -> None:
        """Assign every declared dependency of ``instance``'s class."""
        name = type(instance).__name__
        for attribute, dep_key in self.dependencies_for(name):
            setattr(instance, attribute, self.resolve(dep_key))
            self._diagnostics.emit(
                DIEventType.INJECTION, key=dep_key, owner=name, attribute=attribute
            )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def is_registered(self, key: str) -> bool:
        """Check whether a factory (or realized instance) exists for ``key``."""
        with self._lock:
            return key in self._factories or key in self._instances

    def is_realized(self, key: str) -> bool:
        """Check whether ``key`` has been resolved and injected."""
        return key in self._realized

    def keys(self) -> List[str]:
        """Registered keys, in registration order."""
        with self._lock:
            return list(self._factories)

    def __contains__(self, key: str) -> bool:
        return self.is_registered(key)

    def __repr__(self) -> str:
        return (
            f"<Container registered={len(self._factories)} "
            f"realized={len(self._realized)}>"
        )

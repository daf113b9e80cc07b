"""
Declarative markers for DI registration.

Decorators here only attach metadata to classes; nothing touches a container
until ``Registrar`` (or ``lattice.bootstrap``) processes the class.
"""

from typing import Callable, Optional, Type, TypeVar
from dataclasses import dataclass


T = TypeVar("T")

PROVIDE_ATTR = "__lattice_provide__"


@dataclass(frozen=True)
class Inject:
    """
    Property injection marker.

    Usage:
        @Provide("Computer")
        class Computer:
            monitor: Annotated[Monitor27inch, Inject("Monitor")]
            host: Annotated[AppleHost, Inject("Host")]
    """

    key: str


def inject(key: str) -> Inject:
    """Create property injection metadata for ``Annotated`` hints."""
    return Inject(key)


def Provide(key: Optional[str] = None) -> Callable[[Type[T]], Type[T]]:
    """
    Class decorator marking a class as a container-provided singleton.

    At bootstrap the class itself is registered as the zero-argument factory
    under ``key``, or under the class name when ``key`` is omitted.

    Example:
        @Provide("Monitor")
        class Monitor27inch:
            pass

        @Provide()
        class AppleHost:      # registered as "AppleHost"
            pass
    """
    def decorator(cls: Type[T]) -> Type[T]:
        setattr(cls, PROVIDE_ATTR, key if key is not None else cls.__name__)
        return cls

    return decorator


def provided_key(cls: type) -> Optional[str]:
    """Key a class was marked with, ignoring markers inherited from bases."""
    return cls.__dict__.get(PROVIDE_ATTR)

"""
Declarative Registrar

Turns the inert markers left by ``@Provide``, ``Inject`` and the controller
decorators into container registrations, dependency-map entries and
registry metadata. Runs once, during bootstrap, before anything is resolved.
"""

from typing import Any, Dict, ForwardRef, Iterable, List, Optional, Tuple, get_origin
from typing import Annotated
import ast
import inspect
import logging
import sys

from ..controller.builder import METHOD_KEY, PATH_KEY
from ..controller.decorators import controller_prefix, route_metadata
from ..metadata import MetadataRegistry
from .core import Container
from .decorators import Inject, provided_key
from .errors import RegistrationError

logger = logging.getLogger("lattice.di.registrar")

_MARKER_NAMES = frozenset(("Inject", "inject"))


def _raw_annotations(cls: type) -> Dict[str, Any]:
    """Annotations declared on ``cls`` itself, without evaluating strings."""
    if sys.version_info >= (3, 14):
        import annotationlib
        return annotationlib.get_annotations(cls, format=annotationlib.Format.FORWARDREF)
    return inspect.get_annotations(cls)


def _call_name(node: ast.AST) -> Optional[str]:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _marker_key_from_source(source: str) -> Optional[str]:
    """
    Read the key of ``Annotated[T, Inject("key")]`` from annotation text.

    Only literal string keys can be recovered; anything else returns None.
    """
    try:
        node = ast.parse(source, mode="eval").body
    except SyntaxError:
        return None

    if not isinstance(node, ast.Subscript) or _call_name(node.value) != "Annotated":
        return None
    if not isinstance(node.slice, ast.Tuple):
        return None

    for marker in node.slice.elts[1:]:
        if not isinstance(marker, ast.Call) or _call_name(marker.func) not in _MARKER_NAMES:
            continue
        args = list(marker.args) + [kw.value for kw in marker.keywords if kw.arg == "key"]
        if len(args) == 1 and isinstance(args[0], ast.Constant) and isinstance(args[0].value, str):
            return args[0].value
    return None


def _mentions_marker(source: str) -> bool:
    """Whether annotation text calls an injection marker anywhere."""
    try:
        tree = ast.parse(source, mode="eval")
    except SyntaxError:
        return any(f"{name}(" in source for name in _MARKER_NAMES)
    return any(
        isinstance(node, ast.Call) and _call_name(node.func) in _MARKER_NAMES
        for node in ast.walk(tree)
    )


def _evaluate(cls: type, attribute: str, hint: Any) -> Tuple[Any, Optional[str]]:
    """
    Evaluate one annotation against the class's module and namespace.

    Returns:
        ``(hint, None)`` when evaluation succeeds, otherwise
        ``(None, source)`` with the unevaluated annotation text
    """
    if isinstance(hint, ForwardRef):
        hint = hint.__forward_arg__
    if not isinstance(hint, str):
        return hint, None

    module = sys.modules.get(cls.__module__)
    globalns = vars(module) if module is not None else {}
    try:
        return eval(hint, globalns, dict(vars(cls))), None
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        logger.debug(
            "Cannot evaluate annotation %s.%s = %r: %s", cls.__name__, attribute, hint, e
        )
        return None, hint


def _inject_key(cls: type, attribute: str, hint: Any) -> Optional[str]:
    """
    Injection key declared for one annotation, or None.

    Raises:
        RegistrationError: If the annotation mentions an injection marker
            whose key cannot be determined
    """
    value, source = _evaluate(cls, attribute, hint)

    if source is not None:
        key = _marker_key_from_source(source)
        if key is None and _mentions_marker(source):
            raise RegistrationError(
                cls,
                f"cannot read the injection key of attribute {attribute!r} "
                f"from annotation {source!r}",
            )
        return key

    if get_origin(value) is not Annotated:
        return None
    for marker in value.__metadata__:
        if isinstance(marker, Inject):
            return marker.key
    return None


def injection_points(cls: type) -> List[Tuple[str, str]]:
    """
    ``(attribute, key)`` pairs declared with ``Annotated[T, Inject(key)]``.

    Only the class's own annotations are considered, in declaration order.
    Each annotation is evaluated separately, so one unresolvable name does
    not hide the markers on other attributes.

    Raises:
        RegistrationError: If an ``Inject`` annotation cannot be read
    """
    points = []
    for attribute, hint in _raw_annotations(cls).items():
        key = _inject_key(cls, attribute, hint)
        if key is not None:
            points.append((attribute, key))
    return points


class Registrar:
    """
    Bootstrap-time bridge between declarations and the container/registry.

    Every operation is idempotent, so scanning a class twice is harmless.

    Example:
        registrar = Registrar(container, registry)
        registrar.scan(Monitor27inch, AppleHost, Computer, ArticleController)
    """

    def __init__(self, container: Container, registry: MetadataRegistry):
        self.container = container
        self.registry = registry

    def provide(self, cls: type) -> Any:
        """
        Register ``cls`` as the factory for its ``@Provide`` key.

        Returns:
            The key used, or None if the class carries no marker
        """
        self._check_class(cls)
        key = provided_key(cls)
        if key is None:
            return None
        self.container.register(key, cls)
        logger.debug("Provided %s as %r", cls.__name__, key)
        return key

    def inject(self, cls: type) -> List[Tuple[str, str]]:
        """Record the dependency-map entries declared on ``cls``."""
        self._check_class(cls)
        points = injection_points(cls)
        for attribute, key in points:
            self.container.add_dependency(cls, attribute, key)
        return points

    def controller(self, cls: type) -> bool:
        """
        Write route metadata for a ``@Controller`` class.

        The class gets its root path under ``"path"``; every decorated
        function in the class body gets ``"method"`` and, when given,
        ``"path"``, in declaration order.

        Returns:
            True if ``cls`` is a controller
        """
        self._check_class(cls)
        prefix = controller_prefix(cls)
        if prefix is None:
            return False

        self.registry.define(cls, PATH_KEY, prefix)

        for name, member in vars(cls).items():
            meta = route_metadata(member)
            if meta is None:
                continue
            if meta['method'] is not None:
                self.registry.define(cls, METHOD_KEY, meta['method'], member=name)
            if meta['path'] is not None:
                self.registry.define(cls, PATH_KEY, meta['path'], member=name)

        logger.debug("Registered controller %s (prefix=%r)", cls.__name__, prefix)
        return True

    def register_class(self, cls: type) -> Any:
        """Apply every marker found on ``cls``; returns its provide key."""
        key = self.provide(cls)
        self.inject(cls)
        self.controller(cls)
        return key

    def scan(self, *classes: type) -> List[Any]:
        """Register classes in the given order; returns their provide keys."""
        return [self.register_class(cls) for cls in classes]

    @staticmethod
    def _check_class(cls: Any) -> None:
        if not isinstance(cls, type):
            raise RegistrationError(cls, "expected a class")


def iter_controllers(classes: Iterable[type]) -> Iterable[type]:
    """Classes marked with ``@Controller``."""
    return (cls for cls in classes if controller_prefix(cls) is not None)

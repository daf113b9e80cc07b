"""
Controller Decorators

Class and method decorators for controllers.
Attach metadata without import-time side effects.
"""

from typing import Any, Callable, Dict, Optional, Type, TypeVar

from ..errors import InvalidRouteError


F = TypeVar('F', bound=Callable[..., Any])
C = TypeVar('C', bound=type)

ROUTE_ATTR = "__route_metadata__"
CONTROLLER_ATTR = "__controller_prefix__"

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")


def Controller(prefix: Optional[str] = None) -> Callable[[C], C]:
    """
    Mark a class as a controller with a root path.

    Example:
        @Controller("/article")
        class ArticleController:
            @GET("/detail")
            def get_detail(self):
                return "get detail"
    """
    def decorator(cls: C) -> C:
        setattr(cls, CONTROLLER_ATTR, prefix if prefix is not None else "")
        return cls

    return decorator


def controller_prefix(cls: type) -> Optional[str]:
    """Root path a class was marked with, or None if it is not a controller."""
    return cls.__dict__.get(CONTROLLER_ATTR)


class RouteDecorator:
    """
    Base route decorator.

    Attaches metadata to controller methods for bootstrap-time extraction.
    A ``path`` of None records only the HTTP method, which leaves the
    route incomplete.
    """

    method: Optional[str] = None

    def __init__(self, path: Optional[str] = None):
        self.path = path

    def __call__(self, func: F) -> F:
        """
        Decorate controller method.

        Attaches metadata without executing anything.
        """
        metadata: Dict[str, Any] = {
            'method': self.method,
            'path': self.path,
        }
        setattr(func, ROUTE_ATTR, metadata)
        return func


class GET(RouteDecorator):
    """GET request decorator."""
    method = 'GET'


class POST(RouteDecorator):
    """POST request decorator."""
    method = 'POST'


class PUT(RouteDecorator):
    """PUT request decorator."""
    method = 'PUT'


class PATCH(RouteDecorator):
    """PATCH request decorator."""
    method = 'PATCH'


class DELETE(RouteDecorator):
    """DELETE request decorator."""
    method = 'DELETE'


class HEAD(RouteDecorator):
    """HEAD request decorator."""
    method = 'HEAD'


class OPTIONS(RouteDecorator):
    """OPTIONS request decorator."""
    method = 'OPTIONS'


_DECORATORS: Dict[str, Type[RouteDecorator]] = {
    'GET': GET,
    'POST': POST,
    'PUT': PUT,
    'PATCH': PATCH,
    'DELETE': DELETE,
    'HEAD': HEAD,
    'OPTIONS': OPTIONS,
}


def route(method: str, path: Optional[str] = None) -> Callable[[F], F]:
    """
    Generic route decorator.

    Args:
        method: HTTP method, case-insensitive
        path: Path relative to the controller prefix

    Raises:
        InvalidRouteError: If ``method`` is not a supported verb

    Example:
        @route("delete", "/delete")
        def delete_article(self):
            ...
    """
    decorator_cls = _DECORATORS.get(method.upper())
    if decorator_cls is None:
        raise InvalidRouteError(method, list(HTTP_METHODS))
    return decorator_cls(path)


def route_metadata(func: Any) -> Optional[Dict[str, Any]]:
    """Route metadata attached to a function, if any."""
    return getattr(func, ROUTE_ATTR, None)

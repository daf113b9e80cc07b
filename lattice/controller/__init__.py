"""
Lattice Controller System

Declarative controllers whose handlers carry route metadata, and the
builder that turns that metadata into an ordered route table.

Example:
    from lattice import Controller, GET, POST

    @Controller("/article")
    class ArticleController:

        @GET("/detail")
        def get_detail(self):
            return "get detail"

        @POST("/add")
        def add_article(self):
            return "post add"
"""

from .decorators import (
    Controller,
    RouteDecorator,
    GET, POST, PUT, PATCH, DELETE,
    HEAD, OPTIONS,
    HTTP_METHODS,
    route,
)
from .builder import (
    RouteDescriptor,
    RouteTableBuilder,
    find_collisions,
)

__all__ = [
    # Decorators
    "Controller",
    "RouteDecorator",
    "GET", "POST", "PUT", "PATCH", "DELETE",
    "HEAD", "OPTIONS",
    "HTTP_METHODS",
    "route",

    # Route table
    "RouteDescriptor",
    "RouteTableBuilder",
    "find_collisions",
]

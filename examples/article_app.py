"""
Article app demo - providers, property injection and a route table.

This demonstrates:
1. @Provide registering classes under explicit keys
2. Inject markers wiring properties after construction
3. @Controller / @GET / @POST route metadata
4. Building the route table from a realized controller

Run:
    python examples/article_app.py
    lattice routes examples.article_app:build
"""

from typing import Annotated

from lattice import (
    Controller,
    DELETE,
    GET,
    POST,
    Inject,
    Provide,
    bootstrap,
)


# ============================================================================
# 1. Services
# ============================================================================

@Provide("Monitor")
class Monitor27inch:
    size = 27


@Provide("Host")
class AppleHost:
    vendor = "apple"


@Provide("Computer")
class Computer:
    monitor: Annotated[Monitor27inch, Inject("Monitor")]
    host: Annotated[AppleHost, Inject("Host")]

    def bootstrap(self):
        return f"booting {self.host.vendor} host on a {self.monitor.size}-inch monitor"


@Provide("ArticleStore")
class ArticleStore:

    def __init__(self):
        self.articles = {}

    def add(self, title: str) -> int:
        article_id = len(self.articles) + 1
        self.articles[article_id] = title
        return article_id


# ============================================================================
# 2. Controllers
# ============================================================================

@Controller("/article")
class ArticleController:
    store: Annotated[ArticleStore, Inject("ArticleStore")]

    @GET("/detail")
    def get_detail(self):
        return "get detail"

    @POST("/add")
    def add_article(self):
        return self.store.add("untitled")

    @DELETE("/remove")
    def remove_article(self):
        return "deleted"


# ============================================================================
# 3. Bootstrap
# ============================================================================

def build():
    return bootstrap(Monitor27inch, AppleHost, Computer, ArticleStore, ArticleController)


if __name__ == "__main__":
    wiring = build()

    print(wiring.resolve("Computer").bootstrap())

    for route in wiring.routes():
        print(f"{route.method:<7} {route.full_path:<20} -> {route.handler()}")

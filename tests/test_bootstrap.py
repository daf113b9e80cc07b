"""
Bootstrap (bootstrap.py)

End-to-end: one ordered registration pass, lazy realization with property
injection, and the combined route table.
"""

from typing import Annotated

import pytest

from lattice import (
    Container,
    Controller,
    GET,
    Inject,
    MetadataRegistry,
    Provide,
    RegistrationError,
    Wiring,
    bootstrap,
)

from tests.conftest import (
    SAMPLE_CLASSES,
    AppleHost,
    ArticleController,
    Computer,
    Monitor27inch,
)


class TestBootstrap:

    def test_returns_wiring(self):
        wiring = bootstrap(*SAMPLE_CLASSES)

        assert isinstance(wiring, Wiring)
        assert wiring.controllers == ["ArticleController"]
        assert wiring.container.keys() == ["Monitor", "Host", "Computer", "ArticleController"]

    def test_nothing_realized_during_bootstrap(self):
        wiring = bootstrap(*SAMPLE_CLASSES)
        assert not any(wiring.container.is_realized(k) for k in wiring.container.keys())

    def test_computer_is_fully_injected(self):
        wiring = bootstrap(*SAMPLE_CLASSES)

        computer = wiring.resolve("Computer")

        assert isinstance(computer, Computer)
        assert isinstance(computer.monitor, Monitor27inch)
        assert isinstance(computer.host, AppleHost)
        assert computer.monitor is wiring.resolve("Monitor")
        assert computer.host is wiring.resolve("Host")
        assert computer.bootstrap() == "booting"

    def test_routes(self):
        wiring = bootstrap(*SAMPLE_CLASSES)
        controller = wiring.resolve("ArticleController")

        routes = wiring.routes()

        assert [(r.method, r.full_path) for r in routes] == [
            ("GET", "/article/detail"),
            ("POST", "/article/add"),
        ]
        assert routes[0].handler == controller.get_detail
        assert routes[1].handler == controller.add_article
        assert wiring.collisions() == {}

    def test_uses_given_container_and_registry(self):
        container = Container()
        registry = MetadataRegistry()

        wiring = bootstrap(ArticleController, container=container, registry=registry)

        assert wiring.container is container
        assert wiring.registry is registry
        assert registry.get(ArticleController, "path") == "/article"

    def test_separate_wirings_are_isolated(self):
        first = bootstrap(*SAMPLE_CLASSES)
        second = bootstrap(*SAMPLE_CLASSES)
        assert first.resolve("Computer") is not second.resolve("Computer")

    def test_provided_controller_keeps_its_key(self):
        @Provide("articles")
        @Controller("/a")
        class ProvidedController:
            @GET("/x")
            def x(self):
                pass

        wiring = bootstrap(ProvidedController)

        assert wiring.controllers == ["articles"]
        assert [r.full_path for r in wiring.routes()] == ["/a/x"]

    def test_controller_with_injected_service(self):
        @Provide("Repo")
        class ArticleRepo:
            def titles(self):
                return ["hello"]

        @Controller("/article")
        class RepoController:
            repo: Annotated[ArticleRepo, Inject("Repo")]

            @GET("/titles")
            def titles(self):
                return self.repo.titles()

        wiring = bootstrap(RepoController, ArticleRepo)
        (titles_route,) = wiring.routes()
        assert titles_route.handler() == ["hello"]

    def test_collisions_across_controllers(self):
        @Controller("/shared")
        class One:
            @GET("/x")
            def x(self):
                pass

        @Controller("/shared")
        class Two:
            @GET("/x")
            def x(self):
                pass

        wiring = bootstrap(One, Two)

        assert len(wiring.routes()) == 2
        assert list(wiring.collisions()) == [("GET", "/shared/x")]

    def test_controller_listed_twice_routes_once(self):
        wiring = bootstrap(ArticleController, ArticleController)

        assert wiring.controllers == ["ArticleController"]
        assert [r.full_path for r in wiring.routes()] == ["/article/detail", "/article/add"]
        assert wiring.collisions() == {}

    def test_rejects_non_class(self):
        with pytest.raises(RegistrationError):
            bootstrap(Monitor27inch, "Computer")

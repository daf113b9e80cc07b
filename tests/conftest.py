"""
Shared test fixtures and helpers for the Lattice test suite.
"""

import sys
from contextlib import contextmanager
from typing import Annotated

import pytest

from lattice.controller import Controller, GET, POST
from lattice.di.core import Container
from lattice.di.decorators import Inject, Provide
from lattice.di.diagnostics import DIDiagnostics, RecordingDiagnosticListener
from lattice.metadata import MetadataRegistry


# ============================================================================
# Recursion guard
# ============================================================================


@contextmanager
def recursion_limit(extra_frames: int = 200):
    """Cap recursion at the current depth plus ``extra_frames``."""
    depth = 0
    frame = sys._getframe()
    while frame is not None:
        depth += 1
        frame = frame.f_back

    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(depth + extra_frames)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


# ============================================================================
# Sample application
# ============================================================================


@Provide("Monitor")
class Monitor27inch:
    pass


@Provide("Host")
class AppleHost:
    pass


@Provide("Computer")
class Computer:
    monitor: Annotated[Monitor27inch, Inject("Monitor")]
    host: Annotated[AppleHost, Inject("Host")]

    def bootstrap(self):
        return "booting"


@Controller("/article")
class ArticleController:

    @GET("/detail")
    def get_detail(self):
        return "get detail"

    @POST("/add")
    def add_article(self):
        return "post add"

    def helper(self):
        return "not a route"


SAMPLE_CLASSES = (Monitor27inch, AppleHost, Computer, ArticleController)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def recorder():
    return RecordingDiagnosticListener()


@pytest.fixture
def container(recorder):
    diagnostics = DIDiagnostics()
    diagnostics.add_listener(recorder)
    return Container(diagnostics=diagnostics)


@pytest.fixture
def registry():
    return MetadataRegistry()

"""
Injection points under postponed annotations (di/registrar.py)

Every annotation in this module is a string, so the registrar has to
evaluate each one on its own to find the Inject markers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import pytest

from lattice.bootstrap import bootstrap
from lattice.di.decorators import Inject, Provide, inject
from lattice.di.errors import RegistrationError
from lattice.di.registrar import injection_points

if TYPE_CHECKING:
    from collections.abc import Sized


@Provide("Engine")
class Engine:
    pass


@Provide("Car")
class Car:
    engine: Annotated[Engine, Inject("Engine")]
    registry_hint: Sized
    wheels: int = 4


# ============================================================================
# Module-level classes
# ============================================================================

class TestModuleLevelAnnotations:

    def test_type_only_name_does_not_hide_markers(self):
        assert injection_points(Car) == [("engine", "Engine")]

    def test_car_is_injected(self):
        wiring = bootstrap(Engine, Car)

        car = wiring.resolve("Car")

        assert car.engine is wiring.resolve("Engine")
        assert car.wheels == 4


# ============================================================================
# Classes declared inside a function
# ============================================================================

class TestLocalAnnotations:

    def test_local_classes_are_injected(self):
        @Provide("Monitor")
        class Monitor:
            pass

        @Provide("Computer")
        class Computer:
            monitor: Annotated[Monitor, Inject("Monitor")]

        wiring = bootstrap(Monitor, Computer)
        computer = wiring.resolve("Computer")

        assert wiring.container.dependencies_for(Computer) == [("monitor", "Monitor")]
        assert computer.monitor is wiring.resolve("Monitor")

    def test_keyword_and_helper_forms(self):
        class Monitor:
            pass

        class Host:
            pass

        class Computer:
            monitor: Annotated[Monitor, Inject(key="Monitor")]
            host: Annotated[Host, inject("Host")]

        assert injection_points(Computer) == [("monitor", "Monitor"), ("host", "Host")]

    def test_unreadable_key_raises(self):
        class Monitor:
            pass

        monitor_key = "Monitor"

        @Provide("Computer")
        class Computer:
            monitor: Annotated[Monitor, Inject(monitor_key)]

        with pytest.raises(RegistrationError, match="attribute 'monitor'"):
            bootstrap(Monitor, Computer)

    def test_unresolvable_plain_annotation_is_ignored(self):
        class Injector:
            pass

        class Computer:
            injector: Injector

        assert injection_points(Computer) == []

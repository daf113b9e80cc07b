"""
Metadata Registry (metadata.py)

Tests define/get/has/keys, subject normalization and member ordering.
"""

import threading

import pytest

from lattice.metadata import MISSING, MetadataRegistry, subject_of


class Animal:
    kind = "mammal"

    def eat(self):
        pass


# ============================================================================
# Subject normalization
# ============================================================================

class TestSubjectOf:

    def test_class_is_its_own_subject(self):
        assert subject_of(Animal) is Animal

    def test_instance_maps_to_class(self):
        assert subject_of(Animal()) is Animal


# ============================================================================
# define / get
# ============================================================================

class TestDefineAndGet:

    def test_class_level_value(self, registry):
        registry.define(Animal, "Class", "Animal metadata")
        assert registry.get(Animal, "Class") == "Animal metadata"

    def test_member_level_value(self, registry):
        registry.define(Animal, "proto method", "eat metadata", member="eat")
        assert registry.get(Animal, "proto method", member="eat") == "eat metadata"
        # Class-level bucket is separate
        assert registry.get(Animal, "proto method") is None

    def test_instance_reads_class_metadata(self, registry):
        registry.define(Animal, "path", "/animals")
        registry.define(Animal, "method", "GET", member="eat")

        animal = Animal()
        assert registry.get(animal, "path") == "/animals"
        assert registry.get(animal, "method", member="eat") == "GET"

    def test_instance_writes_land_on_class(self, registry):
        registry.define(Animal(), "Class", "from instance")
        assert registry.get(Animal, "Class") == "from instance"

    def test_overwrite(self, registry):
        registry.define(Animal, "Class", "v1")
        registry.define(Animal, "Class", "v2")
        assert registry.get(Animal, "Class") == "v2"

    def test_identical_define_is_idempotent(self, registry):
        registry.define(Animal, "method", "GET", member="eat")
        registry.define(Animal, "method", "GET", member="eat")
        assert registry.keys(Animal, member="eat") == ["method"]
        assert registry.get(Animal, "method", member="eat") == "GET"
        assert registry.list_members(Animal) == ["eat"]

    def test_missing_returns_default(self, registry):
        assert registry.get(Animal, "nope") is None
        assert registry.get(Animal, "nope", default="fallback") == "fallback"
        assert registry.get(Animal, "nope", member="eat", default=MISSING) is MISSING

    def test_stored_none_is_distinguishable(self, registry):
        registry.define(Animal, "maybe", None)
        assert registry.get(Animal, "maybe", default=MISSING) is None
        assert registry.has(Animal, "maybe") is True
        assert registry.has(Animal, "other") is False

    def test_unrelated_subjects_do_not_leak(self, registry):
        class Plant:
            pass

        registry.define(Animal, "path", "/animals")
        assert registry.get(Plant, "path") is None
        assert Plant not in registry
        assert Animal in registry


# ============================================================================
# Enumeration
# ============================================================================

class TestEnumeration:

    def test_keys_in_definition_order(self, registry):
        registry.define(Animal, "b", 1, member="eat")
        registry.define(Animal, "a", 2, member="eat")
        assert registry.keys(Animal, member="eat") == ["b", "a"]
        assert registry.keys(Animal) == []

    def test_list_members_declaration_order(self, registry):
        registry.define(Animal, "path", "/animals")
        registry.define(Animal, "method", "GET", member="walk")
        registry.define(Animal, "method", "POST", member="eat")
        registry.define(Animal, "path", "/walk", member="walk")
        assert registry.list_members(Animal) == ["walk", "eat"]

    def test_list_members_excludes_class_level(self, registry):
        registry.define(Animal, "path", "/animals")
        assert registry.list_members(Animal) == []

    def test_list_members_unknown_subject(self, registry):
        assert registry.list_members(Animal) == []

    def test_subjects(self, registry):
        class Plant:
            pass

        registry.define(Animal, "x", 1)
        registry.define(Plant, "x", 2)
        assert registry.subjects() == [Animal, Plant]

    def test_clear(self, registry):
        registry.define(Animal, "x", 1, member="eat")
        registry.clear()
        assert registry.get(Animal, "x", member="eat") is None
        assert registry.list_members(Animal) == []


# ============================================================================
# Concurrency
# ============================================================================

class TestConcurrency:

    def test_parallel_defines(self):
        registry = MetadataRegistry()

        def worker(n):
            for i in range(50):
                registry.define(Animal, "value", i, member=f"m{n}_{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry.list_members(Animal)) == 200

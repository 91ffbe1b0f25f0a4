import unittest

import pytest

import wirebox
from wirebox import Container, Lifetime, ResolutionError


class TestGetResolver(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()

    def test_resolver_resolves_against_its_container(self):
        resolve = self.cont.get_resolver()
        self.cont.register_value("count", 5)
        assert resolve("count") == 5

    def test_resolver_sees_registrations_made_after_it_was_created(self):
        resolve = self.cont.get_resolver()
        self.cont.register("later", list, Lifetime.PERMANENT)
        assert resolve("later") == []

    def test_resolver_is_bound_to_one_container(self):
        other = Container()
        other.register_value("count", 7)
        self.cont.register_value("count", 5)

        assert self.cont.get_resolver()("count") == 5
        assert other.get_resolver()("count") == 7

    def test_resolver_raises_for_unregistered_token(self):
        resolve = self.cont.get_resolver()
        with pytest.raises(ResolutionError, match="Cannot resolve type nope."):
            resolve("nope")


class TestGlobalContainer(unittest.TestCase):
    def setUp(self):
        self._saved = (
            dict(wirebox.global_container._registrations),
            dict(wirebox.global_container._instances),
        )

    def tearDown(self):
        registrations, instances = self._saved
        wirebox.global_container._registrations.clear()
        wirebox.global_container._registrations.update(registrations)
        wirebox.global_container._instances.clear()
        wirebox.global_container._instances.update(instances)

    def test_global_container_is_a_container(self):
        assert isinstance(wirebox.global_container, Container)

    def test_global_resolve_reads_global_container(self):
        wirebox.global_container.register_value("wirebox-test-value", 42)
        assert wirebox.global_resolve("wirebox-test-value") == 42

    def test_global_container_wires_dependencies_through_global_resolve(self):
        class Engine: ...

        class Car:
            def __init__(self, engine: Engine):
                self.engine = engine

        wirebox.global_container.register(Engine, Engine, Lifetime.PERMANENT)
        wirebox.global_container.register(Car, lambda: Car(wirebox.global_resolve(Engine)), Lifetime.PERMANENT)

        assert wirebox.global_resolve(Car).engine is wirebox.global_resolve(Engine)

    def test_global_container_is_independent_of_private_containers(self):
        private = Container()
        private.register_value("wirebox-test-private", 1)

        with pytest.raises(ResolutionError):
            wirebox.global_resolve("wirebox-test-private")

"""Integration tests for complete object graph construction."""

import threading
from abc import ABC, abstractmethod
from typing import List, Optional

import pytest

from autowire_di import (
    DependencyInjector,
    IDependencyInjector,
    MemoizingIntrospector,
    MissingParameterError,
)


class Settings:
    def __init__(self, dsn: str = "sqlite://", cache_ttl: int = 60):
        self.dsn = dsn
        self.cache_ttl = cache_ttl


class UserRepository(ABC):
    @abstractmethod
    def all(self) -> List[str]: ...


class SqlUserRepository(UserRepository):
    def __init__(self, settings: Settings):
        self.settings = settings

    def all(self) -> List[str]:
        return ["ada", "grace"]


class Cache(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]: ...


class MemoryCache(Cache):
    def __init__(self, settings: Settings):
        self.ttl = settings.cache_ttl
        self.values = {}

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)


class Mailer:
    def __init__(self, settings: Settings, sender: str = "noreply@example.com"):
        self.settings = settings
        self.sender = sender


class UserService:
    def __init__(self, repository: UserRepository, mailer: Mailer, cache: Optional[Cache] = None):
        self.repository = repository
        self.mailer = mailer
        self.cache = cache


class UserController:
    def __init__(self, service: UserService, injector: IDependencyInjector):
        self.service = service
        self.injector = injector


class Lookup(ABC):
    @abstractmethod
    def find(self) -> str: ...


class DefaultLookup(Lookup):
    def __init__(self, name: str = "default"):
        self.name = name

    def find(self) -> str:
        return self.name


class Worker:
    def __init__(self, lookup: DefaultLookup):
        self.lookup = lookup


class Job:
    def __init__(self, lookup: Lookup, worker: Worker):
        self.lookup = lookup
        self.worker = worker


class TestApplicationGraph:
    """Test cases for wiring a layered application."""

    def test_builds_full_graph(self):
        """Test that a controller is built with every layer wired."""
        injector = DependencyInjector(implementations={UserRepository: SqlUserRepository})

        controller = injector.new_instance(UserController)

        assert controller.injector is injector
        assert controller.service.repository.all() == ["ada", "grace"]
        assert controller.service.cache is None
        assert controller.service.mailer.sender == "noreply@example.com"

    def test_graph_shares_settings(self):
        """Test that every component receives the same settings singleton."""
        injector = DependencyInjector(
            implementations={UserRepository: SqlUserRepository, Cache: MemoryCache},
        )

        service = injector.new_instance(UserService)

        assert service.repository.settings is service.mailer.settings
        assert service.cache.ttl == 60

    def test_preseeded_settings_are_used(self):
        """Test that a registered settings object reaches every component."""
        settings = Settings(dsn="postgresql://db", cache_ttl=5)
        injector = DependencyInjector(
            objects=[settings],
            implementations={UserRepository: SqlUserRepository, Cache: MemoryCache},
        )

        service = injector.new_instance(UserService)

        assert service.repository.settings is settings
        assert service.cache.ttl == 5

    def test_factory_configures_component(self):
        """Test that a factory can use other singletons to build a component."""
        injector = DependencyInjector(implementations={UserRepository: SqlUserRepository})

        def build_mailer(settings: Settings) -> Mailer:
            return Mailer(settings, sender=f"admin@{settings.dsn.split('://')[0]}")

        injector.register_factory(Mailer, build_mailer)

        assert injector.new_instance(UserService).mailer.sender == "admin@sqlite"

    def test_new_instances_share_dependencies(self):
        """Test that transient controllers share their singleton services."""
        injector = DependencyInjector(implementations={UserRepository: SqlUserRepository})

        first = injector.new_instance(UserController)
        second = injector.new_instance(UserController)

        assert first is not second
        assert first.service is second.service


class TestInterfaceWiringExample:
    """Test cases for wiring an interface shared across a graph."""

    def test_unbound_interface_fails_then_succeeds_after_binding(self):
        """Test the missing binding error and the shared singleton after binding."""
        injector = DependencyInjector()

        with pytest.raises(MissingParameterError) as exc_info:
            injector.new_instance(Job)

        assert exc_info.value.parameter_name == "lookup"
        assert "Lookup" in str(exc_info.value)

        injector.register_implementation(Lookup, DefaultLookup)
        job = injector.new_instance(Job)

        assert isinstance(job.lookup, DefaultLookup)
        assert job.lookup is job.worker.lookup
        assert job.lookup.name == "default"


class TestPrecedence:
    """Test cases for the order of constructor registrations."""

    def test_explicit_binding_beats_discovered_binding(self):
        """Test that a constructor binding wins over one implied by an object."""

        class OtherLookup(Lookup):
            def find(self) -> str:
                return "other"

        injector = DependencyInjector(objects=[DefaultLookup()], implementations={Lookup: OtherLookup})

        assert injector.new_singleton(Lookup).find() == "other"

    def test_discovered_binding_used_without_explicit_one(self):
        """Test that an object implies a binding when none is given."""
        lookup = DefaultLookup("seeded")
        injector = DependencyInjector(objects=[lookup])

        assert injector.new_singleton(Lookup) is lookup

    def test_factories_apply_after_objects(self):
        """Test that a factory for a type does not hide a registered instance of it."""
        lookup = DefaultLookup("seeded")
        injector = DependencyInjector(
            objects=[lookup],
            factories={DefaultLookup: lambda: DefaultLookup("factory")},
        )

        assert injector.new_singleton(DefaultLookup) is lookup
        assert injector.new_instance(DefaultLookup).name == "factory"


class TestIntrospectionCache:
    """Test cases for reusing introspection data between injectors."""

    def test_warm_cache_avoids_reflection(self):
        """Test that a second injector fed with exported data reflects nothing."""
        first = MemoizingIntrospector()
        DependencyInjector(first, implementations={UserRepository: SqlUserRepository}).new_instance(UserController)

        second = MemoizingIntrospector(first.get_data())
        injector = DependencyInjector(second, implementations={UserRepository: SqlUserRepository})
        controller = injector.new_instance(UserController)

        assert isinstance(controller.service.repository, SqlUserRepository)
        assert second.reflection_count == 0


class TestThreadIsolation:
    """Test cases for concurrent builds on separate threads."""

    def test_concurrent_builds_do_not_see_each_other_as_cycles(self):
        """Test that two threads can build the same class at the same time."""
        barrier = threading.Barrier(2, timeout=5)

        class Rendezvous:
            def __init__(self):
                barrier.wait()

        injector = DependencyInjector()
        results = []
        errors = []

        def build():
            try:
                results.append(injector.new_instance(Rendezvous))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=build) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(results) == 2

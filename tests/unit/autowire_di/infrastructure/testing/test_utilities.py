"""Unit tests for testing utilities."""

from abc import ABC, abstractmethod

from autowire_di.application.injector import DependencyInjector
from autowire_di.domain import IDependencyInjector
from autowire_di.infrastructure.testing.utilities import TestInjector, create_mock_injector


class EmailSender(ABC):
    @abstractmethod
    def send(self, to: str) -> str: ...


class SmtpEmailSender(EmailSender):
    def send(self, to: str) -> str:
        return f"smtp:{to}"


class FakeEmailSender(EmailSender):
    def send(self, to: str) -> str:
        return f"fake:{to}"


class Database:
    pass


class UserService:
    def __init__(self, email: EmailSender, db: Database):
        self.email = email
        self.db = db


def build_parent() -> DependencyInjector:
    injector = DependencyInjector()
    injector.register_implementation(EmailSender, SmtpEmailSender)
    return injector


class TestTestInjectorInitialization:
    """Test cases for TestInjector initialization."""

    def test_empty_test_injector(self):
        """Test that a test injector without parent works like an injector."""
        injector = TestInjector()

        assert isinstance(injector, DependencyInjector)
        assert isinstance(injector.new_instance(Database), Database)

    def test_inherits_parent_bindings(self):
        """Test that the parent's bindings are inherited."""
        injector = TestInjector(build_parent())

        assert isinstance(injector.new_instance(UserService).email, SmtpEmailSender)

    def test_inherits_parent_singletons(self):
        """Test that singletons already built by the parent are shared."""
        parent = build_parent()
        db = parent.new_singleton(Database)

        injector = TestInjector(parent)
        assert injector.new_singleton(Database) is db

    def test_uses_parent_introspector(self):
        """Test that the parent's introspector is reused."""
        parent = build_parent()
        assert TestInjector(parent).introspector is parent.introspector

    def test_resolves_to_itself(self):
        """Test that the test injector, not the parent, is injected."""
        parent = build_parent()
        injector = TestInjector(parent)

        assert injector.new_singleton(IDependencyInjector) is injector
        assert injector.new_singleton(DependencyInjector) is injector
        assert parent.new_singleton(IDependencyInjector) is parent


class TestMocking:
    """Test cases for mock registration."""

    def test_mock_object_replaces_interface(self):
        """Test that a mocked interface is injected."""
        injector = TestInjector(build_parent())
        fake = FakeEmailSender()
        injector.mock_object(EmailSender, fake)

        service = injector.new_instance(UserService)

        assert service.email is fake
        assert injector.new_singleton(EmailSender) is fake
        assert injector.new_instance(EmailSender) is fake

    def test_mock_object_does_not_touch_parent(self):
        """Test that the parent keeps its registrations."""
        parent = build_parent()
        injector = TestInjector(parent)
        injector.mock_object(EmailSender, FakeEmailSender())

        assert isinstance(parent.new_instance(UserService).email, SmtpEmailSender)

    def test_mock_implementation(self):
        """Test that an interface can be rebound to a fake class."""
        injector = TestInjector(build_parent())
        injector.mock_implementation(EmailSender, FakeEmailSender)

        assert injector.new_instance(UserService).email.send("ada") == "fake:ada"

    def test_mock_factory(self):
        """Test that a factory override builds the dependency."""
        injector = TestInjector(build_parent())
        db = Database()
        injector.mock_factory(Database, lambda: db)

        assert injector.new_instance(UserService).db is db

    def test_reset_overrides_restores_parent(self):
        """Test that reset_overrides drops mocks and restores registrations."""
        injector = TestInjector(build_parent())
        injector.mock_object(EmailSender, FakeEmailSender())
        injector.reset_overrides()

        assert isinstance(injector.new_instance(UserService).email, SmtpEmailSender)
        assert injector.new_singleton(IDependencyInjector) is injector

    def test_context_manager_resets(self):
        """Test that leaving the with block removes the mocks."""
        parent = build_parent()

        with TestInjector(parent) as injector:
            injector.mock_object(EmailSender, FakeEmailSender())
            assert isinstance(injector.new_instance(UserService).email, FakeEmailSender)

        assert isinstance(injector.new_instance(UserService).email, SmtpEmailSender)


class TestCreateMockInjector:
    """Test cases for create_mock_injector."""

    def test_creates_injector_with_mocks(self):
        """Test that all given mocks are registered."""
        fake = FakeEmailSender()
        db = Database()

        injector = create_mock_injector((EmailSender, fake), (Database, db))
        service = injector.new_instance(UserService)

        assert isinstance(injector, TestInjector)
        assert service.email is fake
        assert service.db is db

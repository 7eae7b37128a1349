from abc import ABC, abstractmethod
from typing import Any, Callable, List, Mapping, Optional, Type, TypeVar

from autowire_di.domain.models import ArgumentKey, ResolvedParameter

T = TypeVar("T")


class IIntrospector(ABC):
    """Abstract interface for class and function introspection."""

    @abstractmethod
    def is_instantiable(self, dependency_type: Type) -> bool:
        """Tell whether the class can be constructed (not abstract, not a Protocol).

        Args:
            dependency_type: The class to inspect.
        """

    @abstractmethod
    def is_library_type(self, dependency_type: Type) -> bool:
        """Tell whether the class is defined by application or library code.

        Args:
            dependency_type: The class to inspect.
        """

    @abstractmethod
    def get_ancestors(self, dependency_type: Type) -> List[Type]:
        """Return the non-interface base classes of the class, nearest first.

        Args:
            dependency_type: The class to inspect.
        """

    @abstractmethod
    def get_interfaces(self, dependency_type: Type) -> List[Type]:
        """Return the abstract and Protocol base classes of the class, nearest first.

        Args:
            dependency_type: The class to inspect.
        """

    @abstractmethod
    def resolve_method_parameters(
        self,
        dependency_type: Type,
        method_name: str,
        arguments: Optional[Mapping[ArgumentKey, Any]] = None,
    ) -> List[ResolvedParameter]:
        """Merge the declared parameters of a method with the supplied arguments.

        Args:
            dependency_type: The class declaring the method.
            method_name: The method to inspect.
            arguments: Values keyed by parameter name or positional index.

        Raises:
            TypeNotFoundError: If the class does not exist.
            MethodNotFoundError: If the method does not exist.
        """

    def resolve_constructor_parameters(
        self,
        dependency_type: Type,
        arguments: Optional[Mapping[ArgumentKey, Any]] = None,
    ) -> List[ResolvedParameter]:
        """Merge the declared constructor parameters with the supplied arguments."""
        return self.resolve_method_parameters(dependency_type, "__init__", arguments)

    @abstractmethod
    def resolve_function_parameters(
        self,
        function: Callable[..., Any],
        arguments: Optional[Mapping[ArgumentKey, Any]] = None,
    ) -> List[ResolvedParameter]:
        """Merge the declared parameters of a function with the supplied arguments.

        Args:
            function: The callable to inspect.
            arguments: Values keyed by parameter name or positional index.

        Raises:
            TypeNotFoundError: If the function is not callable.
        """


class IDependencyInjector(ABC):
    """Abstract interface for dependency injection operations."""

    @abstractmethod
    def register_object(self, instance: Any) -> None:
        """Register a ready-made instance under its class and library base classes.

        Args:
            instance: The instance to register.
        """

    @abstractmethod
    def register_implementation(self, interface: Type, concrete_type: Type) -> None:
        """Bind an interface to the class instantiated when it is requested.

        Args:
            interface: The abstract class or Protocol.
            concrete_type: The class to build instead.
        """

    @abstractmethod
    def register_factory(self, dependency_type: Type, factory: Callable[..., Any]) -> None:
        """Register a callable that builds the given class.

        Args:
            dependency_type: The class produced by the factory.
            factory: Callable whose parameters are resolved like constructor parameters.
        """

    @abstractmethod
    def new_instance(self, dependency_type: Type[T], arguments: Optional[Mapping[ArgumentKey, Any]] = None) -> T:
        """Build a new instance on every call. Its dependencies are singletons.

        Args:
            dependency_type: The class to build.
            arguments: Constructor values keyed by parameter name or positional index.
        """

    @abstractmethod
    def new_singleton(self, dependency_type: Type[T], arguments: Optional[Mapping[ArgumentKey, Any]] = None) -> T:
        """Return the cached instance or build and cache a new one.

        Args:
            dependency_type: The class to build.
            arguments: Constructor values keyed by parameter name or positional index.
        """

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

from autowire_di.application.circular_detector import CircularDependencyDetector
from autowire_di.application.instance_registry import InstanceRegistry
from autowire_di.application.introspector import DefaultIntrospector
from autowire_di.domain import (
    ArgumentKey,
    CircularDependencyError,
    IDependencyInjector,
    IIntrospector,
    InstanceKey,
    Lifetime,
    MissingParameterError,
    NotInstantiableError,
    ParameterKind,
    ResolvedParameter,
    UnresolvableError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DependencyInjector(IDependencyInjector):
    """Main dependency injection container.

    Builds instances by introspecting constructors (or registered factories)
    and resolving every parameter from supplied arguments, defaults,
    registered objects, interface bindings, or by recursively building the
    referenced class as a singleton.

    The injector registers itself, so constructors and factories may declare
    a ``DependencyInjector`` or ``IDependencyInjector`` parameter.

    Attributes:
        _introspector: Component extracting parameter and type metadata.
        _registry: Built singletons and interface bindings.
        _factories: Factory callables keyed by the class they build.
        _circular_detector: Component tracking the types under construction.
    """

    def __init__(
        self,
        introspector: Optional[IIntrospector] = None,
        objects: Iterable[Any] = (),
        implementations: Optional[Mapping[Type, Type]] = None,
        factories: Optional[Mapping[Type, Callable[..., Any]]] = None,
    ) -> None:
        """Initialize the injector.

        Objects are registered first so that the bindings they imply never
        override the explicit ``implementations`` applied afterwards.

        Args:
            introspector: Introspector to use, a ``DefaultIntrospector`` when omitted.
            objects: Ready-made instances to register.
            implementations: Interface-to-concrete-class bindings.
            factories: Factory callables keyed by the class they build.
        """
        self._introspector: IIntrospector = introspector if introspector is not None else DefaultIntrospector()
        self._registry = InstanceRegistry(self._introspector)
        self._factories: Dict[Type, Callable[..., Any]] = {}
        self._circular_detector = CircularDependencyDetector()

        for instance in objects:
            self.register_object(instance)

        for interface, concrete_type in (implementations or {}).items():
            self.register_implementation(interface, concrete_type)

        for dependency_type, factory in (factories or {}).items():
            self.register_factory(dependency_type, factory)

        self._register_self()

    @property
    def introspector(self) -> IIntrospector:
        return self._introspector

    def _register_self(self) -> None:
        self._registry.register_instance(InstanceKey.build(type(self)), self)
        self._registry.set(InstanceKey.build(DependencyInjector), self)
        self._registry.bind(IDependencyInjector, type(self))

    def register_object(self, instance: Any) -> None:
        """Register a ready-made instance.

        The instance is stored under its own class, which replaces any earlier
        instance of that class. It is also stored under each library base class
        and bound to each library interface that has no entry yet.

        Args:
            instance: The instance to register.

        Example:
            >>> injector.register_object(PostgresRepository(dsn))
            >>> injector.new_singleton(BaseRepository)  # the same instance
        """
        logger.debug("Registering object of type %s", type(instance))
        self._registry.register_instance(InstanceKey.build(type(instance)), instance)

    def register_implementation(self, interface: Type, concrete_type: Type) -> None:
        """Bind an interface to a concrete class. Last write wins.

        Args:
            interface: The abstract class or Protocol.
            concrete_type: The class built when the interface is requested.
        """
        logger.debug("Binding %s to %s", interface, concrete_type)
        self._registry.bind(interface, concrete_type)

    def register_factory(self, dependency_type: Type, factory: Callable[..., Any]) -> None:
        """Register a factory used instead of constructing the class directly.

        The factory's own parameters are resolved like constructor parameters.

        Args:
            dependency_type: The class produced by the factory.
            factory: The callable building the instance.

        Example:
            >>> injector.register_factory(
            ...     IMailer,
            ...     lambda settings: SmtpMailer(settings.host),
            ... )
        """
        logger.debug("Registering factory for %s", dependency_type)
        self._factories[dependency_type] = factory

    def new_instance(self, dependency_type: Type[T], arguments: Optional[Mapping[ArgumentKey, Any]] = None) -> T:
        """Build a new instance on every call.

        Dependencies resolved during the build are singletons. ``arguments``
        only apply to the requested class, not to its dependencies.

        Args:
            dependency_type: The class to build.
            arguments: Constructor values keyed by parameter name or positional index.

        Returns:
            A new, fully wired instance.

        Raises:
            NotInstantiableError: If the class is abstract and has no factory.
            MissingParameterError: If a required parameter cannot be filled.
            CircularDependencyError: If the class transitively requires itself.
        """
        target = self._target_for(dependency_type)
        return self._build_instance(target, dict(arguments or {}), Lifetime.TRANSIENT)

    def new_singleton(self, dependency_type: Type[T], arguments: Optional[Mapping[ArgumentKey, Any]] = None) -> T:
        """Return the cached instance or build and cache a new one.

        Instances built with different ``arguments`` are cached separately.

        Args:
            dependency_type: The class to build.
            arguments: Constructor values keyed by parameter name or positional index.

        Returns:
            The shared instance.

        Raises:
            NotInstantiableError: If the class is abstract and has no factory.
            MissingParameterError: If a required parameter cannot be filled.
            CircularDependencyError: If the class transitively requires itself.
        """
        target = self._target_for(dependency_type)
        return self._build_instance(target, dict(arguments or {}), Lifetime.SINGLETON)

    def _target_for(self, dependency_type: Type) -> Type:
        """Return the class to build or look up for a requested type.

        A type with its own factory or cached instance is used as is,
        otherwise its interface binding applies.
        """
        if dependency_type in self._factories or InstanceKey.build(dependency_type) in self._registry:
            return dependency_type
        return self._registry.implementation_for(dependency_type)

    def _build_instance(self, dependency_type: Type, arguments: Dict[ArgumentKey, Any], lifetime: Lifetime) -> Any:
        key = InstanceKey.build(dependency_type, arguments)
        if lifetime == Lifetime.SINGLETON and key in self._registry:
            return self._registry.get(key)

        with self._circular_detector.track(dependency_type):
            factory = self._factories.get(dependency_type)
            if factory is not None:
                logger.debug("Building %s (%s) with factory", dependency_type, lifetime)
                parameters = self._introspector.resolve_function_parameters(factory, arguments)
                result = self._invoke(factory, parameters, self._resolve_references(parameters, factory))
            else:
                if not self._introspector.is_instantiable(dependency_type):
                    raise NotInstantiableError(dependency_type)

                logger.debug("Building %s (%s)", dependency_type, lifetime)
                parameters = self._introspector.resolve_constructor_parameters(dependency_type, arguments)
                result = self._invoke(dependency_type, parameters, self._resolve_references(parameters, dependency_type))

            if lifetime == Lifetime.SINGLETON:
                self._registry.register_instance(key, result)

        return result

    def _resolve_references(self, parameters: List[ResolvedParameter], context: Any) -> List[Any]:
        """Produce the value of every parameter, left to right.

        Args:
            parameters: The parameters of the constructor or factory.
            context: The class or factory declaring the parameters.

        Returns:
            The values in declaration order.

        Raises:
            MissingParameterError: If a required parameter has no value.
        """
        values = []
        for parameter in parameters:
            if parameter.is_available:
                values.append(parameter.value)
                continue

            if parameter.kind == ParameterKind.SIMPLE:
                raise MissingParameterError(parameter.name, context)

            values.append(self._resolve_reference(parameter, context))

        return values

    def _resolve_reference(self, parameter: ResolvedParameter, context: Any) -> Any:
        target = self._target_for(parameter.value)

        key = InstanceKey.build(target)
        if key in self._registry:
            return self._registry.get(key)

        try:
            return self._build_instance(target, {}, Lifetime.SINGLETON)
        except (UnresolvableError, CircularDependencyError) as e:
            if parameter.is_optional:
                logger.debug("Optional parameter '%s' of %s left at its default: %s", parameter.name, context, e)
                return parameter.default
            if isinstance(e, NotInstantiableError) and e.cls is target:
                raise MissingParameterError(parameter.name, context, target) from e
            raise

    @staticmethod
    def _invoke(target: Callable[..., Any], parameters: List[ResolvedParameter], values: List[Any]) -> Any:
        args = [value for parameter, value in zip(parameters, values) if not parameter.is_keyword_only]
        kwargs = {parameter.name: value for parameter, value in zip(parameters, values) if parameter.is_keyword_only}
        return target(*args, **kwargs)

    def get_registry_copy(self) -> InstanceRegistry:
        """Get a copy of the instance registry and bindings for inheritance.

        Returns:
            Copy of the current registry.
        """
        return self._registry.copy()

    def get_factories_copy(self) -> Dict[Type, Callable[..., Any]]:
        """Get a copy of the factory table for inheritance."""
        return self._factories.copy()

    def clear(self) -> None:
        """Drop all registrations and cached instances.

        The injector stays registered as itself.
        """
        self._registry.clear()
        self._factories.clear()
        self._circular_detector.clear()
        self._register_self()

"""Application layer - Instance registry and interface bindings."""

import logging
from typing import Any, Dict, Type

from autowire_di.domain import IIntrospector, InstanceKey

logger = logging.getLogger(__name__)


class InstanceRegistry:
    """Stores built singletons and interface-to-implementation bindings.

    Registering an instance also makes it available under every library
    base class of its type, and binds every library interface it implements
    to its concrete class. Such back-filled entries never replace existing ones.

    Attributes:
        _introspector: Source of base class and interface information.
        _instances: Instances keyed by class and argument digest.
        _implementations: Concrete classes keyed by interface.
    """

    def __init__(self, introspector: IIntrospector) -> None:
        self._introspector = introspector
        self._instances: Dict[InstanceKey, Any] = {}
        self._implementations: Dict[Type, Type] = {}

    def __contains__(self, key: InstanceKey) -> bool:
        return key in self._instances

    def get(self, key: InstanceKey) -> Any:
        """Return the instance stored under the key.

        Raises:
            KeyError: If nothing is stored under the key.
        """
        return self._instances[key]

    def set(self, key: InstanceKey, instance: Any) -> None:
        """Store an instance under the key without touching related entries."""
        self._instances[key] = instance

    def evict(self, key: InstanceKey) -> None:
        """Drop the instance stored under the key, if any."""
        self._instances.pop(key, None)

    def register_instance(self, key: InstanceKey, instance: Any) -> None:
        """Store an instance and back-fill its base classes and interfaces.

        Args:
            key: The key of the instance itself.
            instance: The instance to store.

        Example:
            >>> registry.register_instance(InstanceKey.build(PostgresRepository), repo)
            >>> registry.get(InstanceKey.build(BaseRepository)) is repo
            True
            >>> registry.implementation_for(IRepository)
            <class 'PostgresRepository'>
        """
        self._instances[key] = instance

        concrete_type = type(instance)

        for ancestor in self._introspector.get_ancestors(concrete_type):
            ancestor_key = InstanceKey.build(ancestor)
            if ancestor_key in self._instances:
                continue
            if self._introspector.is_library_type(ancestor):
                self._instances[ancestor_key] = instance

        for interface in self._introspector.get_interfaces(concrete_type):
            if self.is_bound(interface):
                continue
            if self._introspector.is_library_type(interface):
                logger.debug("Binding %s to discovered implementation %s", interface, concrete_type)
                self._implementations[interface] = concrete_type

    def bind(self, interface: Type, concrete_type: Type) -> None:
        """Bind an interface to a concrete class, replacing any earlier binding."""
        self._implementations[interface] = concrete_type

    def unbind(self, interface: Type) -> None:
        """Remove the binding of an interface, if any."""
        self._implementations.pop(interface, None)

    def is_bound(self, interface: Type) -> bool:
        return interface in self._implementations

    def implementation_for(self, dependency_type: Type) -> Type:
        """Return the class bound to the type, or the type itself when unbound."""
        return self._implementations.get(dependency_type, dependency_type)

    def copy(self) -> "InstanceRegistry":
        """Return a registry sharing the same instances in independent tables."""
        registry = InstanceRegistry(self._introspector)
        registry._instances = self._instances.copy()
        registry._implementations = self._implementations.copy()
        return registry

    def clear(self) -> None:
        """Drop every instance and binding."""
        self._instances.clear()
        self._implementations.clear()

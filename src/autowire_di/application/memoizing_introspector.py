"""Application layer - Introspection with an exportable cache."""

from typing import Optional, Type

from autowire_di.application.introspector import DefaultIntrospector
from autowire_di.domain import IntrospectionData, MethodMetadata, TypeMetadata


class MemoizingIntrospector(DefaultIntrospector):
    """Introspector that stores computed type and method metadata.

    The collected data can be exported with ``get_data`` and fed back into a
    later instance with ``set_data`` to skip reflection on startup.

    Example:
        >>> introspector = MemoizingIntrospector()
        >>> injector = DependencyInjector(introspector)
        >>> injector.new_singleton(UserService)
        >>> warm = MemoizingIntrospector(introspector.get_data())
        >>> warm.reflection_count
        0
    """

    def __init__(self, data: Optional[IntrospectionData] = None) -> None:
        super().__init__()
        self.set_data(data)

    def get_data(self) -> IntrospectionData:
        """Return a copy of the collected metadata."""
        return IntrospectionData(types=dict(self._data.types), methods=dict(self._data.methods))

    def set_data(self, data: Optional[IntrospectionData]) -> None:
        """Replace the collected metadata and reset the reflection counter.

        Args:
            data: Previously exported metadata, or None to start empty.
        """
        self._data = IntrospectionData() if data is None else data
        self._reflection_count = 0

    def _reflect_type(self, dependency_type: Type) -> TypeMetadata:
        metadata = self._data.types.get(dependency_type)
        if metadata is None:
            metadata = super()._reflect_type(dependency_type)
            self._data.types[dependency_type] = metadata
        return metadata

    def _reflect_method(self, dependency_type: Type, method_name: str) -> MethodMetadata:
        key = (dependency_type, method_name)
        metadata = self._data.methods.get(key)
        if metadata is None:
            self._reflect_type(dependency_type)
            metadata = super()._reflect_method(dependency_type, method_name)
            self._data.methods[key] = metadata
        return metadata

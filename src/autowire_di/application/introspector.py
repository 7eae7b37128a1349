"""Application layer - Class and function introspection."""

import inspect
import sys
import types
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type, Union, get_args, get_origin, get_type_hints

from autowire_di.domain import (
    ArgumentKey,
    IIntrospector,
    MethodMetadata,
    MethodNotFoundError,
    ParameterDescriptor,
    ParameterKind,
    ResolvedParameter,
    TypeMetadata,
    TypeNotFoundError,
)

_PLATFORM_MODULES = frozenset(sys.stdlib_module_names) | {"builtins", "__future__"}

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _is_interface(cls: Type) -> bool:
    return inspect.isabstract(cls) or bool(getattr(cls, "_is_protocol", False))


def _classify(annotation: Any) -> Tuple[ParameterKind, Optional[Type], bool]:
    """Split an annotation into its parameter kind, reference target and nullability."""
    if annotation is inspect.Parameter.empty:
        return ParameterKind.SIMPLE, None, False

    nullable = False
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = get_args(annotation)
        non_null = [member for member in members if member is not type(None)]
        nullable = len(non_null) < len(members)
        if len(non_null) != 1:
            return ParameterKind.SIMPLE, None, nullable
        annotation = non_null[0]

    if inspect.isclass(annotation) and annotation is not Any and not _is_platform_type(annotation):
        return ParameterKind.REFERENCE, annotation, nullable
    return ParameterKind.SIMPLE, None, nullable


def _is_platform_type(cls: Type) -> bool:
    """Tell whether a class comes from the interpreter or the standard library."""
    module = getattr(cls, "__module__", None) or "builtins"
    return module.split(".")[0] in _PLATFORM_MODULES


class DefaultIntrospector(IIntrospector):
    """Introspects classes and callables using ``inspect`` and type hints.

    A parameter annotated with a library class (or ``Optional`` of one) is a
    reference parameter; anything else, including builtin scalars,
    standard-library classes such as ``Path`` or ``datetime``, generic
    aliases and missing annotations, is simple.

    Attributes:
        _reflection_count: Number of times type metadata was computed.
    """

    def __init__(self) -> None:
        self._reflection_count = 0

    @property
    def reflection_count(self) -> int:
        """Number of times type metadata was computed rather than served from a cache."""
        return self._reflection_count

    def is_instantiable(self, dependency_type: Type) -> bool:
        return self._reflect_type(dependency_type).is_instantiable

    def is_library_type(self, dependency_type: Type) -> bool:
        return self._reflect_type(dependency_type).is_library_type

    def get_ancestors(self, dependency_type: Type) -> List[Type]:
        return list(self._reflect_type(dependency_type).ancestors)

    def get_interfaces(self, dependency_type: Type) -> List[Type]:
        return list(self._reflect_type(dependency_type).interfaces)

    def resolve_method_parameters(
        self,
        dependency_type: Type,
        method_name: str,
        arguments: Optional[Mapping[ArgumentKey, Any]] = None,
    ) -> List[ResolvedParameter]:
        metadata = self._reflect_method(dependency_type, method_name)
        return self._resolve_parameters(metadata.parameters, arguments)

    def resolve_function_parameters(
        self,
        function: Callable[..., Any],
        arguments: Optional[Mapping[ArgumentKey, Any]] = None,
    ) -> List[ResolvedParameter]:
        metadata = self._reflect_function(function)
        return self._resolve_parameters(metadata.parameters, arguments)

    def _resolve_parameters(
        self,
        parameters: List[ParameterDescriptor],
        arguments: Optional[Mapping[ArgumentKey, Any]],
    ) -> List[ResolvedParameter]:
        """Merge declared parameters with the supplied arguments.

        Arguments are matched by parameter name first, then by positional index.
        Reference parameters without an argument stay unavailable and carry the
        class to resolve; simple parameters fall back to their default.

        Args:
            parameters: The declared parameters, in order.
            arguments: Values keyed by parameter name or positional index.

        Returns:
            One resolved parameter per declared parameter.
        """
        arguments = arguments or {}
        result = []
        for index, parameter in enumerate(parameters):
            resolved = ResolvedParameter(
                name=parameter.name,
                kind=parameter.kind,
                default=parameter.default,
                is_optional=parameter.is_optional,
                is_keyword_only=parameter.is_keyword_only,
            )

            if parameter.name in arguments:
                resolved.value = arguments[parameter.name]
                resolved.is_available = True
            elif index in arguments:
                resolved.value = arguments[index]
                resolved.is_available = True
            elif parameter.kind == ParameterKind.REFERENCE:
                resolved.value = parameter.target
            elif parameter.has_default:
                resolved.value = parameter.default
                resolved.is_available = True

            result.append(resolved)

        return result

    def _reflect_type(self, dependency_type: Type) -> TypeMetadata:
        """Collect the reflection data of a class.

        Raises:
            TypeNotFoundError: If ``dependency_type`` is not a class.
        """
        if not inspect.isclass(dependency_type):
            raise TypeNotFoundError(dependency_type, "not a class")

        self._reflection_count += 1

        bases = [base for base in dependency_type.__mro__[1:] if base is not object]

        return TypeMetadata(
            dependency_type=dependency_type,
            is_instantiable=not _is_interface(dependency_type),
            is_library_type=not _is_platform_type(dependency_type),
            ancestors=[base for base in bases if not _is_interface(base)],
            interfaces=[base for base in bases if _is_interface(base)],
        )

    def _reflect_method(self, dependency_type: Type, method_name: str) -> MethodMetadata:
        """Collect the declared parameters of a method.

        Raises:
            TypeNotFoundError: If ``dependency_type`` is not a class.
            MethodNotFoundError: If the class has no such method.
        """
        if not inspect.isclass(dependency_type):
            raise TypeNotFoundError(dependency_type, "not a class")

        method = getattr(dependency_type, method_name, None)
        if method is None or not callable(method):
            raise MethodNotFoundError(dependency_type, method_name)

        return MethodMetadata(name=method_name, parameters=self._reflect_parameters(method, dependency_type))

    def _reflect_function(self, function: Callable[..., Any]) -> MethodMetadata:
        """Collect the declared parameters of a callable.

        Raises:
            TypeNotFoundError: If ``function`` is not callable.
        """
        if not callable(function):
            raise TypeNotFoundError(function, "not callable")

        name = getattr(function, "__qualname__", None) or type(function).__qualname__
        return MethodMetadata(name=name, parameters=self._reflect_parameters(function, function))

    def _reflect_parameters(self, function: Callable[..., Any], owner: Any) -> List[ParameterDescriptor]:
        try:
            signature = inspect.signature(function)
        except ValueError:
            # Builtins without a retrievable signature declare nothing injectable
            return []

        type_hints = self._get_type_hints(function, owner)

        result = []
        for param_name, param in signature.parameters.items():
            if param_name == "self" or param.kind in _SKIPPED_KINDS:
                continue

            kind, target, nullable = _classify(type_hints.get(param_name, inspect.Parameter.empty))
            has_default = param.default is not inspect.Parameter.empty

            result.append(
                ParameterDescriptor(
                    name=param_name,
                    kind=kind,
                    target=target,
                    has_default=has_default,
                    default=param.default if has_default else None,
                    is_optional=has_default or nullable,
                    is_keyword_only=param.kind == inspect.Parameter.KEYWORD_ONLY,
                )
            )

        return result

    @staticmethod
    def _get_type_hints(function: Callable[..., Any], owner: Any) -> Dict[str, Any]:
        if inspect.isclass(function):
            source = function.__init__
        elif inspect.isroutine(function):
            source = function
        else:
            source = type(function).__call__

        try:
            return get_type_hints(source)
        except NameError as e:
            raise TypeNotFoundError(e.name, f"unresolved annotation on {owner!r}") from e
        except TypeError:
            # Slot wrappers and other objects without annotations
            return {}

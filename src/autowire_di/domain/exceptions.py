from typing import Any, List, Optional, Type


def _name_of(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


class DIException(Exception):
    """Base exception for DI-related errors."""


class TypeNotFoundError(DIException):
    """Raised when a type identifier does not name an existing class.

    Attributes:
        dependency_type: The offending type identifier.
        reason: Optional reason for the failure.
    """

    def __init__(self, dependency_type: Any, reason: Optional[str] = None) -> None:
        self.dependency_type = dependency_type
        self.reason = reason
        message = f"The type {dependency_type!r} does not exist"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class MethodNotFoundError(DIException):
    """Raised when a type has no method with the requested name.

    Attributes:
        cls: The class that was inspected.
        method_name: The missing method name.
    """

    def __init__(self, cls: Type, method_name: str) -> None:
        self.cls = cls
        self.method_name = method_name
        super().__init__(f"The type {_name_of(cls)} has no method '{method_name}'")


class UnresolvableError(DIException):
    """Raised when a dependency cannot be built.

    Attributes:
        cls: The class (or factory) that could not be resolved.
        reason: Optional reason for the failure.
    """

    def __init__(self, cls: Any, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.reason = reason
        message = f"Cannot resolve dependency for type: {_name_of(cls)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class NotInstantiableError(UnresolvableError):
    """Raised when an abstract class or Protocol is requested without a factory."""

    def __init__(self, cls: Type) -> None:
        super().__init__(cls, f"{_name_of(cls)} is not instantiable")


class MissingParameterError(UnresolvableError):
    """Raised when a required parameter has no available value.

    Attributes:
        parameter_name: Name of the parameter that could not be filled.
        context: The class or factory declaring the parameter.
        dependency_type: The unbound interface of a reference parameter, if any.
    """

    def __init__(self, parameter_name: str, context: Any, dependency_type: Optional[Type] = None) -> None:
        self.parameter_name = parameter_name
        self.context = context
        self.dependency_type = dependency_type
        reason = f"Parameter '{parameter_name}' has no available value"
        if dependency_type is not None:
            reason += f" (no implementation bound for {_name_of(dependency_type)})"
        super().__init__(context, reason)


class CircularDependencyError(DIException):
    """Raised when a circular dependency is detected.

    Attributes:
        dependency_chain: List of types involved in the circular dependency.
    """

    def __init__(self, dependency_chain: List[Type]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join([_name_of(cls) for cls in dependency_chain])}"
        super().__init__(message)

"""
Domain layer - Core models, contracts and errors.

This layer contains the fundamental rules and models for dependency injection.
It has no dependencies on other layers.
"""

from .enums import Lifetime, ParameterKind
from .exceptions import (
    CircularDependencyError,
    DIException,
    MethodNotFoundError,
    MissingParameterError,
    NotInstantiableError,
    TypeNotFoundError,
    UnresolvableError,
)
from .interfaces import IDependencyInjector, IIntrospector
from .models import (
    ArgumentKey,
    InstanceKey,
    IntrospectionData,
    MethodMetadata,
    ParameterDescriptor,
    ResolvedParameter,
    TypeMetadata,
    hash_arguments,
)

__all__ = [
    # Enums
    "Lifetime",
    "ParameterKind",
    # Exceptions
    "DIException",
    "TypeNotFoundError",
    "MethodNotFoundError",
    "UnresolvableError",
    "NotInstantiableError",
    "MissingParameterError",
    "CircularDependencyError",
    # Interfaces
    "IIntrospector",
    "IDependencyInjector",
    # Models
    "ArgumentKey",
    "InstanceKey",
    "IntrospectionData",
    "MethodMetadata",
    "ParameterDescriptor",
    "ResolvedParameter",
    "TypeMetadata",
    "hash_arguments",
]

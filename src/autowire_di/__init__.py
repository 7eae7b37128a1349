"""
autowire-di: Constructor-injection container with type-hint based auto-wiring.

Public API exports for the autowire-di package.
"""

# Application exports
from autowire_di.application.injector import DependencyInjector
from autowire_di.application.introspector import DefaultIntrospector
from autowire_di.application.memoizing_introspector import MemoizingIntrospector

# Domain exports
from autowire_di.domain.enums import Lifetime, ParameterKind
from autowire_di.domain.exceptions import (
    CircularDependencyError,
    DIException,
    MethodNotFoundError,
    MissingParameterError,
    NotInstantiableError,
    TypeNotFoundError,
    UnresolvableError,
)
from autowire_di.domain.interfaces import IDependencyInjector, IIntrospector
from autowire_di.domain.models import ResolvedParameter

__version__ = "0.1.0"

__all__ = [
    # Injector
    "DependencyInjector",
    "IDependencyInjector",
    # Introspection
    "DefaultIntrospector",
    "MemoizingIntrospector",
    "IIntrospector",
    "ResolvedParameter",
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
]

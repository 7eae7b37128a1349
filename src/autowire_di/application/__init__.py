"""
Application layer - Introspection and instance building.

This layer contains the components that build object graphs from domain models.
It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .injector import DependencyInjector
from .instance_registry import InstanceRegistry
from .introspector import DefaultIntrospector
from .memoizing_introspector import MemoizingIntrospector

__all__ = [
    "DependencyInjector",
    "DefaultIntrospector",
    "MemoizingIntrospector",
    "InstanceRegistry",
    "CircularDependencyDetector",
]

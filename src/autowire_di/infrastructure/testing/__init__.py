"""
Testing utilities module.

Provides helpers for testing applications wired with autowire-di.
"""

from .utilities import TestInjector, create_mock_injector

__all__ = [
    "TestInjector",
    "create_mock_injector",
]

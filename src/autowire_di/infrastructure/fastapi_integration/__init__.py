"""
FastAPI integration module.

Provides helpers for resolving FastAPI endpoint dependencies through autowire-di.
"""

from .integration import create_fastapi_dependency, inject_dependencies

__all__ = [
    "create_fastapi_dependency",
    "inject_dependencies",
]

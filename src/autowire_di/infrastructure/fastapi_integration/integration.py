"""Infrastructure layer - FastAPI endpoint helpers.

The helpers only call the injector, so this module does not import fastapi
itself. Install the ``fastapi`` extra (``pip install autowire-di[fastapi]``)
in the application that mounts them.
"""

import functools
import inspect
from typing import Any, Callable, Type, TypeVar, get_type_hints

from autowire_di.domain import IDependencyInjector, Lifetime

T = TypeVar("T")


def create_fastapi_dependency(
    injector: IDependencyInjector,
    dependency_type: Type[T],
    lifetime: Lifetime = Lifetime.SINGLETON,
) -> Callable[[], T]:
    """Create a FastAPI Depends() callable that builds from the injector.

    Args:
        injector: The injector to build dependencies with.
        dependency_type: The class to build when the dependency is called.
        lifetime: SINGLETON to share one instance, TRANSIENT for a new one per call.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> injector = DependencyInjector()
        >>> injector.register_implementation(IUserRepository, SqlUserRepository)
        >>>
        >>> get_user_service = create_fastapi_dependency(injector, UserService)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(service: UserService = Depends(get_user_service)):
        ...     return await service.get_all()
    """

    def dependency() -> T:
        """Build the dependency from the injector."""
        if lifetime == Lifetime.TRANSIENT:
            return injector.new_instance(dependency_type)
        return injector.new_singleton(dependency_type)

    return dependency


def inject_dependencies(injector: IDependencyInjector, *dependency_types: Type[Any]) -> Callable:
    """Decorator that injects singletons into an async FastAPI endpoint.

    Every endpoint parameter annotated with one of ``dependency_types`` is
    filled from the injector and hidden from FastAPI's request parsing.

    Args:
        injector: The injector to build dependencies with.
        *dependency_types: Classes to inject.

    Returns:
        A decorator function.

    Example:
        >>> @app.get("/users")
        >>> @inject_dependencies(injector, UserService)
        >>> async def list_users(user_service: UserService, limit: int = 10):
        ...     return await user_service.get_all(limit)
    """

    def decorator(func: Callable) -> Callable:
        """Wrap the function with dependency injection logic."""
        signature = inspect.signature(func)
        type_hints = get_type_hints(func)
        injected = {
            name: type_hints[name]
            for name in signature.parameters
            if name in type_hints and type_hints[name] in dependency_types
        }

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            """Build the injected dependencies and call the original function."""
            for param_name, dependency_type in injected.items():
                if param_name not in kwargs:
                    kwargs[param_name] = injector.new_singleton(dependency_type)

            return await func(*args, **kwargs)

        # FastAPI must only see the parameters it is expected to fill
        wrapper.__signature__ = signature.replace(
            parameters=[param for name, param in signature.parameters.items() if name not in injected]
        )
        return wrapper

    return decorator

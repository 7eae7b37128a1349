"""Application layer - Circular dependency detection."""

import threading
from contextlib import contextmanager
from typing import Iterator, List, Type

from autowire_di.domain import CircularDependencyError


class CircularDependencyDetector:
    """Tracks the types currently under construction.

    Uses thread-local storage so that independent builds running on
    different threads keep separate in-progress stacks. When a type is
    entered twice on the same stack, a circular dependency is detected.

    Attributes:
        _local: Thread-local storage for in-progress stacks.
    """

    def __init__(self) -> None:
        """Initialize the circular dependency detector with thread-local storage."""
        self._local = threading.local()

    def _get_stack(self) -> List[Type]:
        """Get the current thread's in-progress stack.

        Returns:
            The in-progress stack for the current thread.
        """
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    def is_in_progress(self, dependency_type: Type) -> bool:
        """Tell whether the type is being constructed on the current thread."""
        return dependency_type in self._get_stack()

    def push(self, dependency_type: Type) -> None:
        """Mark a type as being constructed.

        Args:
            dependency_type: The type entering construction.

        Raises:
            CircularDependencyError: If the type is already being constructed.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push(ServiceA)
            >>> detector.push(ServiceB)
            >>> detector.push(ServiceA)  # Raises CircularDependencyError
        """
        stack = self._get_stack()

        if self.is_in_progress(dependency_type):
            # Cycle path from the first occurrence back to the repeated type
            cycle_start_index = stack.index(dependency_type)
            cycle = stack[cycle_start_index:] + [dependency_type]
            raise CircularDependencyError(cycle)

        stack.append(dependency_type)

    def pop(self) -> None:
        """Remove the most recently entered type from the stack."""
        stack = self._get_stack()
        if stack:
            stack.pop()

    @contextmanager
    def track(self, dependency_type: Type) -> Iterator[None]:
        """Mark a type as in progress for the duration of the block.

        The marker is removed whether the block succeeds or raises.

        Args:
            dependency_type: The type entering construction.

        Raises:
            CircularDependencyError: If the type is already being constructed.
        """
        self.push(dependency_type)
        try:
            yield
        finally:
            self.pop()

    def clear(self) -> None:
        """Clear the current thread's in-progress stack."""
        if hasattr(self._local, "stack"):
            self._local.stack.clear()

from enum import Enum


class Lifetime(str, Enum):
    """Defines the lifetime of a built instance.

    Attributes:
        SINGLETON: Instance cached and shared for the injector's lifetime.
        TRANSIENT: New instance created on each request.
    """

    TRANSIENT = "transient"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value


class ParameterKind(str, Enum):
    """Defines how a constructor or factory parameter can be resolved.

    Attributes:
        SIMPLE: Scalar or untyped value, resolvable only via argument or default.
        REFERENCE: Class-typed value, resolvable by recursive construction.
    """

    SIMPLE = "simple"
    REFERENCE = "reference"

    def __str__(self) -> str:
        return self.value

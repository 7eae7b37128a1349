import hashlib
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from autowire_di.domain.enums import ParameterKind

ArgumentKey = Union[str, int]


class ParameterDescriptor(BaseModel):
    """Declared shape of a single constructor or function parameter.

    Attributes:
        name: The parameter name.
        kind: Whether the parameter is a simple value or a class reference.
        target: The referenced class for reference parameters.
        has_default: Whether the declaration carries a default value.
        default: The declared default value.
        is_optional: Whether the parameter has a default or is annotated as nullable.
        is_keyword_only: Whether the parameter must be passed by keyword.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The parameter name.")
    kind: ParameterKind = Field(..., description="How the parameter can be resolved.")
    target: Optional[Type] = Field(default=None, description="Referenced class of a reference parameter.")
    has_default: bool = Field(default=False, description="Whether a default value is declared.")
    default: Any = Field(default=None, description="The declared default value.")
    is_optional: bool = Field(default=False, description="Whether the parameter may be left empty.")
    is_keyword_only: bool = Field(default=False, description="Whether the parameter is keyword-only.")


class ResolvedParameter(BaseModel):
    """A parameter merged with the caller-supplied arguments.

    Attributes:
        name: The parameter name.
        kind: Whether the parameter is a simple value or a class reference.
        value: Supplied argument, default value, or the class to resolve.
        default: Value substituted when an optional reference cannot be built.
        is_available: Whether ``value`` can be used verbatim.
        is_optional: Whether the parameter may be left empty.
        is_keyword_only: Whether the parameter must be passed by keyword.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., description="The parameter name.")
    kind: ParameterKind = Field(..., description="How the parameter can be resolved.")
    value: Any = Field(default=None, description="The value or the class to resolve.")
    default: Any = Field(default=None, description="Fallback for optional references.")
    is_available: bool = Field(default=False, description="Whether the value is ready to use.")
    is_optional: bool = Field(default=False, description="Whether the parameter may be left empty.")
    is_keyword_only: bool = Field(default=False, description="Whether the parameter is keyword-only.")


class TypeMetadata(BaseModel):
    """Reflection data collected for a class."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dependency_type: Type = Field(..., description="The inspected class.")
    is_instantiable: bool = Field(..., description="Whether the class can be constructed.")
    is_library_type: bool = Field(..., description="Whether the class is defined outside the standard library.")
    ancestors: List[Type] = Field(default_factory=list, description="Non-interface base classes.")
    interfaces: List[Type] = Field(default_factory=list, description="Abstract and Protocol base classes.")


class MethodMetadata(BaseModel):
    """Reflection data collected for a method or function."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The method or function name.")
    parameters: List[ParameterDescriptor] = Field(default_factory=list, description="Declared parameters.")


class InstanceKey(BaseModel):
    """Key of the instance registry.

    Instances built with explicit arguments are cached apart from the
    argument-free instance of the same class.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dependency_type: Any = Field(..., description="The class of the cached instance.")
    arguments_hash: Optional[str] = Field(default=None, description="Digest of the supplied arguments.")

    @classmethod
    def build(cls, dependency_type: Any, arguments: Optional[Mapping[ArgumentKey, Any]] = None) -> "InstanceKey":
        """Create the key for a class and its construction arguments.

        Args:
            dependency_type: The class being built.
            arguments: Arguments supplied by name or positional index.

        Returns:
            The registry key.
        """
        if not arguments:
            return cls(dependency_type=dependency_type)
        return cls(dependency_type=dependency_type, arguments_hash=hash_arguments(arguments))


def hash_arguments(arguments: Mapping[ArgumentKey, Any]) -> str:
    """Return a digest of the arguments that does not depend on insertion order.

    Scalars and containers of scalars are compared by value. Any other
    object is compared by identity, so two distinct objects never share a
    singleton slot even when their ``repr`` is equal.
    """
    items: List[Tuple[str, str]] = sorted((repr(key), _fingerprint(value)) for key, value in arguments.items())
    return hashlib.sha256(repr(items).encode("utf-8")).hexdigest()


_VALUE_TYPES = (str, bytes, int, float, complex, bool, type(None))


def _fingerprint(value: Any) -> str:
    if isinstance(value, _VALUE_TYPES):
        return f"{type(value).__name__}:{value!r}"
    if isinstance(value, (list, tuple, frozenset, set)):
        members = [_fingerprint(member) for member in value]
        if isinstance(value, (set, frozenset)):
            members.sort()
        return f"{type(value).__name__}[{', '.join(members)}]"
    if isinstance(value, dict):
        members = sorted(f"{_fingerprint(key)}={_fingerprint(member)}" for key, member in value.items())
        return f"dict{{{', '.join(members)}}}"
    return f"{type(value).__module__}.{type(value).__qualname__}@{id(value):x}"


class IntrospectionData(BaseModel):
    """Reflection data kept by a memoizing introspector.

    Attributes:
        types: Type metadata keyed by class.
        methods: Method metadata keyed by class and method name.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    types: Dict[Type, TypeMetadata] = Field(default_factory=dict, description="Cached type metadata.")
    methods: Dict[Tuple[Type, str], MethodMetadata] = Field(default_factory=dict, description="Cached method metadata.")

"""Intermediate Representation (IR) for GraphQL schemas.

This module defines dataclasses that represent GraphQL schema constructs
in a language-agnostic way, suitable for resolver type generation.
Type references keep their full wrapping structure so that list and
nullability bits can be rendered independently at every level.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class IRNamedType:
    """Reference to a named type, e.g. ``Int`` or ``User``."""
    name: str


@dataclass(frozen=True)
class IRListType:
    """List wrapper, e.g. ``[Int]``."""
    of_type: "IRTypeRef"


@dataclass(frozen=True)
class IRNonNullType:
    """Non-null wrapper, e.g. ``Int!``. Never wraps another IRNonNullType."""
    of_type: "IRTypeRef"

    def __post_init__(self):
        if isinstance(self.of_type, IRNonNullType):
            raise ValueError("NonNull cannot wrap another NonNull")


IRTypeRef = Union[IRNamedType, IRListType, IRNonNullType]


def named_type(type_ref: IRTypeRef) -> str:
    """Return the innermost type name of a type reference."""
    while not isinstance(type_ref, IRNamedType):
        type_ref = type_ref.of_type
    return type_ref.name


@dataclass
class IRArgument:
    """Represents an argument to a field.

    ``default_value`` is the printed GraphQL literal, e.g. ``"EUR"`` or ``10``.
    """
    name: str
    type_ref: IRTypeRef
    default_value: str | None = None
    description: str | None = None


@dataclass
class IRField:
    """Represents a field in an object, interface or input type.

    The federation attributes hold the raw selection text of the
    ``@provides`` and ``@requires`` directives.
    """
    name: str
    type_ref: IRTypeRef
    description: str | None = None
    arguments: list[IRArgument] = field(default_factory=list)
    external: bool = False
    provides: str | None = None
    requires: str | None = None

    @property
    def type_name(self) -> str:
        return named_type(self.type_ref)


@dataclass
class IREnumValue:
    """Represents a single value in a GraphQL enum."""
    name: str
    description: str | None = None


@dataclass
class IREnum:
    """Represents a GraphQL enum type."""
    name: str
    values: list[IREnumValue]
    description: str | None = None


@dataclass
class IRScalar:
    """Represents a custom GraphQL scalar type."""
    name: str
    description: str | None = None


@dataclass
class IRType:
    """Represents a GraphQL object type.

    ``keys`` holds the ``fields`` selection of every ``@key`` directive in
    declaration order; the first one is the primary key.
    """
    name: str
    fields: list[IRField]
    interfaces: list[str] = field(default_factory=list)
    description: str | None = None
    keys: list[str] = field(default_factory=list)

    def get_field(self, name: str) -> IRField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass
class IRInputType:
    """Represents a GraphQL input object type."""
    name: str
    fields: list[IRField]
    description: str | None = None


@dataclass
class IRInterface:
    """Represents a GraphQL interface type."""
    name: str
    fields: list[IRField]
    description: str | None = None

    def get_field(self, name: str) -> IRField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass
class IRUnion:
    """Represents a GraphQL union type."""
    name: str
    members: list[str]
    description: str | None = None


IRDefinition = Union[IRType, IRInputType, IRInterface, IRUnion, IREnum, IRScalar]


@dataclass
class IRSchema:
    """Complete intermediate representation of a GraphQL schema.

    ``definitions`` preserves document order across all kinds, which is
    the order declarations are emitted in.
    """
    definitions: dict[str, IRDefinition] = field(default_factory=dict)

    def get(self, name: str) -> IRDefinition | None:
        return self.definitions.get(name)

    def _of_kind(self, kind) -> dict:
        return {k: v for k, v in self.definitions.items() if isinstance(v, kind)}

    @property
    def types(self) -> dict[str, IRType]:
        return self._of_kind(IRType)

    @property
    def inputs(self) -> dict[str, IRInputType]:
        return self._of_kind(IRInputType)

    @property
    def interfaces(self) -> dict[str, IRInterface]:
        return self._of_kind(IRInterface)

    @property
    def unions(self) -> dict[str, IRUnion]:
        return self._of_kind(IRUnion)

    @property
    def enums(self) -> dict[str, IREnum]:
        return self._of_kind(IREnum)

    @property
    def scalars(self) -> dict[str, IRScalar]:
        return self._of_kind(IRScalar)

    def possible_types(self, abstract_name: str) -> list[str]:
        """Return the object types a union or interface may resolve to."""
        definition = self.definitions.get(abstract_name)
        if isinstance(definition, IRUnion):
            return list(definition.members)
        return [
            t.name for t in self.types.values() if abstract_name in t.interfaces
        ]

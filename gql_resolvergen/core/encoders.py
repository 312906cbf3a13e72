"""Encoding of enums and scalars.

Built-in scalars map to TypeScript primitives. Custom scalars are opaque
(``any``). Enums are rendered by an :class:`EnumStrategy` chosen from the
configuration and passed explicitly to whoever renders types, so different
configurations never share state.

Example:
    strategy = enum_strategy(TranslationConfig(internal_enum_value_support=True))
    namer = TypeNamer(schema, strategy)
    namer("AllowedColor")  # "AllowedColor"
"""

import logging
from typing import Protocol, runtime_checkable

from .config import TranslationConfig
from .ir import IREnum, IRInputType, IRInterface, IRScalar, IRSchema, IRType, IRUnion
from .tsdoc import doc_comment

logger = logging.getLogger(__name__)

ANY = "any"
INTERNAL_REPS = "TInternalReps"

BUILTIN_SCALARS = {
    "ID": "string",
    "String": "string",
    "Int": "number",
    "Float": "number",
    "Boolean": "boolean",
}


def literal_union(values: list[str]) -> str:
    """Render enum values as a union of string literals."""
    if not values:
        return "never"
    return " | ".join(f'"{v}"' for v in values)


def representation_name(type_name: str) -> str:
    return f"{type_name}Representation"


def representation_ref(type_name: str) -> str:
    """Reference to the parent representation of an object-like type."""
    return f"{representation_name(type_name)}<{INTERNAL_REPS}>"


def _enum_alias(name: str, enum: IREnum) -> list[str]:
    """Render ``export type <name> = "A" | "B"``, documenting values if needed."""
    if not any(v.description for v in enum.values):
        return [f"export type {name} = {literal_union([v.name for v in enum.values])}"]
    lines = [f"export type {name} ="]
    for value in enum.values:
        lines.extend(doc_comment(value.description, indent="  "))
        lines.append(f'  | "{value.name}"')
    return lines


@runtime_checkable
class EnumStrategy(Protocol):
    """How an enum is declared and referenced in the generated file."""

    def declarations(self, enum: IREnum) -> list[str]:
        """Lines declaring the enum (without its doc comment)."""
        ...

    def resolver_map_member(self, enum: IREnum) -> str | None:
        """Member of the top-level resolver map, if the enum needs one."""
        ...


class LiteralEnumStrategy:
    """Enums are unions of their value names, used as-is everywhere."""

    def declarations(self, enum: IREnum) -> list[str]:
        return _enum_alias(enum.name, enum)

    def resolver_map_member(self, enum: IREnum) -> str | None:
        return None


class InternalEnumStrategy:
    """Enums have an opaque internal value and a literal external name.

    Resolver signatures use the internal alias (``any``); the literal union
    is kept under ``<Name>External`` and the resolver map carries the
    mapping from each external literal to its internal value.
    """

    @staticmethod
    def external_name(enum: IREnum) -> str:
        return f"{enum.name}External"

    def declarations(self, enum: IREnum) -> list[str]:
        return _enum_alias(self.external_name(enum), enum) + [
            f"export type {enum.name} = {ANY}"
        ]

    def resolver_map_member(self, enum: IREnum) -> str | None:
        return f"{enum.name}?: {{ [external in {self.external_name(enum)}]: {ANY} }}"


def enum_strategy(config: TranslationConfig) -> EnumStrategy:
    if config.internal_enum_value_support:
        return InternalEnumStrategy()
    return LiteralEnumStrategy()


def scalar_declarations(scalar: IRScalar) -> list[str]:
    return [f"export type {scalar.name} = {ANY}"]


def scalar_resolver_map_member(scalar: IRScalar) -> str:
    return f"{scalar.name}?: {ANY}"


class TypeNamer:
    """Renders a named type at a usage site.

    Object, interface and union types render as their parent
    representation, input objects, enums and custom scalars as their
    declared name.
    """

    def __init__(self, schema: IRSchema, strategy: EnumStrategy):
        self.schema = schema
        self.strategy = strategy

    def __call__(self, name: str) -> str:
        if name in BUILTIN_SCALARS:
            return BUILTIN_SCALARS[name]
        definition = self.schema.get(name)
        if isinstance(definition, IRType | IRInterface | IRUnion):
            return representation_ref(name)
        if isinstance(definition, IREnum | IRScalar | IRInputType):
            return name
        logger.warning("Type %s is not defined in the schema, rendering it as any", name)
        return ANY

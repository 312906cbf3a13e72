"""Per-type resolver declarations.

For every definition in the schema the emitter produces an
:class:`EmissionUnit`: the TypeScript declarations for that type plus the
member it contributes to the top-level ``Resolvers`` map.

Broken federation selections do not stop emission. Diagnostics are
collected per type and raised together once every type has been visited,
so a caller sees all problems of a document in one error.
"""

import logging
from dataclasses import dataclass, field

from .config import TranslationConfig
from .encoders import (
    ANY,
    INTERNAL_REPS,
    EnumStrategy,
    TypeNamer,
    enum_strategy,
    representation_name,
    representation_ref,
    scalar_declarations,
    scalar_resolver_map_member,
)
from .errors import Diagnostic, TranslationError
from .federation import (
    provided_fields,
    representation_shapes,
    representation_union,
    resolvable_fields,
    working_shape,
)
from .ir import (
    IRArgument,
    IRDefinition,
    IREnum,
    IRField,
    IRInputType,
    IRInterface,
    IRScalar,
    IRSchema,
    IRType,
    IRUnion,
)
from .tsdoc import doc_comment
from .type_algebra import nullable, promise_or_value, render_input_property, render_output_type

logger = logging.getLogger(__name__)

CONTEXT = "TContext"
INFO = "any"
INDENT = "  "


@dataclass
class EmissionUnit:
    """Declarations generated for one schema type."""
    name: str
    lines: list[str] = field(default_factory=list)
    resolver_map_member: str | None = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def resolver_name(type_name: str) -> str:
    return f"{type_name}Resolver"


def keys_name(type_name: str) -> str:
    return f"{type_name}Keys"


class DeclarationEmitter:
    """Emits resolver declarations for every definition of a schema."""

    def __init__(self, schema: IRSchema, config: TranslationConfig | None = None):
        self.schema = schema
        self.config = config or TranslationConfig()
        self.enum_strategy: EnumStrategy = enum_strategy(self.config)
        self.render_named = TypeNamer(schema, self.enum_strategy)
        self.diagnostics: list[Diagnostic] = []
        self._provided: dict[str, set[str]] = {}

    @property
    def generics(self) -> str:
        return (
            f"<{CONTEXT} = {self.config.context_type}, "
            f"{INTERNAL_REPS} extends Record<string, any> = {self.config.internal_reps_type}>"
        )

    def emit_all(self) -> list[EmissionUnit]:
        """Emit every definition in document order.

        Raises:
            TranslationError: with all collected diagnostics, if any type failed.
        """
        self.diagnostics = []
        self._provided = provided_fields(self.schema, self.diagnostics)
        units = []
        for definition in self.schema.definitions.values():
            try:
                unit = self.emit(definition)
            except TranslationError as e:
                self.diagnostics.extend(e.diagnostics)
                continue
            if unit is not None:
                units.append(unit)

        if self.diagnostics:
            count = len(self.diagnostics)
            raise TranslationError(
                f"Schema translation failed with {count} error{'s' if count > 1 else ''}",
                list(self.diagnostics),
            )
        return units

    def emit(self, definition: IRDefinition) -> EmissionUnit | None:
        logger.debug("Emitting %s", definition.name)
        if isinstance(definition, IRType):
            return self._emit_object(definition)
        if isinstance(definition, IRInterface | IRUnion):
            return self._emit_abstract(definition)
        if isinstance(definition, IRInputType):
            return self._emit_input(definition)
        if isinstance(definition, IREnum):
            return self._emit_enum(definition)
        if isinstance(definition, IRScalar):
            return self._emit_scalar(definition)
        return None

    def _representation_alias(self, type_name: str, default: str) -> str:
        return (
            f"type {representation_name(type_name)}<{INTERNAL_REPS} extends Record<string, any>> "
            f'= Index<{INTERNAL_REPS}, "{type_name}", {default}>'
        )

    def _resolver_map_member(self, type_name: str) -> str:
        return f"{type_name}?: {resolver_name(type_name)}<{CONTEXT}, {INTERNAL_REPS}>"

    def _emit_object(self, ir_type: IRType) -> EmissionUnit:
        unit = EmissionUnit(ir_type.name, resolver_map_member=self._resolver_map_member(ir_type.name))
        shapes = representation_shapes(self.schema, ir_type, self.render_named)

        default_parent = ANY
        if shapes:
            unit.lines.append(f"export type {keys_name(ir_type.name)} = {representation_union(shapes)}")
            default_parent = keys_name(ir_type.name)
        unit.lines.append(self._representation_alias(ir_type.name, default_parent))

        members: list[str] = []
        if shapes:
            members.append(
                f"{INDENT}__resolveReference?: (representation: {keys_name(ir_type.name)}, "
                f"context: {CONTEXT}, info: {INFO}) => "
                f"{promise_or_value(nullable(representation_ref(ir_type.name)))}"
            )
        provided = self._provided.get(ir_type.name, set())
        for f in resolvable_fields(ir_type, provided):
            if f.requires:
                parent = working_shape(self.schema, ir_type, f, self.render_named)
            else:
                parent = representation_ref(ir_type.name)
            members.extend(self._handler(f, parent))

        unit.lines.extend(doc_comment(ir_type.description))
        unit.lines.append(f"export interface {resolver_name(ir_type.name)}{self.generics} {{")
        unit.lines.extend(members)
        unit.lines.append("}")
        return unit

    def _handler(self, f: IRField, parent: str) -> list[str]:
        """Render ``name?: (parent, args, context, info) => PromiseOrValue<...>``."""
        lines = doc_comment(f.description, indent=INDENT)
        returns = render_output_type(f.type_ref, self.render_named)
        if not f.arguments:
            lines.append(
                f"{INDENT}{f.name}?: (parent: {parent}, args: {{}}, context: {CONTEXT}, "
                f"info: {INFO}) => {returns}"
            )
            return lines

        lines.append(f"{INDENT}{f.name}?: (parent: {parent}, args: {{")
        for arg in f.arguments:
            lines.extend(self._argument_doc(arg))
            lines.append(INDENT * 2 + render_input_property(arg.name, arg.type_ref, self.render_named))
        lines.append(f"{INDENT}}}, context: {CONTEXT}, info: {INFO}) => {returns}")
        return lines

    @staticmethod
    def _argument_doc(arg: IRArgument) -> list[str]:
        text = arg.description
        if arg.default_value is not None:
            tag = f"@default {arg.default_value}"
            text = f"{text}\n{tag}" if text else tag
        return doc_comment(text, indent=INDENT * 2)

    def _emit_abstract(self, definition: IRInterface | IRUnion) -> EmissionUnit:
        unit = EmissionUnit(
            definition.name, resolver_map_member=self._resolver_map_member(definition.name)
        )
        possible = self.schema.possible_types(definition.name)
        names = " | ".join(f'"{name}"' for name in possible) or "never"
        unit.lines.append(self._representation_alias(definition.name, ANY))
        unit.lines.extend(doc_comment(definition.description))
        unit.lines.append(f"export interface {resolver_name(definition.name)}{self.generics} {{")
        unit.lines.append(
            f"{INDENT}__resolveType?: (parent: {representation_ref(definition.name)}, "
            f"context: {CONTEXT}, info: {INFO}) => {promise_or_value(nullable(names))}"
        )
        unit.lines.append("}")
        return unit

    def _emit_input(self, input_type: IRInputType) -> EmissionUnit:
        unit = EmissionUnit(input_type.name)
        unit.lines.extend(doc_comment(input_type.description))
        unit.lines.append(f"export interface {input_type.name} {{")
        for f in input_type.fields:
            unit.lines.extend(doc_comment(f.description, indent=INDENT))
            unit.lines.append(INDENT + render_input_property(f.name, f.type_ref, self.render_named))
        unit.lines.append("}")
        return unit

    def _emit_enum(self, enum: IREnum) -> EmissionUnit:
        unit = EmissionUnit(enum.name, resolver_map_member=self.enum_strategy.resolver_map_member(enum))
        unit.lines.extend(doc_comment(enum.description))
        unit.lines.extend(self.enum_strategy.declarations(enum))
        return unit

    def _emit_scalar(self, scalar: IRScalar) -> EmissionUnit:
        unit = EmissionUnit(scalar.name, resolver_map_member=scalar_resolver_map_member(scalar))
        unit.lines.extend(doc_comment(scalar.description))
        unit.lines.extend(scalar_declarations(scalar))
        return unit


"""Federation directive handling: keys, @external, @provides and @requires.

Everything here is a pure function over the IR and parsed selections:

- ``representation_shapes`` renders one structural shape per ``@key``.
- ``resolvable_fields`` drops ``@external`` fields unless some ``@provides``
  selection in the document names them.
- ``working_shape`` builds the parent type of a ``@requires`` field: the
  primary key shape intersected with the required external fields.

Selections are parsed with graphql-core, by wrapping the selection text in
a selection set, so ``"id author { id username }"`` yields two paths, the
second one nested.
"""

import logging
from dataclasses import dataclass

from graphql import FieldNode, GraphQLSyntaxError, OperationDefinitionNode, parse

from .errors import Diagnostic, RepresentationError, SelectionError, TranslationError
from .ir import IRField, IRInterface, IRSchema, IRType, IRUnion
from .type_algebra import NamedRenderer, render_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionPath:
    """One selected field, with its nested sub-selection if any."""
    name: str
    children: tuple["SelectionPath", ...] = ()


@dataclass(frozen=True)
class SelectionOrigin:
    """Where a selection was declared, for diagnostics."""
    type_name: str
    selection: str
    field_name: str | None = None


def parse_selection(origin: SelectionOrigin) -> tuple[SelectionPath, ...]:
    """Parse a field selection such as ``"id author { id username }"``."""
    try:
        document = parse(f"{{ {origin.selection} }}", no_location=True)
    except GraphQLSyntaxError as e:
        raise SelectionError.for_selection(
            f"cannot parse selection: {e.message}",
            origin.type_name,
            origin.selection,
            origin.field_name,
        ) from e

    definitions = document.definitions
    if len(definitions) != 1 or not isinstance(definitions[0], OperationDefinitionNode):
        raise SelectionError.for_selection(
            "selection must be a list of fields",
            origin.type_name,
            origin.selection,
            origin.field_name,
        )
    return _convert_selection_set(definitions[0].selection_set, origin)


def _convert_selection_set(selection_set, origin: SelectionOrigin) -> tuple[SelectionPath, ...]:
    merged: dict[str, list[SelectionPath]] = {}
    for node in selection_set.selections:
        if not isinstance(node, FieldNode):
            raise SelectionError.for_selection(
                "fragments are not allowed in field selections",
                origin.type_name,
                origin.selection,
                origin.field_name,
            )
        if node.alias or node.arguments or node.directives:
            raise SelectionError.for_selection(
                f'field "{node.name.value}" must not have an alias, arguments or directives',
                origin.type_name,
                origin.selection,
                origin.field_name,
            )
        children = merged.setdefault(node.name.value, [])
        if node.selection_set:
            for child in _convert_selection_set(node.selection_set, origin):
                if child not in children:
                    children.append(child)
    return tuple(SelectionPath(name, tuple(children)) for name, children in merged.items())


def _lookup(owner: IRType | IRInterface, path: SelectionPath, origin: SelectionOrigin) -> IRField:
    field = owner.get_field(path.name)
    if field is None:
        raise SelectionError.for_selection(
            f'field "{path.name}" does not exist on type {owner.name}',
            origin.type_name,
            origin.selection,
            origin.field_name,
        )
    return field


def render_shape(
    schema: IRSchema,
    owner: IRType | IRInterface,
    paths: tuple[SelectionPath, ...],
    render_named: NamedRenderer,
    origin: SelectionOrigin,
    external_only: bool = False,
) -> str:
    """Render the structural type of ``paths`` looked up on ``owner``.

    Each selected field becomes one property typed by its own type
    reference. A nested selection renders the related type's selected
    fields as an inline shape, wrapped in the field's list and nullability
    wrappers.
    """
    properties = []
    for path in paths:
        field = _lookup(owner, path, origin)
        if external_only and not field.external:
            raise SelectionError.for_selection(
                f'field "{owner.name}.{field.name}" is not marked @external',
                origin.type_name,
                origin.selection,
                origin.field_name,
            )
        target = schema.get(field.type_name)
        if path.children:
            if not isinstance(target, IRType | IRInterface):
                raise RepresentationError.for_selection(
                    f'field "{owner.name}.{field.name}" of type {field.type_name} '
                    "has no fields to select",
                    origin.type_name,
                    origin.selection,
                    origin.field_name,
                )
            nested = render_shape(schema, target, path.children, render_named, origin)
            expression = render_type(field.type_ref, lambda _name: nested)
        else:
            if isinstance(target, IRType | IRInterface | IRUnion):
                raise RepresentationError.for_selection(
                    f'field "{owner.name}.{field.name}" of type {field.type_name} '
                    "needs a sub-selection",
                    origin.type_name,
                    origin.selection,
                    origin.field_name,
                )
            expression = render_type(field.type_ref, render_named)
        properties.append(f"{field.name}: {expression}")
    return "{ " + "; ".join(properties) + " }"


def representation_shapes(
    schema: IRSchema, ir_type: IRType, render_named: NamedRenderer
) -> list[str]:
    """Render one representation shape per ``@key``, in declaration order."""
    shapes = []
    for key in ir_type.keys:
        origin = SelectionOrigin(type_name=ir_type.name, selection=key)
        shapes.append(
            render_shape(schema, ir_type, parse_selection(origin), render_named, origin)
        )
    return shapes


def representation_union(shapes: list[str]) -> str:
    """Alternative identities are a union: callers must check which key arrived."""
    return " | ".join(shapes)


def fields_provided_by(
    schema: IRSchema, owner: IRType | IRInterface, field: IRField
) -> set[tuple[str, str]]:
    """Return the ``(type name, field name)`` pairs a ``@provides`` field supplies."""
    if not field.provides:
        return set()
    origin = SelectionOrigin(type_name=owner.name, selection=field.provides, field_name=field.name)
    target = schema.get(field.type_name)
    if not isinstance(target, IRType | IRInterface):
        raise RepresentationError.for_selection(
            f"@provides on a field of type {field.type_name}, which has no fields",
            origin.type_name,
            origin.selection,
            origin.field_name,
        )
    provided: set[tuple[str, str]] = set()
    _collect_provided(schema, target, parse_selection(origin), origin, provided)
    return provided


def _collect_provided(schema, owner, paths, origin, provided):
    for path in paths:
        field = _lookup(owner, path, origin)
        provided.add((owner.name, field.name))
        if path.children:
            target = schema.get(field.type_name)
            if not isinstance(target, IRType | IRInterface):
                raise RepresentationError.for_selection(
                    f'field "{owner.name}.{field.name}" of type {field.type_name} '
                    "has no fields to select",
                    origin.type_name,
                    origin.selection,
                    origin.field_name,
                )
            _collect_provided(schema, target, path.children, origin, provided)


def provided_fields(
    schema: IRSchema, diagnostics: list[Diagnostic] | None = None
) -> dict[str, set[str]]:
    """Map each type name to the names of its fields named by any ``@provides``.

    Without ``diagnostics`` the first broken selection raises. With a list,
    each field's errors are appended to it and the remaining fields are
    still visited.
    """
    result: dict[str, set[str]] = {}
    for definition in schema.definitions.values():
        if not isinstance(definition, IRType | IRInterface):
            continue
        for field in definition.fields:
            try:
                pairs = fields_provided_by(schema, definition, field)
            except TranslationError as e:
                if diagnostics is None:
                    raise
                diagnostics.extend(e.diagnostics)
                continue
            for type_name, field_name in pairs:
                result.setdefault(type_name, set()).add(field_name)
    return result


def resolvable_fields(ir_type: IRType, provided: set[str]) -> list[IRField]:
    """Fields that get a resolver signature, in declaration order.

    ``@external`` fields are owned by another service and are skipped,
    unless a ``@provides`` somewhere makes this service able to supply them.
    """
    fields = []
    for field in ir_type.fields:
        if field.external and field.name not in provided:
            logger.debug("Skipping external field %s.%s", ir_type.name, field.name)
            continue
        fields.append(field)
    return fields


def working_shape(
    schema: IRSchema, ir_type: IRType, field: IRField, render_named: NamedRenderer
) -> str:
    """Parent type for a ``@requires`` field.

    The primary key shape intersected with the required fields, each
    looked up among the type's ``@external`` fields. Without a key only the
    required fields are known.
    """
    origin = SelectionOrigin(
        type_name=ir_type.name, selection=field.requires or "", field_name=field.name
    )
    required = render_shape(
        schema, ir_type, parse_selection(origin), render_named, origin, external_only=True
    )
    if not ir_type.keys:
        return required
    primary_origin = SelectionOrigin(type_name=ir_type.name, selection=ir_type.keys[0])
    primary = render_shape(
        schema, ir_type, parse_selection(primary_origin), render_named, primary_origin
    )
    return f"{primary} & {required}"

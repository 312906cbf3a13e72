"""Rendering of GraphQL type references as TypeScript type expressions.

Every wrapping level is handled on its own: a level without a non-null
wrapper is rendered as ``Nullable<...>``, a list level as ``...[]``. So
``[Int!]`` becomes ``Nullable<number[]>`` while ``[Int]!`` becomes
``Nullable<number>[]``.

The innermost named type is rendered by a callback, which lets callers
decide how object types, enums and scalars appear (see ``encoders``) and
lets nested key selections substitute an inline shape.
"""

from typing import Callable

from .ir import IRListType, IRNamedType, IRNonNullType, IRTypeRef

NamedRenderer = Callable[[str], str]

NULLABLE = "Nullable"
PROMISE_OR_VALUE = "PromiseOrValue"


def nullable(expression: str) -> str:
    return f"{NULLABLE}<{expression}>"


def promise_or_value(expression: str) -> str:
    return f"{PROMISE_OR_VALUE}<{expression}>"


def list_of(expression: str) -> str:
    return f"{expression}[]"


def render_type(type_ref: IRTypeRef, render_named: NamedRenderer) -> str:
    """Render a type reference, nullable unless wrapped in NonNull."""
    if isinstance(type_ref, IRNonNullType):
        return _render_non_null(type_ref.of_type, render_named)
    return nullable(_render_non_null(type_ref, render_named))


def _render_non_null(type_ref: IRTypeRef, render_named: NamedRenderer) -> str:
    if isinstance(type_ref, IRListType):
        return list_of(render_type(type_ref.of_type, render_named))
    if isinstance(type_ref, IRNamedType):
        return render_named(type_ref.name)
    raise TypeError(f"Unexpected type reference {type_ref!r}")


def render_output_type(type_ref: IRTypeRef, render_named: NamedRenderer) -> str:
    """Render a resolver return type.

    The result is always wrapped in ``PromiseOrValue`` since a resolver may
    return a value or a promise of it, independently of nullability.
    """
    return promise_or_value(render_type(type_ref, render_named))


def render_input_type(type_ref: IRTypeRef, render_named: NamedRenderer) -> tuple[str, bool]:
    """Render an argument or input field type.

    Returns the expression and whether the property is optional. A nullable
    outermost level makes the property optional (``name?: T``) instead of
    wrapping it in ``Nullable``; inner levels keep their own wrappers.
    """
    if isinstance(type_ref, IRNonNullType):
        return _render_non_null(type_ref.of_type, render_named), False
    return _render_non_null(type_ref, render_named), True


def render_input_property(name: str, type_ref: IRTypeRef, render_named: NamedRenderer) -> str:
    expression, optional = render_input_type(type_ref, render_named)
    return f"{name}{'?' if optional else ''}: {expression}"

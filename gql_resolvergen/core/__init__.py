"""Core modules for GraphQL resolver type generation."""

from .config import TranslationConfig, load_config, merge_config
from .emitter import DeclarationEmitter, EmissionUnit
from .encoders import (
    BUILTIN_SCALARS,
    EnumStrategy,
    InternalEnumStrategy,
    LiteralEnumStrategy,
    TypeNamer,
    enum_strategy,
)
from .errors import (
    ConfigError,
    Diagnostic,
    RepresentationError,
    SelectionError,
    TranslationError,
)
from .federation import (
    SelectionPath,
    parse_selection,
    provided_fields,
    representation_shapes,
    resolvable_fields,
    working_shape,
)
from .generator import ResolverTypeGenerator, translate
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    IRArgument,
    IREnum,
    IREnumValue,
    IRField,
    IRInputType,
    IRInterface,
    IRListType,
    IRNamedType,
    IRNonNullType,
    IRScalar,
    IRSchema,
    IRType,
    IRUnion,
)
from .parser import SchemaParser, parse_document
from .type_algebra import render_input_type, render_output_type, render_type

__all__ = [
    # Config
    "TranslationConfig",
    "load_config",
    "merge_config",
    # Errors
    "ConfigError",
    "Diagnostic",
    "RepresentationError",
    "SelectionError",
    "TranslationError",
    # IR types
    "IRArgument",
    "IREnum",
    "IREnumValue",
    "IRField",
    "IRInputType",
    "IRInterface",
    "IRListType",
    "IRNamedType",
    "IRNonNullType",
    "IRScalar",
    "IRSchema",
    "IRType",
    "IRUnion",
    # Parser
    "SchemaParser",
    "parse_document",
    # Type algebra
    "render_type",
    "render_input_type",
    "render_output_type",
    # Encoders
    "BUILTIN_SCALARS",
    "EnumStrategy",
    "InternalEnumStrategy",
    "LiteralEnumStrategy",
    "TypeNamer",
    "enum_strategy",
    # Federation
    "SelectionPath",
    "parse_selection",
    "provided_fields",
    "representation_shapes",
    "resolvable_fields",
    "working_shape",
    # Emission
    "DeclarationEmitter",
    "EmissionUnit",
    "ResolverTypeGenerator",
    "translate",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
]

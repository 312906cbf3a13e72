"""GraphQL schema parser using graphql-core.

Turns a parsed type-system document (or .graphql/.graphqls files) into an
IRSchema. Federation directives are read off the AST here so the rest of
the pipeline never touches graphql-core nodes.
"""

import logging
import os

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    StringValueNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    parse,
    print_ast,
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
    IRTypeRef,
    IRUnion,
)

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls")


def _description(node) -> str | None:
    return node.description.value if getattr(node, "description", None) else None


def _directive_argument(node, directive_name: str, argument_name: str) -> list[str]:
    """Return the string value of ``argument_name`` for every matching directive."""
    values = []
    for directive in node.directives or ():
        if directive.name.value != directive_name:
            continue
        for arg in directive.arguments:
            if arg.name.value == argument_name and isinstance(arg.value, StringValueNode):
                values.append(arg.value.value)
    return values


def _has_directive(node, directive_name: str) -> bool:
    return any(d.name.value == directive_name for d in node.directives or ())


def convert_type(type_node: TypeNode) -> IRTypeRef:
    """Convert a graphql-core type node into a recursive IR type reference."""
    if isinstance(type_node, NonNullTypeNode):
        return IRNonNullType(convert_type(type_node.type))
    if isinstance(type_node, ListTypeNode):
        return IRListType(convert_type(type_node.type))
    assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"
    return IRNamedType(type_node.name.value)


class SchemaParser:
    """Parses GraphQL schema documents into IR."""

    def __init__(self, schema_path: str | None = None):
        """Initialize a parser, optionally with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.ir = IRSchema()

    def parse_all(self) -> IRSchema:
        """Parse all schema files under ``schema_path`` and return the IR."""
        if self.schema_path is None:
            raise ValueError("SchemaParser.parse_all() needs a schema_path")
        schema_files = self._collect_schema_files()
        if not schema_files:
            raise FileNotFoundError(f"No GraphQL schema files found in {self.schema_path}")

        for file_path in schema_files:
            logger.debug("Parsing %s", file_path)
            with open(file_path) as f:
                self.parse_document(parse(f.read()))
        return self.ir

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def parse_document(self, document: DocumentNode) -> IRSchema:
        """Process a parsed document and add its definitions to the IR."""
        for definition in document.definitions:
            if isinstance(definition, ScalarTypeDefinitionNode | ScalarTypeExtensionNode):
                self._process_scalar(definition)
            elif isinstance(definition, EnumTypeDefinitionNode | EnumTypeExtensionNode):
                self._process_enum(definition)
            elif isinstance(definition, InterfaceTypeDefinitionNode | InterfaceTypeExtensionNode):
                self._process_interface(definition)
            elif isinstance(definition, ObjectTypeDefinitionNode | ObjectTypeExtensionNode):
                self._process_object_type(definition)
            elif isinstance(definition, InputObjectTypeDefinitionNode | InputObjectTypeExtensionNode):
                self._process_input_type(definition)
            elif isinstance(definition, UnionTypeDefinitionNode | UnionTypeExtensionNode):
                self._process_union(definition)
        return self.ir

    def _process_scalar(self, node: ScalarTypeDefinitionNode | ScalarTypeExtensionNode):
        name = node.name.value
        existing = self.ir.definitions.get(name)
        if isinstance(existing, IRScalar):
            if _description(node):
                existing.description = _description(node)
        else:
            self.ir.definitions[name] = IRScalar(name=name, description=_description(node))

    def _process_enum(self, node: EnumTypeDefinitionNode | EnumTypeExtensionNode):
        name = node.name.value
        values = [
            IREnumValue(name=v.name.value, description=_description(v))
            for v in node.values or ()
        ]
        existing = self.ir.definitions.get(name)
        if isinstance(existing, IREnum):
            existing.values.extend(values)
            if _description(node):
                existing.description = _description(node)
        else:
            self.ir.definitions[name] = IREnum(
                name=name, values=values, description=_description(node)
            )

    def _process_interface(self, node: InterfaceTypeDefinitionNode | InterfaceTypeExtensionNode):
        name = node.name.value
        fields = self._process_fields(node.fields)
        existing = self.ir.definitions.get(name)
        if isinstance(existing, IRInterface):
            self._merge_fields(existing, fields)
            if _description(node):
                existing.description = _description(node)
        else:
            self.ir.definitions[name] = IRInterface(
                name=name, fields=fields, description=_description(node)
            )

    def _process_object_type(self, node: ObjectTypeDefinitionNode | ObjectTypeExtensionNode):
        """Process ``type`` and ``extend type`` definitions.

        Both forms merge into a single IRType, whichever comes first in the
        document; fields from later blocks are appended.
        """
        name = node.name.value
        fields = self._process_fields(node.fields)
        interfaces = [i.name.value for i in node.interfaces or ()]
        keys = _directive_argument(node, "key", "fields")

        existing = self.ir.definitions.get(name)
        if isinstance(existing, IRType):
            self._merge_fields(existing, fields)
            existing.interfaces.extend(i for i in interfaces if i not in existing.interfaces)
            existing.keys.extend(k for k in keys if k not in existing.keys)
            if _description(node):
                existing.description = _description(node)
        else:
            self.ir.definitions[name] = IRType(
                name=name,
                fields=fields,
                interfaces=interfaces,
                description=_description(node),
                keys=keys,
            )

    def _process_input_type(self, node: InputObjectTypeDefinitionNode | InputObjectTypeExtensionNode):
        name = node.name.value
        fields = self._process_fields(node.fields)
        existing = self.ir.definitions.get(name)
        if isinstance(existing, IRInputType):
            self._merge_fields(existing, fields)
            if _description(node):
                existing.description = _description(node)
        else:
            self.ir.definitions[name] = IRInputType(
                name=name, fields=fields, description=_description(node)
            )

    def _process_union(self, node: UnionTypeDefinitionNode | UnionTypeExtensionNode):
        name = node.name.value
        members = [t.name.value for t in node.types or ()]
        existing = self.ir.definitions.get(name)
        if isinstance(existing, IRUnion):
            existing.members.extend(m for m in members if m not in existing.members)
            if _description(node):
                existing.description = _description(node)
        else:
            self.ir.definitions[name] = IRUnion(
                name=name, members=members, description=_description(node)
            )

    @staticmethod
    def _merge_fields(existing: IRType | IRInterface | IRInputType, fields: list[IRField]):
        existing_names = {f.name for f in existing.fields}
        for f in fields:
            if f.name in existing_names:
                logger.warning("Duplicate field %s.%s ignored", existing.name, f.name)
                continue
            existing.fields.append(f)
            existing_names.add(f.name)

    def _process_fields(self, field_nodes) -> list[IRField]:
        """Process field definitions (object, interface or input) into IRFields."""
        fields = []
        for node in field_nodes or ():
            args = [
                IRArgument(
                    name=arg_node.name.value,
                    type_ref=convert_type(arg_node.type),
                    default_value=print_ast(arg_node.default_value)
                    if arg_node.default_value
                    else None,
                    description=_description(arg_node),
                )
                for arg_node in getattr(node, "arguments", None) or ()
            ]
            provides = _directive_argument(node, "provides", "fields")
            requires = _directive_argument(node, "requires", "fields")
            fields.append(
                IRField(
                    name=node.name.value,
                    type_ref=convert_type(node.type),
                    description=_description(node),
                    arguments=args,
                    external=_has_directive(node, "external"),
                    provides=provides[0] if provides else None,
                    requires=requires[0] if requires else None,
                )
            )
        return fields


def parse_document(document: DocumentNode | str) -> IRSchema:
    """Build an IRSchema from a graphql-core document or SDL text."""
    if isinstance(document, str):
        document = parse(document)
    return SchemaParser().parse_document(document)

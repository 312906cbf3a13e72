"""End-to-end tests for translating schemas into TypeScript resolver types."""

import textwrap

import pytest
from graphql import parse

from gql_resolvergen.core.config import TranslationConfig
from gql_resolvergen.core.errors import (
    AMBIGUOUS_REPRESENTATION,
    MALFORMED_SELECTION,
    TranslationError,
)
from gql_resolvergen.core.generator import ResolverTypeGenerator, translate
from gql_resolvergen.core.hooks import AddHeaderHook, FilterTypesHook, HookRunner
from gql_resolvergen.core.parser import parse_document


def lines_of(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines()]


class TestDocument:
    """The assembled document."""

    def test_descriptions_become_tsdoc(self):
        document = parse(
            '''
            """
            This it the base type
            """
            type Query {
              """
              Current User
              """
              me(
                """
                Authorization
                """
                token: String
                """
                Also auth
                """
                other: String
              ): String
            }
            '''
        )
        expected = textwrap.dedent(
            """\
            // This is a machine generated file.
            // Use "gql-resolvergen generate" to regenerate.
            type PromiseOrValue<T> = Promise<T> | T
            type Nullable<T> = T | null | undefined
            type Index<Map extends Record<string, any>, Key extends string, IfMissing> = Map[Key] extends object ? Map[Key] : IfMissing

            export interface Resolvers<TContext = {}, TInternalReps extends Record<string, any> = {}> {
              Query?: QueryResolver<TContext, TInternalReps>
            }

            type QueryRepresentation<TInternalReps extends Record<string, any>> = Index<TInternalReps, "Query", any>
            /**
             * This it the base type
             */
            export interface QueryResolver<TContext = {}, TInternalReps extends Record<string, any> = {}> {
              /**
               * Current User
               */
              me?: (parent: QueryRepresentation<TInternalReps>, args: {
                /**
                 * Authorization
                 */
                token?: string
                /**
                 * Also auth
                 */
                other?: string
              }, context: TContext, info: any) => PromiseOrValue<Nullable<string>>
            }
            """
        )
        assert translate(document) == expected

    def test_multiline_description_is_preserved(self):
        output = translate('"""\nFirst line\n\n  indented *line*\n"""\ntype Query { a: Int }')
        assert "/**\n * First line\n *\n *   indented *line*\n */\nexport interface QueryResolver" in output

    def test_argument_defaults_are_documented(self):
        output = translate(
            """
            type Query {
              products(
                "Currency code"
                currency: String = "EUR"
                limit: Int = 10
              ): [String]
            }
            """
        )
        expected = (
            "    /**\n"
            "     * Currency code\n"
            '     * @default "EUR"\n'
            "     */\n"
            "    currency?: string\n"
            "    /**\n"
            "     * @default 10\n"
            "     */\n"
            "    limit?: number\n"
        )
        assert expected in output

    def test_idempotent(self):
        sdl = """
        type Review @key(fields: "id") @key(fields: "author") { id: ID! author: String }
        enum Color { RED GREEN }
        scalar JSON
        """
        document = parse(sdl)
        assert translate(document) == translate(document)
        config = TranslationConfig(internal_enum_value_support=True)
        assert translate(document, config) == translate(document, config)

    def test_resolver_map_in_document_order(self):
        output = translate(
            """
            scalar Date
            type Query { a: Int }
            enum Color { RED }
            interface Node { id: ID! }
            type User implements Node { id: ID! }
            input Filter { a: Int }
            """
        )
        start = output.index("export interface Resolvers")
        resolver_map = output[start:output.index("}\n", start)]
        assert lines_of(resolver_map)[1:] == [
            "Date?: any",
            "Query?: QueryResolver<TContext, TInternalReps>",
            "Node?: NodeResolver<TContext, TInternalReps>",
            "User?: UserResolver<TContext, TInternalReps>",
        ]

    def test_custom_type_arguments(self):
        config = TranslationConfig(context_type="MyContext", internal_reps_type="MyReps")
        output = translate("type Query { a: Int }", config)
        assert "export interface Resolvers<TContext = MyContext, TInternalReps extends Record<string, any> = MyReps> {" in output


class TestNullability:
    """Lists and non-null wrappers in resolver return types."""

    def test_return_types(self):
        output = translate(
            """
            type Query {
              base: Int
              nonNull: Int!
              list: [Int]
              nonNullList: [Int]!
              listNonNull: [Int!]
              nonNullListNonNull: [Int!]!
            }
            """
        )
        returns = {
            line.split("?:")[0]: line.split(" => ")[1]
            for line in lines_of(output)
            if " => " in line
        }
        assert returns == {
            "base": "PromiseOrValue<Nullable<number>>",
            "nonNull": "PromiseOrValue<number>",
            "list": "PromiseOrValue<Nullable<Nullable<number>[]>>",
            "nonNullList": "PromiseOrValue<Nullable<number>[]>",
            "listNonNull": "PromiseOrValue<Nullable<number[]>>",
            "nonNullListNonNull": "PromiseOrValue<number[]>",
        }

    def test_object_return_type_is_representation(self):
        output = translate("type Query { me: User } type User { firstName: String lastName: String! }")
        assert (
            "me?: (parent: QueryRepresentation<TInternalReps>, args: {}, context: TContext, "
            "info: any) => PromiseOrValue<Nullable<UserRepresentation<TInternalReps>>>"
        ) in output
        assert (
            "lastName?: (parent: UserRepresentation<TInternalReps>, args: {}, context: TContext, "
            "info: any) => PromiseOrValue<string>"
        ) in output


class TestFederation:
    """Entities, @external, @provides and @requires."""

    def test_key_generates_resolve_reference(self):
        output = translate(
            """
            type Review @key(fields: "id") {
              id: ID!
              body: String
              author: String
            }
            """
        )
        assert "export type ReviewKeys = { id: string }" in output
        assert (
            'type ReviewRepresentation<TInternalReps extends Record<string, any>> = '
            'Index<TInternalReps, "Review", ReviewKeys>'
        ) in output
        assert (
            "__resolveReference?: (representation: ReviewKeys, context: TContext, info: any) "
            "=> PromiseOrValue<Nullable<ReviewRepresentation<TInternalReps>>>"
        ) in output

    def test_multiple_keys_are_a_union(self):
        output = translate(
            """
            type Review @key(fields: "id body") @key(fields: "author") {
              id: ID!
              body: String
              author: String
            }
            """
        )
        assert (
            "export type ReviewKeys = { id: string; body: Nullable<string> } | "
            "{ author: Nullable<string> }"
        ) in output

    def test_external_fields_need_provides(self):
        output = translate(
            """
            type Review @key(fields: "id") {
              id: ID!
              body: String
              author: User @provides(fields: "username")
            }

            extend type User @key(fields: "id") {
              id: ID @external
              username: String @external
              numberOfReviews: Int! @external
            }
            """
        )
        user = output[output.index("export interface UserResolver"):]
        assert "username?: (parent: UserRepresentation<TInternalReps>" in user
        assert "numberOfReviews" not in user
        assert "  id?:" not in user
        assert "export type UserKeys = { id: Nullable<string> }" in output

    def test_requires_working_object(self):
        output = translate(
            """
            type Review @key(fields: "id") @key(fields: "id author { id username }") {
              id: ID!
              body: String
              author: User
              product: Product
            }

            extend type User @key(fields: "id username") {
              id: ID @external
              username: String @external
              numberOfReviews: Int!
              reviews: [Review]
            }

            extend type Product @key(fields: "sku") {
              sku: ID! @external
              size: Int @external
              weight: Int @external
              shippingEstimate: String @requires(fields: "size weight")
            }
            """
        )
        assert (
            "shippingEstimate?: (parent: { sku: string } & "
            "{ size: Nullable<number>; weight: Nullable<number> }, args: {}, "
            "context: TContext, info: any) => PromiseOrValue<Nullable<string>>"
        ) in output
        assert (
            "export type ReviewKeys = { id: string } | "
            "{ id: string; author: Nullable<{ id: Nullable<string>; username: Nullable<string> }> }"
        ) in output
        product = output[output.index("export interface ProductResolver"):]
        assert "size?:" not in product
        assert "weight?:" not in product

    def test_broken_keys_are_all_reported(self):
        with pytest.raises(TranslationError) as exc_info:
            translate(
                """
                type Review @key(fields: "idd") { id: ID! }
                type Query { reviews: [Review] }
                type Post @key(fields: "id { value }") { id: ID! }
                """
            )
        error = exc_info.value
        assert [(d.kind, d.type_name, d.selection) for d in error.diagnostics] == [
            (MALFORMED_SELECTION, "Review", "idd"),
            (AMBIGUOUS_REPRESENTATION, "Post", "id { value }"),
        ]
        assert "2 errors" in error.message
        assert "Review" in str(error)
        assert "Post" in str(error)

    def test_broken_provides_is_reported(self):
        with pytest.raises(TranslationError) as exc_info:
            translate(
                """
                type Review { author: User @provides(fields: "nickname") }
                extend type User { id: ID @external }
                """
            )
        (diagnostic,) = exc_info.value.diagnostics
        assert diagnostic.location == "Review.author"
        assert diagnostic.selection == "nickname"


class TestEnumsAndScalars:
    """Enum encodings and custom scalars."""

    SDL = """
    type Query {
      favoriteColor: AllowedColor
      avatar(borderColor: AllowedColor): AllowedColor
    }

    enum AllowedColor {
      RED
      GREEN
      BLUE
    }
    """

    def test_literal_enums(self):
        output = translate(self.SDL)
        assert 'export type AllowedColor = "RED" | "GREEN" | "BLUE"' in output
        assert "borderColor?: AllowedColor" in output
        assert "=> PromiseOrValue<Nullable<AllowedColor>>" in output
        assert "AllowedColorExternal" not in output
        assert "AllowedColor?:" not in output

    def test_internal_enums(self):
        output = translate(self.SDL, internal_enum_value_support=True)
        assert "export type AllowedColor = any" in output
        assert 'export type AllowedColorExternal = "RED" | "GREEN" | "BLUE"' in output
        assert "AllowedColor?: { [external in AllowedColorExternal]: any }" in output
        assert "borderColor?: AllowedColor" in output
        assert " => PromiseOrValue<Nullable<AllowedColor>>" in output

    def test_configurations_do_not_leak(self):
        internal = translate(self.SDL, TranslationConfig(internal_enum_value_support=True))
        literal = translate(self.SDL)
        assert "AllowedColorExternal" in internal
        assert "AllowedColorExternal" not in literal

    def test_custom_scalars(self):
        output = translate(
            """
            scalar JSON

            type Query {
              me(auth: JSON): JSON
            }
            """
        )
        assert "JSON?: any" in output
        assert "export type JSON = any" in output
        assert "auth?: JSON" in output
        assert "=> PromiseOrValue<Nullable<JSON>>" in output


class TestAbstractAndInputTypes:
    """Interfaces, unions and input objects."""

    def test_interface_and_union(self):
        output = translate(
            """
            interface Node { id: ID! }
            type User implements Node { id: ID! }
            type Post implements Node { id: ID! }
            union SearchResult = Post | User
            """
        )
        assert (
            "__resolveType?: (parent: NodeRepresentation<TInternalReps>, context: TContext, "
            'info: any) => PromiseOrValue<Nullable<"User" | "Post">>'
        ) in output
        assert (
            "__resolveType?: (parent: SearchResultRepresentation<TInternalReps>, context: TContext, "
            'info: any) => PromiseOrValue<Nullable<"Post" | "User">>'
        ) in output

    def test_extensions_of_inputs_unions_and_scalars(self):
        output = translate(
            """
            input Filter { a: Int }
            extend input Filter { b: Int }
            type A { id: ID! }
            type B { id: ID! }
            union U = A
            extend union U = B
            extend type Query { search(filter: Filter): U json: JSON }
            extend scalar JSON
            """
        )
        assert "export interface Filter {\n  a?: number\n  b?: number\n}\n" in output
        assert (
            "__resolveType?: (parent: URepresentation<TInternalReps>, context: TContext, "
            'info: any) => PromiseOrValue<Nullable<"A" | "B">>'
        ) in output
        assert "export type JSON = any" in output
        assert "JSON?: any" in output
        assert "=> PromiseOrValue<Nullable<JSON>>" in output

    def test_input_object(self):
        output = translate(
            """
            "A review to create"
            input ReviewInput {
              body: String!
              "Stars"
              rating: Int
              tags: [String!]
            }
            type Mutation { addReview(input: ReviewInput!): ID }
            """
        )
        expected = textwrap.dedent(
            """\
            /**
             * A review to create
             */
            export interface ReviewInput {
              body: string
              /**
               * Stars
               */
              rating?: number
              tags?: string[]
            }
            """
        )
        assert expected in output
        assert "    input: ReviewInput\n" in output


class TestResolverTypeGenerator:
    """Generator options: hooks, templates and writing files."""

    def test_hooks(self):
        hooks = HookRunner()
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix="_"))
        hooks.add_post_hook(AddHeaderHook("/* eslint-disable */"))
        ir = parse_document("type Query { a: Int } type _Service { sdl: String }")

        output = ResolverTypeGenerator(ir, hooks=hooks).generate()
        assert output.startswith("/* eslint-disable */\n\n// This is a machine generated file.")
        assert "_Service" not in output

    def test_filtered_union_member_is_not_resolvable(self):
        hooks = HookRunner()
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix="_"))
        ir = parse_document("type User { id: ID! } type _Service { sdl: String } union Entity = User | _Service")

        output = ResolverTypeGenerator(ir, hooks=hooks).generate()
        assert 'PromiseOrValue<Nullable<"User">>' in output
        assert "_Service" not in output

    def test_custom_template(self, tmp_path):
        (tmp_path / "resolvers.ts.j2").write_text(
            "{% for unit in units %}{{ unit.name }}\n{% endfor %}"
        )
        ir = parse_document("type Query { a: Int } scalar JSON")
        output = ResolverTypeGenerator(ir, template_dir=str(tmp_path)).generate()
        assert output == "Query\nJSON\n"

    def test_write(self, tmp_path):
        ir = parse_document("type Query { a: Int }")
        path = tmp_path / "generated" / "resolvers.ts"
        content = ResolverTypeGenerator(ir).write(str(path))
        assert path.read_text() == content
        assert "export interface QueryResolver" in content

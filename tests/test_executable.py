"""Tests for binding bundles to graphql-core."""

import pytest
from graphql import graphql_sync

from gqlbundle import BundleError, ResolverBindingError, SchemaValidationError, bundle
from gqlbundle.executable import (
    bundle_schema,
    make_executable_schema,
    unpack_bundle,
    validate_type_defs,
)
from gqlbundle.testmods import posts, users


@pytest.fixture
def blog_modules():
    return [users, posts.create_module]


class TestValidateTypeDefs:
    def test_valid_definitions(self):
        schema = validate_type_defs(bundle([{"queries": "a: String"}])["type_defs"])

        assert schema.query_type is not None
        assert schema.query_type.name == "RootQuery"

    def test_syntax_error(self):
        with pytest.raises(SchemaValidationError):
            validate_type_defs("type {")

    def test_unknown_type_reference(self):
        with pytest.raises(SchemaValidationError):
            validate_type_defs(bundle([{"queries": "a: Missing"}])["type_defs"])

    def test_bundle_without_operations_is_not_executable(self):
        with pytest.raises(SchemaValidationError):
            validate_type_defs(bundle([{"schema": "type A { a: String }"}])["type_defs"])


class TestMakeExecutableSchema:
    def test_query_resolver_receives_args_and_context(self):
        seen = {}

        def greet(parent, args, context, info):
            seen["context"] = context
            return f"Hello {args['name']}"

        result = bundle(
            [
                {
                    "queries": "greet(name: String!): String",
                    "resolvers": {"queries": {"greet": greet}},
                }
            ]
        )
        schema = make_executable_schema(result["type_defs"], result["resolvers"])

        response = graphql_sync(
            schema, '{ greet(name: "Ada") }', context_value={"user": "u1"}
        )

        assert response.errors is None
        assert response.data == {"greet": "Hello Ada"}
        assert seen["context"] == {"user": "u1"}

    def test_type_field_resolvers(self):
        result = bundle(
            [
                {
                    "schema": "type User { name: String }",
                    "queries": "me: User",
                    "resolvers": {
                        "queries": {"me": lambda *args: {"first": "Ada", "last": "Lovelace"}},
                        "User": {
                            "name": lambda parent, args, ctx, info: f"{parent['first']} {parent['last']}"
                        },
                    },
                }
            ]
        )
        schema = make_executable_schema(result["type_defs"], result["resolvers"])

        response = graphql_sync(schema, "{ me { name } }")

        assert response.data == {"me": {"name": "Ada Lovelace"}}

    def test_unknown_type_in_resolvers(self):
        with pytest.raises(ResolverBindingError):
            make_executable_schema(
                "type RootQuery { a: String }\nschema { query: RootQuery }",
                {"Missing": {"a": lambda *args: None}},
            )

    def test_unknown_field_in_resolvers(self):
        with pytest.raises(ResolverBindingError):
            make_executable_schema(
                "type RootQuery { a: String }\nschema { query: RootQuery }",
                {"RootQuery": {"b": lambda *args: None}},
            )

    def test_non_callable_field_resolver(self):
        with pytest.raises(ResolverBindingError):
            make_executable_schema(
                "type RootQuery { a: String }\nschema { query: RootQuery }",
                {"RootQuery": {"a": "not a resolver"}},
            )


class TestUnpackBundle:
    def test_splits_result(self):
        type_defs, resolvers = unpack_bundle(bundle([{"queries": "a: String"}]))

        assert "a: String" in type_defs
        assert resolvers == {}

    def test_missing_resolvers_default_to_empty(self):
        assert unpack_bundle({"type_defs": "type A { a: String }"}) == ("type A { a: String }", {})

    @pytest.mark.parametrize("result", ["replaced", None, {"typeDefs": "type A { a: String }"}])
    def test_reshaped_result(self, result):
        with pytest.raises(BundleError, match="alter hook"):
            unpack_bundle(result)


class TestBlogModules:
    def test_interface_resolved_by_composed_resolve_type(self, blog_modules):
        schema = bundle_schema(blog_modules)

        response = graphql_sync(
            schema,
            """
            {
              post: node(id: "p1") { id ... on Post { title } }
              user: node(id: "u1") { id ... on User { name } }
            }
            """,
        )

        assert response.errors is None
        assert response.data == {
            "post": {"id": "p1", "title": "Hello"},
            "user": {"id": "u1", "name": "Ada"},
        }

    def test_typed_queries_and_mutations(self, blog_modules):
        schema = bundle_schema(blog_modules)

        response = graphql_sync(
            schema,
            'mutation { publishPost(id: "p1") { title published } }',
        )

        assert response.errors is None
        assert response.data == {"publishPost": {"title": "Hello", "published": True}}

        response = graphql_sync(schema, '{ user(id: "u2") { name } }')

        assert response.data == {"user": {"name": "Grace"}}

    def test_shared_dependency_declared_once(self, blog_modules):
        type_defs = bundle(blog_modules)["type_defs"]

        assert type_defs.count("interface Node") == 1
        assert type_defs.count("node(id: ID!): Node") == 1

    def test_custom_root_keys(self, blog_modules):
        schema = bundle_schema(
            blog_modules, {"root_keys": {"query": "Query", "mutation": "Mutation"}}
        )

        assert schema.query_type.name == "Query"
        assert schema.mutation_type.name == "Mutation"

    def test_alter_replacing_result_shape(self, blog_modules):
        with pytest.raises(BundleError):
            bundle_schema([*blog_modules, {"alter": lambda result: "replaced"}])


def test_dict_modules_with_factory():
    users_by_id = {"u1": {"id": "u1", "name": "Ada"}}
    node = {"schema": "interface Node { id: ID! }", "queries": "node(id: ID!): Node"}
    users_module = {
        "schema": "type User implements Node { id: ID! name: String }",
        "resolvers": {
            "queries": {"node": lambda parent, args, ctx, info: users_by_id.get(args["id"])},
            "Node": {"__resolveType": lambda obj, ctx, info: "User" if "name" in obj else None},
        },
        "modules": [node],
    }

    def posts_factory():
        return {
            "schema": "type Post implements Node { id: ID! title: String }",
            "resolvers": {
                "Node": {
                    "__resolveType": lambda obj, ctx, info: "Post" if "title" in obj else None
                },
            },
            "modules": [node],
        }

    result = bundle([users_module, posts_factory])
    schema = make_executable_schema(result["type_defs"], result["resolvers"])

    response = graphql_sync(schema, '{ node(id: "u1") { id ... on User { name } } }')

    assert response.errors is None
    assert response.data == {"node": {"id": "u1", "name": "Ada"}}

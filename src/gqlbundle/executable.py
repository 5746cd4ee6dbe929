"""
Bind bundles to graphql-core.

The bundler itself only produces text and a resolver table. This module
builds a ``graphql.GraphQLSchema`` from them so a bundle can be validated and
executed. Module resolvers use the ``(parent, args, context, info)``
convention and are adapted to graphql-core's ``(source, info, **args)``.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    build_schema,
    get_introspection_query,
    graphql_sync,
)
from graphql import validate_schema as gql_validate_schema

from .bundle import bundle
from .errors import BundleError, ResolverBindingError, SchemaValidationError
from .logging import get_logger
from .options import BundleOptions

logger = get_logger(__name__)

RESOLVE_TYPE_KEY = "__resolveType"
IS_TYPE_OF_KEY = "__isTypeOf"


def validate_type_defs(type_defs: str) -> GraphQLSchema:
    """Build and validate a schema from definition text.

    Also runs the introspection query, which catches most type resolution
    problems that structural validation lets through.

    Raises:
        SchemaValidationError: If the text does not parse or the schema is invalid
    """
    try:
        schema = build_schema(type_defs)
    except (GraphQLError, TypeError) as e:
        raise SchemaValidationError(
            f"GraphQL type definitions could not be built: {e}", [str(e)]
        ) from e

    errors = [str(error) for error in gql_validate_schema(schema)]
    if errors:
        raise SchemaValidationError(
            f"GraphQL schema validation failed: {'; '.join(errors)}", errors
        )

    result = graphql_sync(schema, get_introspection_query())
    if result.errors:
        errors = [str(error) for error in result.errors]
        raise SchemaValidationError(f"GraphQL introspection failed: {'; '.join(errors)}", errors)

    logger.debug("GraphQL schema validation successful", types=len(schema.type_map))
    return schema


def _field_resolver(resolver: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(resolver)
    def resolve(source: Any, info: Any, **kwargs: Any) -> Any:
        return resolver(source, kwargs, info.context, info)

    return resolve


def _type_resolver(resolver: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(resolver)
    def resolve_type(value: Any, info: Any, abstract_type: Any) -> Any:
        return resolver(value, info.context, info)

    return resolve_type


def _type_check(resolver: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(resolver)
    def is_type_of(value: Any, info: Any) -> Any:
        return resolver(value, info.context, info)

    return is_type_of


def _bind_field(type_name: str, field_name: str, field: GraphQLField, resolver: Any) -> None:
    if isinstance(resolver, Mapping):
        # Subscription style: {"subscribe": ..., "resolve": ...}
        if "subscribe" in resolver:
            field.subscribe = _field_resolver(resolver["subscribe"])
        if "resolve" in resolver:
            field.resolve = _field_resolver(resolver["resolve"])
        return

    if not callable(resolver):
        raise ResolverBindingError(
            f"Resolver for {type_name}.{field_name} is not callable: {type(resolver).__name__}"
        )
    field.resolve = _field_resolver(resolver)


def _bind_object(graphql_type: GraphQLObjectType, entry: Mapping[str, Any]) -> None:
    for field_name, resolver in entry.items():
        if field_name == IS_TYPE_OF_KEY:
            graphql_type.is_type_of = _type_check(resolver)
            continue

        field = graphql_type.fields.get(field_name)
        if field is None:
            raise ResolverBindingError(
                f"{graphql_type.name}.{field_name} defined in resolvers, but not in schema"
            )
        _bind_field(graphql_type.name, field_name, field, resolver)


def _bind_abstract(
    graphql_type: GraphQLInterfaceType | GraphQLUnionType, entry: Mapping[str, Any]
) -> None:
    for key, resolver in entry.items():
        if key == RESOLVE_TYPE_KEY:
            graphql_type.resolve_type = _type_resolver(resolver)
        else:
            logger.warning(
                "Ignoring field resolver on abstract type",
                type=graphql_type.name,
                field=key,
            )


def make_executable_schema(type_defs: str, resolvers: Mapping[str, Any]) -> GraphQLSchema:
    """Build a graphql-core schema and attach the resolver table to it.

    Raises:
        SchemaValidationError: If ``type_defs`` is not a valid schema
        ResolverBindingError: If a resolver targets a missing type or field
    """
    schema = validate_type_defs(type_defs)

    for type_name, entry in resolvers.items():
        graphql_type = schema.get_type(type_name)
        if graphql_type is None:
            raise ResolverBindingError(f"{type_name} defined in resolvers, but not in schema")

        if not isinstance(entry, Mapping):
            logger.debug("Skipping non-mapping resolver entry", type=type_name)
            continue

        if isinstance(graphql_type, (GraphQLInterfaceType, GraphQLUnionType)):
            _bind_abstract(graphql_type, entry)
        elif isinstance(graphql_type, GraphQLObjectType):
            _bind_object(graphql_type, entry)
        else:
            logger.debug(
                "Skipping resolvers for non-object type",
                type=type_name,
                kind=type(graphql_type).__name__,
            )

    logger.info("Built executable schema", types=len(resolvers))
    return schema


def unpack_bundle(result: Any) -> tuple[str, Mapping[str, Any]]:
    """Split a bundled result into type definitions and resolver table.

    Raises:
        BundleError: If alter hooks reshaped the result so that it no longer
            holds ``type_defs``
    """
    if not isinstance(result, Mapping) or "type_defs" not in result:
        raise BundleError("Bundled result has no 'type_defs'; was it replaced by an alter hook?")
    return result["type_defs"], result.get("resolvers") or {}


def bundle_schema(
    modules: Iterable[Any] | None = None,
    options: BundleOptions | Mapping[str, Any] | None = None,
) -> GraphQLSchema:
    """Bundle modules and build an executable graphql-core schema from them.

    Raises:
        BundleError: If alter hooks reshaped the result so that it no longer
            holds ``type_defs`` and ``resolvers``
    """
    type_defs, resolvers = unpack_bundle(bundle(modules, options))
    return make_executable_schema(type_defs, resolvers)

"""
Merge per-module resolver maps into one resolver table.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .composition import compose_resolvers
from .fragments import Fragments, collect_fragments
from .logging import get_logger
from .modules import ModuleRecord
from .options import BundleOptions, RootKeys

logger = get_logger(__name__)

# Module resolver key -> RootKeys attribute
OPERATION_CATEGORIES: dict[str, str] = {
    "queries": "query",
    "mutations": "mutation",
    "subscriptions": "subscription",
}

ResolverTable = dict[str, Any]


def root_type_names(root_keys: RootKeys, fragments: Fragments) -> dict[str, bool]:
    """Map each root type name to whether its category declared operations."""
    return {
        root_keys.query: bool(fragments.query_text),
        root_keys.mutation: bool(fragments.mutation_text),
        root_keys.subscription: bool(fragments.subscription_text),
    }


def normalize_resolver_map(
    resolvers: Mapping[str, Any], root_keys: RootKeys
) -> list[tuple[str, Any]]:
    """Rename operation categories of one module's resolvers to root type names.

    Other keys are type names and pass through unchanged. Order is kept.
    """
    normalized: list[tuple[str, Any]] = []
    for key, value in resolvers.items():
        category = OPERATION_CATEGORIES.get(key)
        type_name = getattr(root_keys, category) if category else key
        normalized.append((type_name, value))
    return normalized


def _merge_field(
    fields: dict[str, Any],
    type_name: str,
    field_name: str,
    resolver: Any,
    combine: bool,
) -> None:
    if not combine or field_name not in fields:
        fields[field_name] = resolver
        return

    prior = fields[field_name]
    if callable(prior) and callable(resolver):
        fields[field_name] = compose_resolvers(prior, resolver)
        logger.debug("Chained colliding resolvers", type=type_name, field=field_name)
        return

    logger.warning(
        "Cannot chain non-callable resolvers; later registration wins",
        type=type_name,
        field=field_name,
    )
    fields[field_name] = resolver


def merge_resolvers(
    modules: Iterable[ModuleRecord],
    options: BundleOptions,
    fragments: Fragments | None = None,
) -> ResolverTable:
    """Build the resolver table for resolved modules.

    Resolvers for the same ``(type, field)`` are chained in module order when
    ``options.combine`` is set, otherwise the later module wins. Root types
    whose category has no operation text are left out of the table even if
    resolvers were registered for them.

    Args:
        modules: Records from :func:`gqlbundle.modules.resolve_modules`
        options: Resolved bundle options
        fragments: Collected fragments; computed from ``modules`` if omitted

    Returns:
        Mapping of type name to field name to resolver
    """
    modules = list(modules)
    if fragments is None:
        fragments = collect_fragments(modules)

    table: ResolverTable = {}
    for module in modules:
        for type_name, value in normalize_resolver_map(module.resolvers, options.root_keys):
            if not isinstance(value, Mapping):
                # Scalar implementations and similar objects are not field maps
                table[type_name] = value
                continue

            fields = table.get(type_name)
            if not isinstance(fields, dict):
                fields = table[type_name] = {}

            for field_name, resolver in value.items():
                _merge_field(fields, type_name, field_name, resolver, options.combine)

    roots = root_type_names(options.root_keys, fragments)
    merged: ResolverTable = {}
    for root_name, declared in roots.items():
        if root_name not in table:
            continue
        if declared:
            merged[root_name] = table[root_name]
        else:
            logger.debug(
                "Dropping root resolvers without operation definitions",
                type=root_name,
                fields=sorted(table[root_name]) if isinstance(table[root_name], dict) else None,
            )

    for type_name, value in table.items():
        if type_name not in roots:
            merged[type_name] = value

    return merged

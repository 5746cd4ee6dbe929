"""
Bundle schema modules into type definitions and a resolver table.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .assembly import assemble_type_defs
from .fragments import collect_fragments
from .hooks import apply_alters
from .logging import bundle_context, get_logger
from .modules import resolve_modules
from .options import BundleOptions, resolve_options
from .resolvers import merge_resolvers

logger = get_logger(__name__)


def bundle(
    modules: Iterable[Any] | None = None,
    options: BundleOptions | Mapping[str, Any] | None = None,
) -> Any:
    """Compile modules into type definitions and resolvers.

    Each entry of ``modules`` can be a module, a (nested) list of modules or
    a zero-argument factory returning either. A module may provide:

    - ``schema``: type definition text
    - ``queries`` / ``mutations`` / ``subscriptions``: root operation
      signatures, one block of text per category
    - ``resolvers``: ``{"queries": {...}, "mutations": {...},
      "subscriptions": {...}, "<TypeName>": {"<field>": resolver}}``
    - ``modules``: dependencies, resolved the same way
    - ``alter``: function receiving the bundled result and returning a
      replacement

    The result keys use Python naming: the type definitions are under
    ``type_defs``, not ``typeDefs``. Alter hooks receive this dict and
    should return one of the same shape for
    :func:`gqlbundle.executable.unpack_bundle` to accept it.

    Args:
        modules: Module declarations, in order
        options: ``BundleOptions`` or a mapping overriding any of
            ``root_keys.query`` ("RootQuery"), ``root_keys.mutation``
            ("RootMutation"), ``root_keys.subscription``
            ("RootSubscription") and ``combine`` (True)

    Returns:
        ``{"type_defs": str, "resolvers": dict}`` as reshaped by alter hooks
    """
    resolved_options = resolve_options(options)

    with bundle_context():
        records = resolve_modules(modules)
        fragments = collect_fragments(records)
        resolvers = merge_resolvers(records, resolved_options, fragments)
        type_defs = assemble_type_defs(fragments, resolved_options.root_keys)

        logger.debug(
            "Bundled modules",
            modules=len(records),
            types=len(resolvers),
            combine=resolved_options.combine,
        )

        result: Any = {"type_defs": type_defs, "resolvers": resolvers}
        return apply_alters(records, result)

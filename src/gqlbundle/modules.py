"""
Module declarations and the module graph resolver.

A module declaration is one of:

1. a module: a mapping (usually a ``dict``) or any object exposing
   ``schema``, ``queries``, ``mutations``, ``subscriptions``, ``resolvers``,
   ``modules`` and ``alter`` as attributes (``SchemaModule``, a Python module,
   a ``SimpleNamespace``...);
2. a list or tuple of declarations, nested to any depth;
3. a zero-argument factory returning 1 or 2.

``resolve_modules`` flattens declarations into ``ModuleRecord`` instances,
depth-first, emitting each module before its dependencies.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from .logging import get_logger

logger = get_logger(__name__)

TEXT_FIELDS = ("schema", "queries", "mutations", "subscriptions")

_SCALAR_TYPES = (str, bytes, bytearray, int, float, bool)


@dataclass(eq=False)
class SchemaModule:
    """Typed authoring form of a module.

    Compared by identity, like any other module object.
    """

    schema: str = ""
    queries: str = ""
    mutations: str = ""
    subscriptions: str = ""
    resolvers: dict[str, Any] = field(default_factory=dict)
    modules: list[Any] = field(default_factory=list)
    alter: Callable[[Any], Any] | None = None


@dataclass(frozen=True, eq=False)
class ModuleRecord:
    """Normalized module emitted by the graph resolver.

    Dependencies are already expanded, so a record never carries ``modules``.
    ``source`` is the caller's original object, left untouched.
    """

    schema: str = ""
    queries: str = ""
    mutations: str = ""
    subscriptions: str = ""
    resolvers: Mapping[str, Any] = field(default_factory=dict)
    alter: Callable[[Any], Any] | None = None
    source: Any = None


def read_field(module: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping key or an object attribute."""
    if isinstance(module, Mapping):
        value = module.get(name, default)
    else:
        value = getattr(module, name, default)
    return default if value is None else value


def _text(module: Any, name: str) -> str:
    value = read_field(module, name, "")
    if not isinstance(value, str):
        logger.warning(
            "Ignoring non-text module fragment",
            field=name,
            value_type=type(value).__name__,
        )
        return ""
    return value


def normalize_module(module: Any) -> ModuleRecord:
    """Build a fresh ``ModuleRecord`` from a module, without its ``modules``."""
    resolvers = read_field(module, "resolvers", {})
    if not isinstance(resolvers, Mapping):
        logger.warning("Ignoring non-mapping resolvers", value_type=type(resolvers).__name__)
        resolvers = {}

    alter = read_field(module, "alter")
    if alter is not None and not callable(alter):
        logger.warning("Ignoring non-callable alter hook", value_type=type(alter).__name__)
        alter = None

    return ModuleRecord(
        schema=_text(module, "schema"),
        queries=_text(module, "queries"),
        mutations=_text(module, "mutations"),
        subscriptions=_text(module, "subscriptions"),
        resolvers=resolvers,
        alter=alter,
        source=module,
    )


def _is_sequence(declaration: Any) -> bool:
    return isinstance(declaration, (list, tuple))


def _is_factory(declaration: Any) -> bool:
    """True for callables that can be invoked without arguments."""
    if not callable(declaration):
        return False
    try:
        signature = inspect.signature(declaration)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures
        return True
    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        if parameter.default is parameter.empty:
            return False
    return True


def _dependencies(module: Any) -> Iterator[tuple[Any, bool]]:
    dependencies = read_field(module, "modules", [])
    if not _is_sequence(dependencies):
        dependencies = [dependencies]
    return ((dependency, True) for dependency in dependencies)


def resolve_modules(declarations: Iterable[Any] | None) -> list[ModuleRecord]:
    """Flatten module declarations into an ordered list of records.

    Each distinct object (module, list or factory) is expanded at most once
    per call; later occurrences contribute nothing, which also breaks
    dependency cycles. The visited set lives only for the duration of this
    call. Factories are invoked once and their result is not invoked again.

    Args:
        declarations: Ordered top-level module declarations

    Returns:
        Module records, each module followed by its resolved dependencies
    """
    if declarations is None:
        return []
    if (
        isinstance(declarations, (Mapping, *_SCALAR_TYPES))
        or not isinstance(declarations, Iterable)
    ):
        # A single declaration rather than a list of them
        declarations = [declarations]

    # id -> object; holding the object keeps factory results alive so their
    # ids cannot be reused while the traversal is running
    visited: dict[int, Any] = {}
    records: list[ModuleRecord] = []

    stack: list[Iterator[tuple[Any, bool]]] = [
        iter([(declaration, True) for declaration in declarations])
    ]
    while stack:
        try:
            declaration, may_invoke = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue

        if declaration is None:
            continue

        key = id(declaration)
        if key in visited:
            continue
        visited[key] = declaration

        if _is_sequence(declaration):
            stack.append(((item, True) for item in declaration))
            continue

        if callable(declaration) and not isinstance(declaration, Mapping):
            if not may_invoke:
                logger.warning(
                    "Factory returned another factory; not invoking it",
                    factory=getattr(declaration, "__qualname__", repr(declaration)),
                )
                continue
            if not _is_factory(declaration):
                logger.warning(
                    "Skipping callable module declaration that requires arguments",
                    declaration=getattr(declaration, "__qualname__", repr(declaration)),
                )
                continue
            stack.append(iter([(declaration(), False)]))
            continue

        if isinstance(declaration, _SCALAR_TYPES):
            logger.warning(
                "Skipping malformed module declaration",
                value_type=type(declaration).__name__,
            )
            continue

        records.append(normalize_module(declaration))
        stack.append(_dependencies(declaration))

    logger.debug("Resolved module graph", modules=len(records), visited=len(visited))
    return records

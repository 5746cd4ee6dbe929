"""
Resolver composition.

When several modules resolve the same field, the merger chains their
resolvers instead of keeping only the last one. A chain tries each resolver
in registration order and returns the first result that is not ``None``.
This is what lets independent modules each contribute a partial
``__resolveType`` for a shared interface.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

Resolver = Callable[..., Any]


class ResolverChain:
    """A resolver composed of other resolvers, tried in order.

    Resolvers receive the chain's arguments unchanged. If one returns an
    awaitable, the remainder of the chain runs asynchronously and the chain
    returns an awaitable as well.
    """

    __slots__ = ("resolvers",)

    def __init__(self, resolvers: Sequence[Resolver]):
        self.resolvers: tuple[Resolver, ...] = tuple(resolvers)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        for index, resolver in enumerate(self.resolvers):
            result = resolver(*args, **kwargs)
            if inspect.isawaitable(result):
                return self._continue_async(result, index + 1, args, kwargs)
            if result is not None:
                return result
        return None

    async def _continue_async(
        self,
        pending: Awaitable[Any],
        start: int,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        result = await pending
        if result is not None:
            return result

        for resolver in self.resolvers[start:]:
            result = resolver(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            if result is not None:
                return result
        return None

    def __len__(self) -> int:
        return len(self.resolvers)

    def __iter__(self):
        return iter(self.resolvers)

    def __repr__(self) -> str:
        names = ", ".join(getattr(r, "__qualname__", repr(r)) for r in self.resolvers)
        return f"ResolverChain([{names}])"


def compose_resolvers(first: Resolver, second: Resolver) -> ResolverChain:
    """Chain ``first`` then ``second`` into one resolver.

    Existing chains are flattened, so repeated composition yields a single
    chain in registration order rather than nested chains.
    """
    resolvers: list[Resolver] = []
    for resolver in (first, second):
        if isinstance(resolver, ResolverChain):
            resolvers.extend(resolver.resolvers)
        else:
            resolvers.append(resolver)
    return ResolverChain(resolvers)

"""
Collect the textual fragments contributed by resolved modules.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from .modules import ModuleRecord

FRAGMENT_SEPARATOR = "\n"


@dataclass(frozen=True)
class Fragments:
    """Joined definition text per category."""

    type_text: str = ""
    query_text: str = ""
    mutation_text: str = ""
    subscription_text: str = ""


def join_fragments(texts: Iterable[str]) -> str:
    """Join non-empty fragments with newlines, keeping their order."""
    return FRAGMENT_SEPARATOR.join(text for text in texts if text)


def collect_fragments(modules: Iterable[ModuleRecord]) -> Fragments:
    modules = list(modules)
    return Fragments(
        type_text=join_fragments(module.schema for module in modules),
        query_text=join_fragments(module.queries for module in modules),
        mutation_text=join_fragments(module.mutations for module in modules),
        subscription_text=join_fragments(module.subscriptions for module in modules),
    )

"""
Assemble the final type definition text.
"""

from .fragments import Fragments
from .options import RootKeys

INDENT = "  "


def _indent(text: str) -> str:
    return "\n".join(f"{INDENT}{line}" if line.strip() else line for line in text.splitlines())


def root_type_block(name: str, text: str) -> str:
    """``type <name> { ... }`` for one operation category, or "" when empty."""
    if not text:
        return ""
    return f"type {name} {{\n{_indent(text)}\n}}"


def schema_block(fragments: Fragments, root_keys: RootKeys) -> str:
    """The ``schema { ... }`` declaration listing non-empty root types."""
    lines = []
    if fragments.query_text:
        lines.append(f"{INDENT}query: {root_keys.query}")
    if fragments.mutation_text:
        lines.append(f"{INDENT}mutation: {root_keys.mutation}")
    if fragments.subscription_text:
        lines.append(f"{INDENT}subscription: {root_keys.subscription}")
    return "\n".join(["schema {", *lines, "}"])


def assemble_type_defs(fragments: Fragments, root_keys: RootKeys) -> str:
    """Combine fragments into definition text.

    Type definitions come first, then the query, mutation and subscription
    root types that have operations, then the schema declaration. Fragment
    text is copied verbatim apart from indentation inside root types.
    """
    parts = [
        fragments.type_text,
        root_type_block(root_keys.query, fragments.query_text),
        root_type_block(root_keys.mutation, fragments.mutation_text),
        root_type_block(root_keys.subscription, fragments.subscription_text),
        schema_block(fragments, root_keys),
    ]
    return "\n\n".join(part for part in parts if part) + "\n"

"""Test helper schema module defined at Python module level (import-based)."""

from . import node

USERS = {
    "u1": {"id": "u1", "name": "Ada"},
    "u2": {"id": "u2", "name": "Grace"},
}

schema = """
type User implements Node {
  id: ID!
  name: String
}
"""

queries = "user(id: ID!): User"


def resolve_user(parent, args, context, info):
    return USERS.get(args["id"])


def resolve_type(obj, context, info):
    return "User" if "name" in obj else None


resolvers = {
    "queries": {
        "user": resolve_user,
        "node": resolve_user,
    },
    "Node": {"__resolveType": resolve_type},
}

modules = [node.module]

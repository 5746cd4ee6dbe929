"""Test helper schema module built by a factory (import-based)."""

from ..modules import SchemaModule
from . import node

POSTS = {
    "p1": {"id": "p1", "title": "Hello", "author_id": "u1"},
}


def resolve_post(parent, args, context, info):
    return POSTS.get(args["id"])


def resolve_type(obj, context, info):
    return "Post" if "title" in obj else None


def resolve_publish_post(parent, args, context, info):
    post = POSTS.get(args["id"])
    if post is None:
        return None
    return {**post, "published": True}


def create_module() -> SchemaModule:
    return SchemaModule(
        schema="""
type Post implements Node {
  id: ID!
  title: String
  published: Boolean
}
""",
        queries="post(id: ID!): Post",
        mutations="publishPost(id: ID!): Post",
        resolvers={
            "queries": {
                "post": resolve_post,
                "node": resolve_post,
            },
            "mutations": {"publishPost": resolve_publish_post},
            "Node": {"__resolveType": resolve_type},
        },
        modules=[node.module],
    )

"""Shared ``Node`` interface, depended on by the users and posts modules."""

from ..modules import SchemaModule

module = SchemaModule(
    schema="""
interface Node {
  id: ID!
}
""",
    queries="node(id: ID!): Node",
)

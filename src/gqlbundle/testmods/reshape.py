"""Test helper schema module whose alter hook discards the bundled result."""

schema = "type Unused { id: ID }"


def alter(result):
    return "replaced"

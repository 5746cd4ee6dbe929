"""
Exceptions raised around the bundling core.

Bundling itself never raises for partially specified modules; these cover
option parsing, configuration-driven loading and the graphql-core adapter.
"""


class BundleError(Exception):
    """Base exception for gqlbundle."""

    pass


class BundleConfigError(BundleError):
    """Raised when bundle options cannot be parsed."""

    pass


class ModuleLoadError(BundleError):
    """Raised when a configured module declaration cannot be loaded."""

    pass


class SchemaValidationError(BundleError):
    """Raised when bundled type definitions fail parsing or validation."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ResolverBindingError(BundleError):
    """Raised when a resolver table entry has no matching schema type or field."""

    pass

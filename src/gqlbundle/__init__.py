"""
gqlbundle
Compose independently authored GraphQL schema modules into one schema
"""

__version__ = "0.1.0"

from .bundle import bundle
from .composition import ResolverChain, compose_resolvers
from .config import settings
from .errors import (
    BundleConfigError,
    BundleError,
    ModuleLoadError,
    ResolverBindingError,
    SchemaValidationError,
)
from .modules import ModuleRecord, SchemaModule, resolve_modules
from .options import BundleOptions, RootKeys

__all__ = [
    "__version__",
    "settings",
    # Bundling
    "bundle",
    "BundleOptions",
    "RootKeys",
    "SchemaModule",
    "ModuleRecord",
    "resolve_modules",
    # Composition
    "ResolverChain",
    "compose_resolvers",
    # Errors
    "BundleError",
    "BundleConfigError",
    "ModuleLoadError",
    "ResolverBindingError",
    "SchemaValidationError",
]

"""
Bundle options and their merge with configured defaults.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import Settings, settings
from .errors import BundleConfigError


class RootKeys(BaseModel):
    """Names of the synthetic root operation types."""

    model_config = ConfigDict(frozen=True)

    query: str = Field("RootQuery", description="Root type aggregating queries")
    mutation: str = Field("RootMutation", description="Root type aggregating mutations")
    subscription: str = Field(
        "RootSubscription", description="Root type aggregating subscriptions"
    )


class BundleOptions(BaseModel):
    """Options recognized by :func:`gqlbundle.bundle`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    root_keys: RootKeys = Field(default_factory=RootKeys, alias="rootKeys")
    combine: bool = Field(
        True, description="Chain colliding resolvers instead of overwriting them"
    )

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "BundleOptions":
        source = source or settings
        return cls(
            root_keys=RootKeys(
                query=source.root_query,
                mutation=source.root_mutation,
                subscription=source.root_subscription,
            ),
            combine=source.combine,
        )


def resolve_options(options: BundleOptions | Mapping[str, Any] | None = None) -> BundleOptions:
    """Merge caller options over the configured defaults, field by field.

    A mapping may override any subset of the root keys without repeating the
    others, e.g. ``{"root_keys": {"query": "Query"}}``. A ``BundleOptions``
    instance is taken as complete and returned unchanged.

    Raises:
        BundleConfigError: If the options do not validate
    """
    if isinstance(options, BundleOptions):
        return options

    defaults = BundleOptions.from_settings()
    if options is None:
        return defaults

    try:
        overrides = BundleOptions.model_validate(options)
    except ValidationError as e:
        raise BundleConfigError(f"Invalid bundle options: {e}") from e

    root_keys = defaults.root_keys
    if "root_keys" in overrides.model_fields_set:
        root_keys = root_keys.model_copy(
            update=overrides.root_keys.model_dump(exclude_unset=True)
        )

    combine = defaults.combine
    if "combine" in overrides.model_fields_set:
        combine = overrides.combine

    return BundleOptions(root_keys=root_keys, combine=combine)

#!/usr/bin/env python3
"""
Command line entry point for gqlbundle.
"""

import sys
from collections.abc import Callable
from typing import Any

import click

from gqlbundle import __version__
from gqlbundle.bundle import bundle
from gqlbundle.config import settings
from gqlbundle.errors import BundleError
from gqlbundle.executable import make_executable_schema, unpack_bundle
from gqlbundle.loader import load_modules_from_config
from gqlbundle.logging import configure_logging, get_logger

logger = get_logger(__name__)


def bundle_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that bundles modules."""
    decorators = [
        click.argument("config", required=False, type=click.Path(dir_okay=False)),
        click.option("--root-query", default=None, help="Root query type name"),
        click.option("--root-mutation", default=None, help="Root mutation type name"),
        click.option("--root-subscription", default=None, help="Root subscription type name"),
        click.option(
            "--no-combine",
            is_flag=True,
            default=False,
            help="Let later modules overwrite colliding resolvers instead of chaining them",
        ),
        click.option("--debug", is_flag=True, default=False, help="Verbose console logging"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _bundle_from_config(
    config: str | None,
    root_query: str | None,
    root_mutation: str | None,
    root_subscription: str | None,
    no_combine: bool,
) -> tuple[str, Any]:
    root_keys = {
        key: value
        for key, value in (
            ("query", root_query),
            ("mutation", root_mutation),
            ("subscription", root_subscription),
        )
        if value
    }
    options: dict[str, Any] = {"root_keys": root_keys}
    if no_combine:
        options["combine"] = False

    modules = load_modules_from_config(config)
    return unpack_bundle(bundle(modules, options))


@click.group()
@click.version_option(version=__version__, prog_name="gqlbundle")
def cli() -> None:
    """gqlbundle CLI - bundle schema modules into one GraphQL schema."""
    pass


@cli.command("print-schema")
@bundle_options
def print_schema(
    config: str | None,
    root_query: str | None,
    root_mutation: str | None,
    root_subscription: str | None,
    no_combine: bool,
    debug: bool,
) -> None:
    """Print the bundled type definitions of the modules listed in CONFIG."""
    configure_logging(debug=debug or settings.debug, stream=sys.stderr)

    try:
        type_defs, _ = _bundle_from_config(
            config, root_query, root_mutation, root_subscription, no_combine
        )
    except BundleError as e:
        logger.error("Bundling failed", error=str(e))
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    click.echo(type_defs)


@cli.command("validate")
@bundle_options
def validate(
    config: str | None,
    root_query: str | None,
    root_mutation: str | None,
    root_subscription: str | None,
    no_combine: bool,
    debug: bool,
) -> None:
    """Bundle the modules listed in CONFIG and validate the result."""
    configure_logging(debug=debug or settings.debug, stream=sys.stderr)

    try:
        type_defs, resolvers = _bundle_from_config(
            config, root_query, root_mutation, root_subscription, no_combine
        )
        schema = make_executable_schema(type_defs, resolvers)
    except BundleError as e:
        logger.error("Schema validation failed", error=str(e))
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Schema is valid ({len(schema.type_map)} types)")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

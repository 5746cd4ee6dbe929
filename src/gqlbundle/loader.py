"""Configuration-driven module loader.

Reads module declarations from a YAML file so an application can assemble
its API from configuration. The file path is given explicitly or via
settings.modules_config_path.

Supports two declaration forms: import and entrypoint.
Strict mode is enabled by default and fails on the first bad declaration.

Example file::

    strict_mode: true
    modules:
      - import: "myapp.users.schema:module"
      - import: "myapp.posts.schema"        # the Python module itself
      - entrypoint: "billing"
        enabled: false
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from importlib import import_module
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

import yaml

from .config import settings
from .errors import ModuleLoadError
from .logging import get_logger

logger = get_logger(__name__)


ENTRYPOINT_GROUP = "gqlbundle.modules"


@dataclass
class LoaderConfig:
    strict_mode: bool = True
    declarations: list[dict[str, Any]] = field(default_factory=list)


def _load_file_config(path: str) -> LoaderConfig | None:
    try:
        with open(path, encoding="utf-8") as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return None
    except yaml.YAMLError as e:
        raise ModuleLoadError(f"Invalid modules config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ModuleLoadError(f"Modules config {path} must be a mapping")

    return LoaderConfig(
        strict_mode=bool(data.get("strict_mode", True)),
        declarations=list(data.get("modules", []) or []),
    )


def _discover_config() -> LoaderConfig | None:
    """Discover config from settings.modules_config_path."""
    if not settings.modules_config_path:
        return None

    path = Path(settings.modules_config_path)
    if not path.exists():
        logger.warning("Modules config path set but not found", path=str(path))
        return None

    cfg = _load_file_config(str(path))
    if cfg:
        logger.info("Loaded modules config from settings", path=str(path))
    return cfg


def resolve_import(qualified_name: str) -> Any:
    """Import ``package.module:attribute`` or a bare ``package.module``.

    A bare path returns the imported Python module, whose module-level
    ``schema``/``queries``/``resolvers``... names make it a schema module.
    """
    if ":" in qualified_name:
        module_name, attribute = qualified_name.split(":", 1)
    else:
        module_name, attribute = qualified_name, ""

    module = import_module(module_name)
    obj: Any = module
    for part in filter(None, attribute.split(".")):
        obj = getattr(obj, part)
    return obj


def resolve_entrypoint(name: str) -> Any:
    try:
        eps = importlib_metadata.entry_points()
        group_filtered: Iterable[Any]
        if hasattr(eps, "select"):
            group_filtered = eps.select(group=ENTRYPOINT_GROUP)
        else:
            group_filtered = eps.get(ENTRYPOINT_GROUP, [])  # type: ignore[attr-defined]
    except Exception as e:  # pragma: no cover - edge cases
        raise RuntimeError(f"Failed to read entry points: {e}") from e

    for ep in group_filtered:
        if getattr(ep, "name", None) == name:
            return ep.load()

    raise LookupError(f"Entry point not found: {name}")


def _load_declaration(decl: Any) -> Any:
    if not isinstance(decl, dict):
        raise ValueError(f"Invalid module declaration type: {type(decl).__name__}")

    if "import" in decl:
        target = decl["import"]
        obj = resolve_import(target)
        logger.info("Loaded module via import", import_path=target)
        return obj

    if "entrypoint" in decl:
        ep_name = decl["entrypoint"]
        obj = resolve_entrypoint(ep_name)
        logger.info("Loaded module via entrypoint", entrypoint=ep_name)
        return obj

    raise ValueError("Module declaration must include one of: import, entrypoint")


def load_modules_from_config(config_path: str | None = None) -> list[Any]:
    """Load module declarations according to configuration.

    The returned list is ready to pass to :func:`gqlbundle.bundle`.
    Raises ModuleLoadError on errors when strict mode is enabled (default).
    """

    cfg: LoaderConfig | None
    if config_path:
        cfg = _load_file_config(config_path)
        if cfg is None:
            raise ModuleLoadError(f"Modules config not found: {config_path}")
        logger.info("Loaded modules config from explicit path", path=config_path)
    else:
        cfg = _discover_config()

    if not cfg or not cfg.declarations:
        logger.info("No modules configuration found; nothing to load")
        return []

    modules: list[Any] = []
    for decl in cfg.declarations:
        if isinstance(decl, dict) and decl.get("enabled") is False:
            continue

        try:
            modules.append(_load_declaration(decl))
        except Exception as e:
            msg = f"Failed to load module declaration: {e}"
            if cfg.strict_mode:
                raise ModuleLoadError(msg) from e
            logger.error(msg)
            continue

    logger.info(
        "Modules loading complete",
        requested=len(cfg.declarations),
        loaded=len(modules),
        strict_mode=cfg.strict_mode,
    )
    return modules

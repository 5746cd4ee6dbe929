"""
Post-processing hooks.
"""

from collections.abc import Iterable
from typing import Any

from .logging import get_logger
from .modules import ModuleRecord

logger = get_logger(__name__)


def apply_alters(modules: Iterable[ModuleRecord], result: Any) -> Any:
    """Fold each module's ``alter`` hook over the bundled result, in order.

    A hook receives the current result and returns the next one; it may
    return something of an entirely different shape.
    """
    applied = 0
    for module in modules:
        if module.alter is None:
            continue
        result = module.alter(result)
        applied += 1

    if applied:
        logger.debug("Applied alter hooks", hooks=applied)
    return result

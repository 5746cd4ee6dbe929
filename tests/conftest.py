"""
Shared pytest fixtures and configuration for all tests.
"""

import re
from collections.abc import Callable

import pytest

from gqlbundle.logging import configure_logging


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> None:
    """Route structlog through stdlib logging so pytest captures it."""
    configure_logging(debug=False)


def _simplify(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


@pytest.fixture
def simplify() -> Callable[[str], str]:
    """Collapse whitespace so definition text can be compared literally."""
    return _simplify


@pytest.fixture(autouse=True)
def _clear_gqlbundle_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of option defaults."""
    from gqlbundle.config import Settings, settings

    for name in Settings.model_fields:
        monkeypatch.delenv(f"GQLBUNDLE_{name.upper()}", raising=False)
        monkeypatch.setattr(settings, name, Settings.model_fields[name].default)

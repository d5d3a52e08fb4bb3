"""
Shared fixtures for the test suite.

Centralizes reusable test infrastructure so individual test files
don't need to repeat setup boilerplate.
"""

from collections.abc import Callable

import pytest

from core.forge.shell import SHELL_ASSETS

# ---------------------------------------------------------------------------
# Fake network
# ---------------------------------------------------------------------------


@pytest.fixture()
def shell_fetch() -> Callable[[str], bytes]:
    """Deterministic network fetch serving a body for every shell asset."""

    def _fetch(path: str) -> bytes:
        if path not in SHELL_ASSETS:
            raise FileNotFoundError(path)
        return f"<!-- {path} -->".encode()

    return _fetch

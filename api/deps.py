"""
FastAPI dependency providers.

Provides the offline asset cache as a process-wide singleton so every
request sees the same installed shell, and the fetch that fills it from the
built shell directory (``BLOCKFORGE_SHELL_DIR``, default ``web/`` at the
repository root).
"""

import logging
import os
from pathlib import Path

from infrastructure.asset_cache import AssetCache, AssetInstallError, Fetch, directory_fetch

logger = logging.getLogger(__name__)

DEFAULT_SHELL_DIR = Path(__file__).resolve().parent.parent / "web"

_asset_cache: AssetCache | None = None


def get_asset_cache() -> AssetCache:
    """
    Return the shared ``AssetCache`` singleton.

    The cache is created empty on first call and reused thereafter.
    """
    global _asset_cache  # noqa: PLW0603
    if _asset_cache is None:
        _asset_cache = AssetCache()
    return _asset_cache


def get_shell_fetch() -> Fetch:
    """Return a fetch reading shell assets from ``BLOCKFORGE_SHELL_DIR``."""
    root = Path(os.environ.get("BLOCKFORGE_SHELL_DIR", DEFAULT_SHELL_DIR))
    return directory_fetch(root)


def install_shell(cache: AssetCache, fetch: Fetch) -> bool:
    """
    Populate the offline cache at startup.

    Falls back gracefully if any asset is missing: the API keeps working and
    shell requests are served straight from disk.

    Returns:
        True if every asset was cached.
    """
    try:
        cache.install(fetch)
    except AssetInstallError as exc:
        logger.warning("Offline shell not installed (%s), serving from disk only", exc)
        return False
    return True

"""
In-memory offline asset cache for the BlockForge web shell.

Mirrors the shell's offline contract:
    install  — fetch and store every listed asset (all-or-nothing).
    respond  — serve from cache if present, otherwise fall through to the network.

The network is injected as a ``fetch(path) -> bytes`` callable so the cache
is testable without any HTTP stack. ``directory_fetch`` builds one that reads
the built shell from disk.

Usage::

    from infrastructure.asset_cache import AssetCache

    cache = AssetCache()
    cache.install(fetch)
    body = cache.respond("./index.html", fetch)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from threading import Lock

from core.forge.shell import CACHE_NAME, SHELL_ASSETS
from infrastructure.metrics import record_shell_cache_hit, record_shell_cache_miss

logger = logging.getLogger(__name__)

Fetch = Callable[[str], bytes]


class AssetInstallError(RuntimeError):
    """Raised when an asset could not be fetched during install.

    The cache is left exactly as it was before install() was called.

    Args:
        path: The asset that failed.
        cause: The underlying fetch error.
    """

    def __init__(self, path: str, cause: Exception) -> None:
        """Initialize with the failing asset path and its cause."""
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to cache asset {path!r}: {cause}")


def directory_fetch(root: Path) -> Fetch:
    """
    Build a fetch that reads shell assets from a directory on disk.

    Shell paths ("./index.html", "/shared/styles.css") resolve below root;
    "./" maps to index.html.

    Args:
        root: Directory holding the built web shell.

    Returns:
        fetch(path) -> bytes.

    Raises (from the returned fetch):
        FileNotFoundError: If the asset is missing or resolves outside root.
    """
    base = root.resolve()

    def _fetch(path: str) -> bytes:
        relative = path.removeprefix("./").lstrip("/")
        target = (base / (relative or "index.html")).resolve()
        if not target.is_relative_to(base) or not target.is_file():
            raise FileNotFoundError(path)
        return target.read_bytes()

    return _fetch


class AssetCache:
    """
    Thread-safe, cache-first store for the shell's offline assets.

    Args:
        cache_name: Versioned cache name (default: CACHE_NAME).
        assets: Paths to populate on install (default: SHELL_ASSETS).
    """

    def __init__(
        self,
        cache_name: str = CACHE_NAME,
        assets: Iterable[str] = SHELL_ASSETS,
    ) -> None:
        """Initialize an empty cache for the given asset list."""
        self.cache_name = cache_name
        self.assets: tuple[str, ...] = tuple(assets)
        self._cache: dict[str, bytes] = {}
        self._lock = Lock()

    @property
    def is_installed(self) -> bool:
        """True once every listed asset is cached."""
        with self._lock:
            return all(path in self._cache for path in self.assets)

    def install(self, fetch: Fetch) -> int:
        """
        Fetch and store every listed asset.

        All fetches complete before anything is stored, so a single failure
        leaves the cache untouched.

        Args:
            fetch: Network fetch returning the asset body.

        Returns:
            Number of assets stored.

        Raises:
            AssetInstallError: If any asset fetch raises.
        """
        fetched: dict[str, bytes] = {}
        for path in self.assets:
            try:
                body = fetch(path)
            except Exception as exc:
                logger.error("%s: install failed on %s: %s", self.cache_name, path, exc)
                raise AssetInstallError(path, exc) from exc
            fetched[path] = body

        with self._lock:
            self._cache.update(fetched)

        logger.info("%s: installed %d assets", self.cache_name, len(fetched))
        return len(fetched)

    def get(self, path: str) -> bytes | None:
        """Return the cached body for path, or None on miss."""
        with self._lock:
            return self._cache.get(path)

    def respond(self, path: str, fetch: Fetch) -> bytes:
        """
        Serve path cache-first with network fallback.

        Network responses are returned as-is and not stored.

        Args:
            path: Requested asset path.
            fetch: Network fetch used on a cache miss.

        Returns:
            Asset body.
        """
        body = self.get(path)
        if body is not None:
            logger.debug("%s HIT: %s", self.cache_name, path)
            record_shell_cache_hit()
            return body

        logger.debug("%s MISS: %s", self.cache_name, path)
        record_shell_cache_miss()
        return fetch(path)

    def cached_paths(self) -> list[str]:
        """Return cached paths in install order."""
        with self._lock:
            return list(self._cache)

    def clear(self) -> None:
        """Clear all cached assets."""
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        """Return current number of cached assets."""
        with self._lock:
            return len(self._cache)

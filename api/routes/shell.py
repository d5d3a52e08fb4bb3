"""REST endpoints for the offline web shell: install manifest, asset list and assets."""

from __future__ import annotations

import mimetypes
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from api.deps import get_asset_cache, get_shell_fetch
from core.forge.shell import DEFAULT_MANIFEST
from infrastructure.asset_cache import AssetCache, Fetch

router = APIRouter(tags=["shell"])

Cache = Annotated[AssetCache, Depends(get_asset_cache)]
ShellFetch = Annotated[Fetch, Depends(get_shell_fetch)]


@router.get("/manifest.json")
def manifest() -> dict[str, Any]:
    """Return the installable web-app manifest."""
    return DEFAULT_MANIFEST.to_dict()


# NOTE: /shell/assets is defined BEFORE /shell/{asset_path:path} so the literal
# path is not swallowed by the catch-all.
@router.get("/shell/assets")
def shell_assets(cache: Cache) -> dict[str, Any]:
    """Return the offline asset list and how much of it is cached."""
    return {
        "cache_name": cache.cache_name,
        "assets": list(cache.assets),
        "installed": cache.is_installed,
        "cached": cache.size(),
    }


@router.get("/shell/{asset_path:path}")
def shell_asset(asset_path: str, cache: Cache, fetch: ShellFetch) -> Response:
    """Serve a shell asset cache-first, falling back to disk on a miss."""
    path = f"./{asset_path}"
    try:
        body = cache.respond(path, fetch)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"Asset not found: {path}") from exc

    media_type, _ = mimetypes.guess_type(asset_path or "index.html")
    return Response(content=body, media_type=media_type or "application/octet-stream")

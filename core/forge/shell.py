"""Offline web shell definition — cache name, asset list and install manifest.

Pure data. The stateful cache that consumes this list lives in
infrastructure/asset_cache.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

CACHE_NAME = "blockforge-suite-v1"

SHELL_ASSETS: tuple[str, ...] = (
    "./",
    "./index.html",
    "./shared/styles.css",
    "./shared/blockforge-core.js",
    "./manifest.json",
    "./public/icon.png",
    "./studios/image/index.html",
    "./studios/text/index.html",
)


@dataclass(frozen=True)
class ManifestIcon:
    src: str
    sizes: str
    type: str = "image/png"


@dataclass(frozen=True)
class WebManifest:
    """Installable web-app manifest for the BlockForge shell.

    Attributes:
        name: Full application name shown on install.
        short_name: Name used under the home-screen icon.
        start_url: Entry point, relative to the manifest.
        display: Display mode ("standalone" hides browser chrome).
        background_color: Splash-screen background.
        theme_color: Toolbar colour.
        icons: Application icons.
    """

    name: str
    short_name: str
    start_url: str = "./"
    display: str = "standalone"
    background_color: str = "#ffffff"
    theme_color: str = "#d01012"
    icons: tuple[ManifestIcon, ...] = ()

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must not be empty")
        if not self.short_name.strip():
            raise ValueError("short_name must not be empty")

    def to_dict(self) -> dict[str, Any]:
        """Render with the key names browsers expect in manifest.json."""
        return {
            "name": self.name,
            "short_name": self.short_name,
            "start_url": self.start_url,
            "display": self.display,
            "background_color": self.background_color,
            "theme_color": self.theme_color,
            "icons": [{"src": i.src, "sizes": i.sizes, "type": i.type} for i in self.icons],
        }


DEFAULT_MANIFEST = WebManifest(
    name="BlockForge Suite",
    short_name="BlockForge",
    icons=(ManifestIcon(src="./public/icon.png", sizes="512x512"),),
)

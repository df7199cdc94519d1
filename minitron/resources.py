"""Loading and caching of textures and fonts from the data directory."""

from __future__ import annotations

import weakref
from functools import lru_cache
from pathlib import Path

import pygame

from .graphics import Font, Texture2D, load_texture


class ResourceManager:
    """Loads resources relative to a data directory and caches them by file name."""

    def __init__(self) -> None:
        self._data_path = Path()
        self._textures: dict[str, Texture2D] = {}
        self._fonts: dict[tuple[str, int], Font] = {}

    @property
    def data_path(self) -> Path:
        return self._data_path

    def initialize(self, data_path: str | Path) -> None:
        """Set the data directory and start font support."""
        self._data_path = Path(data_path)
        try:
            pygame.font.init()
        except pygame.error as exc:
            raise RuntimeError(f"Failed to load support for fonts: {exc}") from exc

    def load_texture(self, file: str) -> Texture2D:
        """Return the texture for ``file``, loading it on first use."""
        full_path = self._data_path / file
        key = full_path.name
        texture = self._textures.get(key)
        if texture is None:
            texture = load_texture(full_path)
            self._textures[key] = texture
        return texture

    def load_font(self, file: str, size: int) -> Font:
        """Return ``file`` at point ``size`` (0 to 255), loading it on first use."""
        if not 0 <= size <= 255:
            raise ValueError(f"font size out of range: {size}")
        full_path = self._data_path / file
        key = (full_path.name, size)
        font = self._fonts.get(key)
        if font is None:
            font = Font(full_path, size)
            self._fonts[key] = font
        return font

    @property
    def cached_textures(self) -> frozenset[str]:
        return frozenset(self._textures)

    @property
    def cached_fonts(self) -> frozenset[tuple[str, int]]:
        return frozenset(self._fonts)

    def unload_unused(self) -> None:
        """Drop every cached resource that nothing outside the cache still uses."""
        texture_refs = {key: weakref.ref(value) for key, value in self._textures.items()}
        self._textures.clear()
        self._textures = {
            key: texture for key, ref in texture_refs.items() if (texture := ref()) is not None
        }
        font_refs = {key: weakref.ref(value) for key, value in self._fonts.items()}
        self._fonts.clear()
        self._fonts = {key: font for key, ref in font_refs.items() if (font := ref()) is not None}


@lru_cache(maxsize=None)
def get_resource_manager() -> ResourceManager:
    """Return the shared resource manager."""
    return ResourceManager()
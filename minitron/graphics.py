"""Textures, fonts and the renderer that draws them onto a pygame surface."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Iterable, Sequence, Union

import pygame

from .geometry import Vec2
from .scene import get_scene_manager

Color = Sequence[int]
RectLike = Union[pygame.Rect, Sequence[int]]


class Texture2D:
    """An image that can be drawn by the renderer."""

    def __init__(self, surface: pygame.Surface) -> None:
        if surface is None:
            raise ValueError("a texture needs a surface")
        self._surface = surface

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    @property
    def size(self) -> tuple[int, int]:
        """Width and height in pixels."""
        width, height = self._surface.get_size()
        return width, height


def load_texture(full_path: str | Path) -> Texture2D:
    """Load the image at ``full_path``; raise RuntimeError if that fails."""
    try:
        surface = pygame.image.load(str(full_path))
    except (pygame.error, OSError) as exc:
        raise RuntimeError(f"Failed to load texture: {exc}") from exc
    return Texture2D(surface)


class Font:
    """A TrueType font at a fixed point size.

    A ``full_path`` of None selects pygame's built-in default font.
    """

    def __init__(self, full_path: str | Path | None, size: int) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            self._font = pygame.font.Font(None if full_path is None else str(full_path), size)
        except (pygame.error, OSError) as exc:
            raise RuntimeError(f"Failed to load font: {exc}") from exc
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    def render_text(self, text: str, color: Color) -> Texture2D:
        """Render ``text`` in ``color`` into a new texture."""
        try:
            surface = self._font.render(text, True, color)
        except pygame.error as exc:
            raise RuntimeError(f"Render text failed: {exc}") from exc
        return Texture2D(surface)


class Renderer:
    """Draws textures and shapes onto an attached target surface."""

    def __init__(self) -> None:
        self._surface: pygame.Surface | None = None
        self.background_color: Color = (0, 0, 0, 255)

    @property
    def surface(self) -> pygame.Surface | None:
        return self._surface

    def attach(self, surface: pygame.Surface) -> None:
        """Draw onto ``surface`` from now on."""
        self._surface = surface

    def detach(self) -> None:
        """Stop drawing onto the current surface."""
        self._surface = None

    def _target(self) -> pygame.Surface:
        if self._surface is None:
            raise RuntimeError("renderer is not attached to a surface")
        return self._surface

    def render(self) -> None:
        """Clear to the background colour, draw every scene and present."""
        target = self._target()
        target.fill(self.background_color)
        get_scene_manager().render()
        if pygame.display.get_init() and pygame.display.get_surface() is target:
            pygame.display.flip()

    def render_texture(
        self,
        texture: Texture2D,
        x: float,
        y: float,
        width: float | None = None,
        height: float | None = None,
        src_rect: RectLike | None = None,
        angle: float = 0.0,
    ) -> None:
        """Draw ``texture`` (or its ``src_rect`` part) at ``x``, ``y``.

        Missing ``width`` or ``height`` take the image's own size; ``angle``
        rotates clockwise, in degrees, around the destination's centre.
        """
        target = self._target()
        image = texture.surface
        if src_rect is not None:
            image = image.subsurface(pygame.Rect(src_rect))
        image_width, image_height = image.get_size()
        w = image_width if width is None else max(int(width), 0)
        h = image_height if height is None else max(int(height), 0)
        if (w, h) != (image_width, image_height):
            image = pygame.transform.scale(image, (w, h))
        dest = pygame.Rect(int(x), int(y), w, h)
        if angle:
            image = pygame.transform.rotate(image, -angle)
            target.blit(image, image.get_rect(center=dest.center))
        else:
            target.blit(image, dest.topleft)

    def draw_string(
        self,
        text: str,
        font: Font,
        position: Vec2 | Sequence[float],
        color: Color,
        size: float = 12.0,
    ) -> None:
        """Draw ``text`` squeezed into a ``size`` by ``size`` box at ``position``."""
        x, y = position
        texture = font.render_text(text, color)
        self.render_texture(texture, x, y, size, size, None, 0.0)

    def draw_square(self, x: int, y: int, size: int, color: Color) -> None:
        """Draw the outline of a square."""
        pygame.draw.rect(self._target(), color, pygame.Rect(x, y, size, size), 1)

    def draw_polygon(self, points: Iterable[Vec2 | Sequence[float]], color: Color) -> None:
        """Draw a closed outline through ``points``."""
        target = self._target()
        pixels = [(int(px), int(py)) for px, py in points]
        if not pixels:
            raise ValueError("a polygon needs at least one point")
        if len(pixels) == 1:
            pygame.draw.line(target, color, pixels[0], pixels[0])
        else:
            pygame.draw.lines(target, color, True, pixels)


@lru_cache(maxsize=None)
def get_renderer() -> Renderer:
    """Return the shared renderer."""
    return Renderer()
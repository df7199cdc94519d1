"""Components that draw textures and text for their game object."""

from __future__ import annotations

from .gameobject import Component
from .graphics import Color, Texture2D, get_renderer
from .resources import get_resource_manager


class RenderComponent(Component):
    """Draws a texture at its owner's world position."""

    def __init__(self) -> None:
        super().__init__()
        self._texture: Texture2D | None = None

    def render(self) -> None:
        """Draw the texture, if there is one."""
        owner = self.owner
        if self._texture is None or owner is None:
            return
        position = owner.transform.world_position
        get_renderer().render_texture(self._texture, position.x, position.y)

    def set_texture(self, texture: Texture2D | str) -> None:
        """Use ``texture``; a string is loaded through the resource manager."""
        if isinstance(texture, str):
            texture = get_resource_manager().load_texture(texture)
        self._texture = texture

    @property
    def texture(self) -> Texture2D | None:
        return self._texture


class TextRenderComponent(RenderComponent):
    """Renders a line of text into its texture whenever the text changes."""

    def __init__(self, text: str, font_path: str, size: int) -> None:
        super().__init__()
        self._text = text
        self._font = get_resource_manager().load_font(font_path, size)
        self._color: Color = (255, 255, 255, 255)
        self._should_update = True

    @property
    def text(self) -> str:
        return self._text

    @property
    def font(self):
        return self._font

    def update(self, delta_time: float) -> None:
        """Rebuild the texture if the text changed since the last update."""
        if self._should_update:
            self.set_texture(self._font.render_text(self._text, self._color))
            self._should_update = False

    def set_text(self, text: str) -> None:
        self._text = text
        self._should_update = True

    def set_font(self, font_path: str, size: int) -> None:
        """Switch fonts; the texture is rebuilt on the next text change."""
        self._font = get_resource_manager().load_font(font_path, size)
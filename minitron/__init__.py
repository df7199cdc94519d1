"""A small component-based 2D game engine core: objects, events, scenes, physics and rendering."""

__version__ = "0.1.0"
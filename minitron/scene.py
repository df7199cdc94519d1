"""Scenes of game objects and the manager that drives them."""

from __future__ import annotations

from functools import lru_cache

from .gameobject import GameObject
from .services import get_physics_system


class Scene:
    """A named collection of game objects that are updated together."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._objects: list[GameObject] = []

    @property
    def name(self) -> str:
        return self._name

    def add(self, obj: GameObject) -> None:
        """Take ownership of ``obj``."""
        self._objects.append(obj)

    def remove(self, obj: GameObject) -> None:
        """Drop ``obj`` from the scene and release its components."""
        removed = [o for o in self._objects if o is obj]
        self._objects = [o for o in self._objects if o is not obj]
        for o in removed:
            o.dispose()

    def remove_all(self) -> None:
        """Drop every object and release its components."""
        objects, self._objects = self._objects, []
        for obj in objects:
            obj.dispose()

    @property
    def objects(self) -> tuple[GameObject, ...]:
        return tuple(self._objects)

    def update(self, delta_time: float) -> None:
        for obj in tuple(self._objects):
            obj.update(delta_time)

    def fixed_update(self, fixed_time: float) -> None:
        for obj in tuple(self._objects):
            obj.fixed_update(fixed_time)

    def late_update(self, delta_time: float) -> None:
        """Run late updates, then drop objects flagged as destroyed."""
        for obj in tuple(self._objects):
            obj.late_update(delta_time)
        destroyed = [o for o in self._objects if o.is_destroyed]
        if destroyed:
            self._objects = [o for o in self._objects if not o.is_destroyed]
            for obj in destroyed:
                obj.dispose()

    def render(self) -> None:
        for obj in tuple(self._objects):
            obj.render()


class SceneManager:
    """Owns all scenes and forwards the game loop's phases to them."""

    def __init__(self) -> None:
        self._scenes: list[Scene] = []

    @property
    def scenes(self) -> tuple[Scene, ...]:
        return tuple(self._scenes)

    def create_scene(self, name: str) -> Scene:
        """Create, keep and return a new scene called ``name``."""
        scene = Scene(name)
        self._scenes.append(scene)
        return scene

    def update(self, delta_time: float) -> None:
        """Update every scene, then step the physics system."""
        for scene in tuple(self._scenes):
            scene.update(delta_time)
        get_physics_system().physics_update(delta_time)

    def fixed_update(self, fixed_time: float) -> None:
        for scene in tuple(self._scenes):
            scene.fixed_update(fixed_time)

    def late_update(self, delta_time: float) -> None:
        for scene in tuple(self._scenes):
            scene.late_update(delta_time)

    def render(self) -> None:
        """Render every scene, then the physics debug overlay."""
        for scene in tuple(self._scenes):
            scene.render()
        get_physics_system().debug_draw()


@lru_cache(maxsize=None)
def get_scene_manager() -> SceneManager:
    """Return the shared scene manager."""
    return SceneManager()
# minitron

The core of a small component-based 2D game engine, running on pygame.
It provides game objects with parent/child transforms, attachable
components, an observer-based event system, scenes, a grid-partitioned
physics system with box collision, texture and font loading, a renderer
that draws onto a pygame surface, and a threaded sound system. On top of
that it has a few arena-game building blocks: a grid layout component and
a bouncing bullet component.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from minitron.gameobject import Component, GameObject
from minitron.geometry import Vec2
from minitron.physics import PhysicsComponent
from minitron.scene import get_scene_manager
from minitron.services import register_physics_system
from minitron.spatial import SimpleSpatialPhysicsSystem


class Mover(Component):
    def update(self, delta_time):
        super().update(delta_time)
        position = self.owner.position
        self.owner.set_position(position.x + 10 * delta_time, position.y)


# Register the physics system before adding physics components:
# a component registers itself when it is attached to an object.
register_physics_system(SimpleSpatialPhysicsSystem(650, 650))

scene = get_scene_manager().create_scene("Demo")
obj = GameObject()
obj.add_component(Mover)
obj.add_component(PhysicsComponent, Vec2(40, 40))
obj.set_position(100, 100)
scene.add(obj)

manager = get_scene_manager()
for _ in range(60):
    manager.fixed_update(1 / 60)
    manager.update(1 / 60)      # also steps the physics system
    manager.late_update(1 / 60)  # drops destroyed objects and deleted components
```

## Modules

- `minitron.events`: `Event`, `Observer`, `EventDispatcher`, the context
  dataclasses (`ValueChangedContext`, `TransformChangedContext`,
  `ChildHierarchyChangedContext`) and `sdbm_hash`, which turns a name into
  a 32-bit event type id. The engine's own event types are
  `EVENT_VALUE_CHANGED`, `EVENT_GAMEOBJECT_TRANSFORMCHANGED`,
  `EVENT_GAMEOBJECT_CHILDADDED` and `EVENT_GAMEOBJECT_CHILDREMOVED`.
- `minitron.geometry`: immutable `Vec2`, `Vec3` and `Rect`, and
  `check_aabb_collision`, a broad-phase overlap test.
- `minitron.gameobject`: `GameObject`, `Component` and `Transform`.
  `GameObject.set_position` sends a transform-changed event;
  `set_parent` sends child-added/removed events and raises `ValueError`
  if the new parent would create a cycle. Components flagged with
  `delete_component` (or `remove_component`) are removed at the end of
  the owner's `late_update`.
- `minitron.scene`: `Scene` and `SceneManager`, with the shared manager
  from `get_scene_manager()`.
- `minitron.services`: the `SoundSystem` and `PhysicsSystem` interfaces,
  their silent `NullSoundSystem` and `NullPhysicsSystem`, and the
  locator functions `get_sound_system`, `register_sound_system`,
  `get_physics_system` and `register_physics_system`.
- `minitron.physics`: `PhysicsComponent` (a box that registers with the
  active physics system and is pushed out of static obstacles) and
  `HitInfo`.
- `minitron.spatial`: `SimpleSpatialPhysicsSystem`, which partitions the
  space into a `CellSpace` of `Cell`s (20 by 20 by default) and calls
  `on_collide` on each agent for every overlapping neighbour within range.
- `minitron.sound`: `MixerSoundSystem`, which plays clips through the
  pygame mixer on a background thread. `register_audio` returns a clip
  id; `play` takes a volume from 0.0 to 1.0 and raises `ValueError` for
  an unknown id. Use it as a context manager or call `close()`.
- `minitron.graphics`: `Texture2D`, `load_texture`, `Font` (a path of
  `None` uses pygame's default font) and `Renderer`, shared through
  `get_renderer()`. Attach it to a pygame surface with `attach` before
  drawing; `render` clears to the background colour and draws every
  scene.
- `minitron.resources`: `ResourceManager`, shared through
  `get_resource_manager()`, which loads textures and fonts relative to a
  data directory and caches them by file name.
- `minitron.rendering`: `RenderComponent`, which draws a texture at its
  owner's position, and `TextRenderComponent`, which renders a line of
  text.
- `minitron.registry`: `Registry`, a string-keyed map where the first
  registration wins, and the shared `game_sound_registry`.
- `minitron.grid`: `GridComponent`, which places each child added to its
  owner in the first free cell of a grid.
- `minitron.bullet`: `BounceyPhysicsComponent` with its states
  `FlyingState` (bounces off static obstacles, at most five times) and
  `ExplodingState` (destroys the bullet after a countdown).

## What the package does not do

There is no command to run and no playable game. The package does not
open a window or run a game loop for you, does not read keyboard or
gamepad input, and has no player tanks, turrets or level loading. You
drive the scene manager yourself and attach the renderer to a surface
you create.
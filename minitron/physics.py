"""The physics component and the hit information passed on collision."""

from __future__ import annotations

from dataclasses import dataclass

from .gameobject import Component, GameObject
from .geometry import Rect, Vec2
from .services import get_physics_system


@dataclass(frozen=True)
class HitInfo:
    """Where and how deeply two bounding boxes overlap."""

    hit_position: Vec2
    normal: Vec2
    penetration_depth: float


class PhysicsComponent(Component):
    """An axis-aligned box that takes part in collision detection."""

    def __init__(self, size: Vec2) -> None:
        super().__init__()
        width, height = size
        self._bounds = Vec2(width, height)
        self.is_static = False
        self.velocity = Vec2()
        self.has_collided = False

    def on_owner_initialized(self) -> None:
        get_physics_system().register_component(self)

    def on_removed(self) -> None:
        get_physics_system().unregister_component(self)

    def on_collide(
        self,
        dt: float,
        other: PhysicsComponent,
        other_object: GameObject,
        hit_info: HitInfo,
    ) -> None:
        """Push the owner out of a static obstacle along the hit normal."""
        if other.is_static:
            owner = self._require_owner()
            corrected = owner.position + hit_info.normal * hit_info.penetration_depth
            owner.set_position(corrected.x, corrected.y)

    @property
    def bounding_box(self) -> Rect:
        position = self._require_owner().transform.world_position
        return Rect(position.x, position.y, self._bounds.x, self._bounds.y)

    @property
    def center(self) -> Vec2:
        return self.bounding_box.center()

    @property
    def width(self) -> float:
        return self._bounds.x

    @property
    def height(self) -> float:
        return self._bounds.y

    def _require_owner(self) -> GameObject:
        owner = self.owner
        if owner is None:
            raise RuntimeError("physics component has no owner")
        return owner
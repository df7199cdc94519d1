"""The bouncing bullet component and the states it moves through."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .gameobject import GameObject
from .geometry import Vec2
from .physics import HitInfo, PhysicsComponent

MAX_BOUNCES = 5
EXPLOSION_COUNTDOWN = 5.0


class BulletState(ABC):
    """Behaviour of a bullet in one phase of its life."""

    @abstractmethod
    def update(self, bullet: BounceyPhysicsComponent, dt: float) -> None:
        """Advance ``bullet`` by ``dt`` seconds."""

    @abstractmethod
    def on_collision(
        self,
        bullet: BounceyPhysicsComponent,
        dt: float,
        other: PhysicsComponent,
        other_object: GameObject,
        hit_info: HitInfo,
    ) -> None:
        """React to ``bullet`` overlapping ``other``."""


class FlyingState(BulletState):
    """Moves along the velocity and bounces off static obstacles."""

    def __init__(self) -> None:
        self.has_bounced = False
        self.bounce_count = 0

    def update(self, bullet: BounceyPhysicsComponent, dt: float) -> None:
        owner = bullet.require_owner()
        position = owner.position + bullet.velocity * dt
        owner.set_position(position.x, position.y)
        self.has_bounced = False

    def on_collision(
        self,
        bullet: BounceyPhysicsComponent,
        dt: float,
        other: PhysicsComponent,
        other_object: GameObject,
        hit_info: HitInfo,
    ) -> None:
        """Bounce at most once per frame, and explode after too many bounces."""
        if not other.is_static or self.has_bounced:
            return
        if other_object is bullet.tank_fired_from:
            return
        if self.bounce_count < MAX_BOUNCES:
            PhysicsComponent.on_collide(bullet, dt, other, other_object, hit_info)
            bullet.velocity = bullet.velocity.reflect(hit_info.normal)
            self.has_bounced = True
            self.bounce_count += 1
        else:
            bullet.set_state(ExplodingState())


class ExplodingState(BulletState):
    """Waits out a countdown and then destroys the bullet."""

    def __init__(self, countdown: float = EXPLOSION_COUNTDOWN) -> None:
        self.countdown = countdown

    def update(self, bullet: BounceyPhysicsComponent, dt: float) -> None:
        self.countdown -= dt
        if self.countdown <= 0:
            bullet.require_owner().destroy()

    def on_collision(
        self,
        bullet: BounceyPhysicsComponent,
        dt: float,
        other: PhysicsComponent,
        other_object: GameObject,
        hit_info: HitInfo,
    ) -> None:
        pass


class BounceyPhysicsComponent(PhysicsComponent):
    """A physics box that hands movement and collisions to its current state."""

    def __init__(self, size: Vec2, velocity: Vec2, tank_fired_from: GameObject | None) -> None:
        super().__init__(size)
        x, y = velocity
        self.velocity = Vec2(x, y)
        self._tank_fired_from = tank_fired_from
        self._state: BulletState = FlyingState()

    @property
    def tank_fired_from(self) -> GameObject | None:
        return self._tank_fired_from

    @property
    def state(self) -> BulletState:
        return self._state

    def on_collide(
        self,
        dt: float,
        other: PhysicsComponent,
        other_object: GameObject,
        hit_info: HitInfo,
    ) -> None:
        self._state.on_collision(self, dt, other, other_object, hit_info)

    def update(self, delta_time: float) -> None:
        self._state.update(self, delta_time)

    def set_state(self, state: BulletState) -> None:
        self._state = state

    def require_owner(self) -> GameObject:
        return self._require_owner()
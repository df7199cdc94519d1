"""Service interfaces for sound and physics, their null versions and the locator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .physics import PhysicsComponent


class SoundSystem(ABC):
    """Plays registered audio clips by id."""

    @abstractmethod
    def play(self, sound_id: int, volume: float) -> None:
        """Play the clip registered under ``sound_id`` at ``volume``."""

    @abstractmethod
    def register_audio(self, file_path: str) -> int:
        """Register the audio file at ``file_path`` and return its id."""


class NullSoundSystem(SoundSystem):
    """A sound system that stays silent."""

    def play(self, sound_id: int, volume: float) -> None:
        pass

    def register_audio(self, file_path: str) -> int:
        return 0


class PhysicsSystem(ABC):
    """Tracks physics components and resolves their collisions."""

    @abstractmethod
    def physics_update(self, delta_time: float) -> None:
        """Advance the simulation by ``delta_time`` seconds."""

    @abstractmethod
    def register_component(self, component: PhysicsComponent) -> None:
        """Start tracking ``component``."""

    @abstractmethod
    def unregister_component(self, component: PhysicsComponent) -> None:
        """Stop tracking ``component``."""

    def debug_draw(self) -> None:
        """Draw debugging shapes; does nothing unless overridden."""


class NullPhysicsSystem(PhysicsSystem):
    """A physics system that ignores everything."""

    def physics_update(self, delta_time: float) -> None:
        pass

    def register_component(self, component: PhysicsComponent) -> None:
        pass

    def unregister_component(self, component: PhysicsComponent) -> None:
        pass


_sound_system: SoundSystem = NullSoundSystem()
_physics_system: PhysicsSystem = NullPhysicsSystem()


def get_sound_system() -> SoundSystem:
    """Return the active sound system."""
    return _sound_system


def register_sound_system(system: SoundSystem) -> None:
    """Make ``system`` the active sound system."""
    global _sound_system
    _sound_system = system


def get_physics_system() -> PhysicsSystem:
    """Return the active physics system."""
    return _physics_system


def register_physics_system(system: PhysicsSystem) -> None:
    """Make ``system`` the active physics system."""
    global _physics_system
    _physics_system = system
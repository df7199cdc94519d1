"""Event types, observers and the dispatcher that connects them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

_MASK = 0xFFFFFFFF

T = TypeVar("T")


def sdbm_hash(text: str) -> int:
    """Return the 32-bit SDBM hash of ``text``, used as an event type id."""
    value = 0
    for byte in text.encode("utf-8"):
        if byte == 0:
            break
        char = byte - 256 if byte > 127 else byte
        value = (char + (value << 6) + (value << 16) - value) & _MASK
    return value


EVENT_VALUE_CHANGED = sdbm_hash("EVENT_VALUE_CHANGED")
EVENT_GAMEOBJECT_TRANSFORMCHANGED = sdbm_hash("EVENT_GAMEOBJECT_TRANSFORMCHANGED")
EVENT_GAMEOBJECT_CHILDADDED = sdbm_hash("EVENT_GAMEOBJECT_CHILDADDED")
EVENT_GAMEOBJECT_CHILDREMOVED = sdbm_hash("EVENT_GAMEOBJECT_CHILDREMOVED")


@dataclass(frozen=True)
class Event:
    """An event type id together with an arbitrary context payload."""

    event_type: int
    context: Any = None


@dataclass(frozen=True)
class ValueChangedContext(Generic[T]):
    """Context of a value-changed event."""

    new_value: T


@dataclass(frozen=True)
class TransformChangedContext:
    """Context sent when a game object's position changes (world positions)."""

    game_object: Any
    old_position: Any
    new_position: Any


@dataclass(frozen=True)
class ChildHierarchyChangedContext:
    """Context sent when a child is added to or removed from a parent."""

    parent: Any
    child: Any


class Observer(ABC):
    """Something that wants to hear about events from a dispatcher."""

    @abstractmethod
    def notify(self, event: Event, subject: EventDispatcher) -> None:
        """Handle ``event`` sent by ``subject``."""


class EventDispatcher:
    """Keeps a list of observers and forwards events to each of them."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def add_observer(self, observer: Observer) -> None:
        """Register ``observer``; registering it twice has no effect."""
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        """Unregister ``observer`` if it is registered."""
        self._observers = [o for o in self._observers if o is not observer]

    def notify_observers(self, event: Event) -> None:
        """Send ``event`` to every registered observer, in registration order."""
        for observer in tuple(self._observers):
            observer.notify(event, self)

    def __len__(self) -> int:
        return len(self._observers)
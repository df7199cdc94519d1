"""A string-keyed registry and the game's shared sound registry."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class Registry(Generic[T]):
    """Maps string ids to items; the first registration of an id wins."""

    def __init__(self) -> None:
        self._items: dict[str, T] = {}

    def get(self, key: str) -> T:
        """Return the item registered under ``key``; raise KeyError if none."""
        return self._items[key]

    def register(self, key: str, item: T) -> None:
        """Register ``item`` under ``key`` unless the key is already taken."""
        self._items.setdefault(key, item)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)


game_sound_registry: Registry[int] = Registry()
"""A component that lays its owner's children out on a grid."""

from __future__ import annotations

from .events import (
    EVENT_GAMEOBJECT_CHILDADDED,
    EVENT_GAMEOBJECT_CHILDREMOVED,
    Event,
    EventDispatcher,
    Observer,
)
from .gameobject import Component, GameObject
from .geometry import Vec2


class GridComponent(Component, Observer):
    """Places each child added to its owner in the first free cell.

    Children are expected to leave the owner in an orderly way, through
    ``set_parent``, so the grid can free their cells.
    """

    def __init__(self, width: float, height: float, rows: int, columns: int) -> None:
        if rows <= 0 or columns <= 0:
            raise ValueError("a grid needs at least one row and one column")
        super().__init__()
        self.width = width
        self.height = height
        self.rows = rows
        self.columns = columns
        self.cell_width = width / columns
        self.cell_height = height / rows
        self._grid: list[list[GameObject | None]] = [[None] * columns for _ in range(rows)]

    def on_owner_initialized(self) -> None:
        owner = self.owner
        if owner is not None:
            owner.event_dispatcher.add_observer(self)

    def notify(self, event: Event, subject: EventDispatcher) -> None:
        if event.event_type == EVENT_GAMEOBJECT_CHILDADDED:
            self._add(event.context.child)
        elif event.event_type == EVENT_GAMEOBJECT_CHILDREMOVED:
            self._remove(event.context.child)

    def insert_and_parent(self, obj: GameObject, row: int, column: int) -> None:
        """Parent ``obj`` to the owner without events and put it in a cell."""
        owner = self.owner
        if owner is None:
            raise RuntimeError("grid component has no owner")
        obj.set_parent(owner, False, False)
        self._insert(obj, row, column)

    def position_at(self, row: int, column: int) -> Vec2:
        """Return the top-left corner of the cell at ``row``, ``column``."""
        return Vec2(column * self.cell_width, row * self.cell_height)

    def get(self, row: int, column: int) -> GameObject | None:
        """Return the object in the cell, or None if it is empty."""
        if not self._in_range(row, column):
            raise IndexError(f"no cell at row {row}, column {column}")
        return self._grid[row][column]

    def _in_range(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def _add(self, obj: GameObject) -> None:
        for row, cells in enumerate(self._grid):
            for column, occupant in enumerate(cells):
                if occupant is None:
                    self._insert(obj, row, column)
                    return

    def _remove(self, obj: GameObject) -> None:
        for cells in self._grid:
            for column, occupant in enumerate(cells):
                if occupant is obj:
                    cells[column] = None
                    return

    def _insert(self, obj: GameObject, row: int, column: int) -> None:
        if not self._in_range(row, column):
            return
        if self._grid[row][column] is None:
            self._grid[row][column] = obj
        position = self.position_at(row, column)
        obj.set_position(position.x, position.y)
"""A grid-partitioned physics system that resolves box overlaps."""

from __future__ import annotations

from .events import EVENT_GAMEOBJECT_TRANSFORMCHANGED, Event, EventDispatcher, Observer
from .geometry import Rect, Vec2, check_aabb_collision
from .graphics import get_renderer
from .physics import HitInfo, PhysicsComponent
from .resources import get_resource_manager
from .services import PhysicsSystem

_CELL_OUTLINE_COLOR = (0, 255, 255, 255)
_CELL_TEXT_COLOR = (255, 255, 255, 255)
_DEBUG_BOX_COLOR = (0, 255, 0, 255)
_DEBUG_FONT = "Lingua.otf"
_DEBUG_FONT_SIZE = 12


def _agent_position(agent: PhysicsComponent) -> Vec2:
    owner = agent.owner
    if owner is None:
        raise RuntimeError("physics component has no owner")
    return owner.transform.world_position.xy()


class Cell:
    """One rectangle of the partition and the agents whose corner lies in it."""

    def __init__(self, left: float, bottom: float, width: float, height: float) -> None:
        self.bounding_box = Rect(left, bottom, width, height)
        self.agents: list[PhysicsComponent] = []

    def rect_points(self) -> list[Vec2]:
        """Return the four corners, going round the rectangle."""
        box = self.bounding_box
        return [
            Vec2(box.x, box.y),
            Vec2(box.x, box.y + box.height),
            Vec2(box.x + box.width, box.y + box.height),
            Vec2(box.x + box.width, box.y),
        ]


class CellSpace:
    """A rows-by-columns grid of cells covering a rectangular space."""

    def __init__(self, width: float, height: float, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError("a cell space needs at least one row and one column")
        self._width = width
        self._height = height
        self._rows = rows
        self._cols = cols
        self._cell_width = width / cols
        self._cell_height = height / rows
        self._cells = [
            Cell(col * self._cell_width, row * self._cell_height, self._cell_width, self._cell_height)
            for row in range(rows)
            for col in range(cols)
        ]
        self._neighbors: list[PhysicsComponent] = []
        self._neighborhood_radius = 0.0

    @property
    def cells(self) -> tuple[Cell, ...]:
        return tuple(self._cells)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def cell_width(self) -> float:
        return self._cell_width

    @property
    def cell_height(self) -> float:
        return self._cell_height

    @property
    def neighborhood_radius(self) -> float:
        return self._neighborhood_radius

    def add_agent(self, agent: PhysicsComponent) -> None:
        """Put ``agent`` into the cell holding its owner's world position."""
        self._cells[self.position_to_index(_agent_position(agent))].agents.append(agent)

    def remove_agent(self, agent: PhysicsComponent) -> None:
        """Take ``agent`` out of the cell holding its owner's world position."""
        cell = self._cells[self.position_to_index(_agent_position(agent))]
        cell.agents = [a for a in cell.agents if a is not agent]

    def agent_position_changed(self, agent: PhysicsComponent, old_position) -> None:
        """Move ``agent`` to its new cell if it left the one of ``old_position``."""
        old_index = self.position_to_index(old_position)
        new_index = self.position_to_index(_agent_position(agent))
        if old_index == new_index:
            return
        old_cell = self._cells[old_index]
        old_cell.agents = [a for a in old_cell.agents if a is not agent]
        self._cells[new_index].agents.append(agent)

    def register_neighbors(self, agent: PhysicsComponent, radius: float) -> None:
        """Collect every agent whose centre lies within ``radius`` of ``agent``'s."""
        center = agent.center
        self._neighbors = []
        self._neighborhood_radius = radius

        min_col = max(0, int((center.x - radius) / self._cell_width))
        max_col = min(self._cols - 1, int((center.x + radius) / self._cell_width))
        min_row = max(0, int((center.y - radius) / self._cell_height))
        max_row = min(self._rows - 1, int((center.y + radius) / self._cell_height))

        for row in range(min_row, max_row + 1):
            for col in range(min_col, max_col + 1):
                cell = self._cells[row * self._cols + col]
                self._neighbors.extend(
                    other for other in cell.agents if other.center.distance_to(center) < radius
                )

    @property
    def neighbors(self) -> tuple[PhysicsComponent, ...]:
        return tuple(self._neighbors)

    def empty_cells(self) -> None:
        """Remove every agent from every cell."""
        for cell in self._cells:
            cell.agents.clear()

    def render_cells(self) -> None:
        """Draw each cell's outline and the number of agents in it."""
        renderer = get_renderer()
        font = get_resource_manager().load_font(_DEBUG_FONT, _DEBUG_FONT_SIZE)
        for cell in self._cells:
            renderer.draw_polygon(cell.rect_points(), _CELL_OUTLINE_COLOR)
            box = cell.bounding_box
            renderer.draw_string(
                str(len(cell.agents)),
                font,
                Vec2(box.x, box.y + box.height),
                _CELL_TEXT_COLOR,
                float(_DEBUG_FONT_SIZE),
            )

    def position_to_index(self, position) -> int:
        """Return the index of the cell holding ``position``, clamped to the space."""
        y = min(max(position.y, 0.0), self._height - 0.01)
        x = min(max(position.x, 0.0), self._width - 0.01)
        row = int(y / self._cell_height)
        col = int(x / self._cell_width)
        return row * self._cols + col


def _resolve_overlap(a: Rect, b: Rect) -> HitInfo | None:
    center_a = a.center()
    center_b = b.center()
    delta = center_a - center_b
    combined = Vec2((a.width + b.width) * 0.5, (a.height + b.height) * 0.5)
    overlap = combined - abs(delta)
    if overlap.x <= 0 or overlap.y <= 0:
        return None
    if overlap.x < overlap.y:
        normal = Vec2(-1.0, 0.0) if delta.x < 0 else Vec2(1.0, 0.0)
        depth = overlap.x
    else:
        normal = Vec2(0.0, -1.0) if delta.y < 0 else Vec2(0.0, 1.0)
        depth = overlap.y
    return HitInfo(center_a, normal, depth)


class SimpleSpatialPhysicsSystem(PhysicsSystem, Observer):
    """Finds overlapping boxes among nearby agents and reports the hits."""

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        rows: int = 20,
        cols: int = 20,
        neighborhood_range: float = 150.0,
    ) -> None:
        self._cell_space = CellSpace(screen_width, screen_height, rows, cols)
        self._agents: list[PhysicsComponent] = []
        self._neighborhood_range = neighborhood_range

    @property
    def cell_space(self) -> CellSpace:
        return self._cell_space

    @property
    def agents(self) -> tuple[PhysicsComponent, ...]:
        return tuple(self._agents)

    def physics_update(self, delta_time: float) -> None:
        """Let every agent react to each neighbour its box overlaps."""
        for agent in tuple(self._agents):
            self._cell_space.register_neighbors(agent, self._neighborhood_range)
            for neighbor in self._cell_space.neighbors:
                if neighbor is agent:
                    continue
                rect_a = agent.bounding_box
                rect_b = neighbor.bounding_box
                if not check_aabb_collision(rect_a, rect_b):
                    continue
                hit_info = _resolve_overlap(rect_a, rect_b)
                if hit_info is not None:
                    agent.on_collide(delta_time, neighbor, neighbor.owner, hit_info)

        for agent in self._agents:
            agent.has_collided = False

    def register_component(self, component: PhysicsComponent | None) -> None:
        """Track ``component`` and follow its owner's moves."""
        if component is None:
            return
        owner = component.owner
        if owner is None:
            raise ValueError("only components attached to a game object can be registered")
        owner.event_dispatcher.add_observer(self)
        self._agents.append(component)
        self._cell_space.add_agent(component)

    def unregister_component(self, component: PhysicsComponent | None) -> None:
        """Stop tracking ``component``."""
        if component is None:
            return
        if component in self._agents:
            self._agents.remove(component)
        if component.owner is not None:
            self._cell_space.remove_agent(component)

    def debug_draw(self) -> None:
        """Outline every agent's bounding box."""
        renderer = get_renderer()
        for agent in self._agents:
            box = agent.bounding_box
            renderer.draw_square(int(box.x), int(box.y), int(agent.width), _DEBUG_BOX_COLOR)

    def notify(self, event: Event, subject: EventDispatcher) -> None:
        """Move an agent between cells when its owner's position changes."""
        if event.event_type != EVENT_GAMEOBJECT_TRANSFORMCHANGED:
            return
        context = event.context
        component = context.game_object.get_component(PhysicsComponent)
        if component is None or component not in self._agents:
            return
        self._cell_space.agent_position_changed(component, context.old_position)
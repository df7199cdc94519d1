import pygame
import pytest

from minitron.events import Event, sdbm_hash
from minitron.gameobject import GameObject
from minitron.geometry import Vec2
from minitron.graphics import get_renderer
from minitron.physics import PhysicsComponent
from minitron.services import get_physics_system, register_physics_system
from minitron.spatial import Cell, CellSpace, SimpleSpatialPhysicsSystem


@pytest.fixture
def system():
    previous = get_physics_system()
    physics = SimpleSpatialPhysicsSystem(650.0, 650.0)
    register_physics_system(physics)
    yield physics
    register_physics_system(previous)


def make_body(x, y, size=20.0, static=False):
    obj = GameObject()
    component = obj.add_component(PhysicsComponent, Vec2(size, size))
    component.is_static = static
    obj.set_position(x, y)
    return obj, component


def cells_holding(space, component):
    return [cell for cell in space.cells if component in cell.agents]


def test_cell_rect_points_go_round_the_rectangle():
    cell = Cell(1.0, 2.0, 10.0, 20.0)
    assert cell.rect_points() == [
        Vec2(1.0, 2.0),
        Vec2(1.0, 22.0),
        Vec2(11.0, 22.0),
        Vec2(11.0, 2.0),
    ]


def test_cell_space_rejects_empty_grid():
    with pytest.raises(ValueError):
        CellSpace(100.0, 100.0, 0, 10)


def test_cell_space_builds_rows_times_cols_cells():
    space = CellSpace(100.0, 50.0, 5, 4)
    assert len(space.cells) == 5 * 4
    assert space.cell_width == 100.0 / 4
    assert space.cell_height == 50.0 / 5


def test_position_maps_to_containing_cell():
    space = CellSpace(100.0, 100.0, 10, 10)
    for position in (Vec2(15.0, 25.0), Vec2(99.5, 0.5), Vec2(50.0, 50.0), Vec2(0.0, 99.0)):
        box = space.cells[space.position_to_index(position)].bounding_box
        assert box.x <= position.x < box.x + box.width
        assert box.y <= position.y < box.y + box.height


def test_position_is_clamped_to_space():
    space = CellSpace(100.0, 100.0, 10, 10)
    assert space.position_to_index(Vec2(-50.0, -50.0)) == 0
    assert space.position_to_index(Vec2(1000.0, 1000.0)) == len(space.cells) - 1


def test_registering_tracks_component_in_its_cell(system):
    obj, component = make_body(100.0, 100.0)
    assert component in system.agents
    index = system.cell_space.position_to_index(obj.transform.world_position)
    assert cells_holding(system.cell_space, component) == [system.cell_space.cells[index]]


def test_register_none_is_ignored(system):
    system.register_component(None)
    assert system.agents == ()


def test_moving_owner_moves_agent_between_cells(system):
    obj, component = make_body(10.0, 10.0)
    old_cell = system.cell_space.cells[system.cell_space.position_to_index(Vec2(10.0, 10.0))]
    obj.set_position(400.0, 400.0)
    new_cell = system.cell_space.cells[system.cell_space.position_to_index(Vec2(400.0, 400.0))]
    assert component not in old_cell.agents
    assert component in new_cell.agents
    assert len(cells_holding(system.cell_space, component)) == 1


def test_neighbors_are_within_radius(system):
    _, near_a = make_body(100.0, 100.0)
    _, near_b = make_body(120.0, 100.0)
    _, far = make_body(500.0, 500.0)
    system.cell_space.register_neighbors(near_a, 150.0)
    neighbors = set(system.cell_space.neighbors)
    assert near_a in neighbors
    assert near_b in neighbors
    assert far not in neighbors
    assert system.cell_space.neighborhood_radius == 150.0


def test_empty_cells_removes_all_agents(system):
    make_body(100.0, 100.0)
    make_body(300.0, 300.0)
    system.cell_space.empty_cells()
    assert all(not cell.agents for cell in system.cell_space.cells)


def test_body_is_pushed_out_of_static_wall(system):
    wall_obj, wall = make_body(100.0, 100.0, static=True)
    box_obj, box = make_body(90.0, 100.0)
    system.physics_update(0.016)
    assert box_obj.position.x + box.width <= wall_obj.position.x
    assert box_obj.position.y == 100.0
    assert wall_obj.position == Vec2(100.0, 100.0)


def test_moving_bodies_do_not_push_each_other(system):
    a_obj, _ = make_body(90.0, 100.0)
    b_obj, _ = make_body(100.0, 100.0)
    system.physics_update(0.016)
    assert a_obj.position == Vec2(90.0, 100.0)
    assert b_obj.position == Vec2(100.0, 100.0)


def test_collision_flag_is_reset_after_update(system):
    _, component = make_body(100.0, 100.0)
    component.has_collided = True
    system.physics_update(0.016)
    assert component.has_collided is False


def test_unregister_removes_agent_everywhere(system):
    _, component = make_body(100.0, 100.0)
    system.unregister_component(component)
    assert component not in system.agents
    assert cells_holding(system.cell_space, component) == []


def test_disposing_owner_unregisters(system):
    obj, component = make_body(200.0, 200.0)
    obj.dispose()
    assert component not in system.agents
    assert cells_holding(system.cell_space, component) == []


def test_notify_ignores_other_events(system):
    obj, component = make_body(100.0, 100.0)
    before = cells_holding(system.cell_space, component)
    system.notify(Event(sdbm_hash("SOMETHING_ELSE"), None), obj.event_dispatcher)
    assert cells_holding(system.cell_space, component) == before


def test_debug_draw_outlines_boxes(system):
    make_body(100.0, 100.0)
    renderer = get_renderer()
    surface = pygame.Surface((650, 650))
    renderer.attach(surface)
    try:
        system.debug_draw()
        assert tuple(surface.get_at((100, 100)))[:3] == (0, 255, 0)
        assert tuple(surface.get_at((110, 110)))[:3] == (0, 0, 0)
    finally:
        renderer.detach()
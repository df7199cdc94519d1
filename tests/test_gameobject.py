import pytest

from minitron.events import (
    EVENT_GAMEOBJECT_CHILDADDED,
    EVENT_GAMEOBJECT_CHILDREMOVED,
    EVENT_GAMEOBJECT_TRANSFORMCHANGED,
    Observer,
)
from minitron.gameobject import Component, GameObject
from minitron.geometry import Vec2, Vec3


class Recorder(Component):
    def __init__(self, label="r"):
        super().__init__()
        self.label = label
        self.calls = []
        self.owner_at_init = None

    def update(self, delta_time):
        self.calls.append(("update", delta_time))

    def fixed_update(self, fixed_time):
        self.calls.append(("fixed", fixed_time))

    def late_update(self, delta_time):
        self.calls.append(("late", delta_time))

    def on_owner_initialized(self):
        self.owner_at_init = self.owner

    def on_removed(self):
        self.calls.append(("removed", None))


class SpecialRecorder(Recorder):
    pass


class Drawable(Component):
    def __init__(self):
        super().__init__()
        self.renders = 0

    def render(self):
        self.renders += 1


class Collector(Observer):
    def __init__(self):
        self.events = []

    def notify(self, event, subject):
        self.events.append(event)


def test_add_component_sets_owner_and_forwards_arguments():
    obj = GameObject()
    component = obj.add_component(Recorder, label="tank")
    assert component.owner is obj
    assert component.owner_at_init is obj
    assert component.label == "tank"


def test_get_component_matches_subclasses_and_returns_none_when_absent():
    obj = GameObject()
    special = obj.add_component(SpecialRecorder)
    assert obj.get_component(Recorder) is special
    assert obj.has_component(Recorder)
    assert obj.get_component(Drawable) is None
    assert not obj.has_component(Drawable)


def test_update_calls_are_forwarded():
    obj = GameObject()
    component = obj.add_component(Recorder)
    obj.update(0.5)
    obj.fixed_update(0.25)
    obj.late_update(0.5)
    assert component.calls == [("update", 0.5), ("fixed", 0.25), ("late", 0.5)]


def test_remove_component_takes_effect_after_late_update():
    obj = GameObject()
    component = obj.add_component(Recorder)
    assert obj.remove_component(Recorder) is True
    assert component.is_flagged_for_delete
    assert obj.has_component(Recorder)
    obj.late_update(0.1)
    assert not obj.has_component(Recorder)
    assert component.calls[-1] == ("removed", None)


def test_remove_missing_component_returns_false():
    assert GameObject().remove_component(Recorder) is False


def test_render_only_reaches_renderable_components():
    obj = GameObject()
    drawable = obj.add_component(Drawable)
    obj.add_component(Recorder)
    obj.render()
    obj.render()
    assert drawable.renders == 2


def test_destroy_sets_flag():
    obj = GameObject()
    assert not obj.is_destroyed
    obj.destroy()
    assert obj.is_destroyed


def test_dispose_releases_components():
    obj = GameObject()
    component = obj.add_component(Recorder)
    obj.dispose()
    assert component.calls == [("removed", None)]
    assert obj.get_component(Recorder) is None


def test_set_position_updates_position_and_notifies():
    obj = GameObject()
    observer = Collector()
    obj.event_dispatcher.add_observer(observer)
    obj.set_position(3, 4)
    assert obj.position == Vec2(3, 4)
    assert len(observer.events) == 1
    event = observer.events[0]
    assert event.event_type == EVENT_GAMEOBJECT_TRANSFORMCHANGED
    assert event.context.game_object is obj
    assert event.context.old_position == Vec3(0, 0, 0)
    assert event.context.new_position == Vec3(3, 4, 0)


def test_child_world_position_follows_parent():
    parent = GameObject()
    child = GameObject()
    child.set_parent(parent, False)
    child.set_position(1, 2)
    parent.set_position(10, 20)
    assert child.position == parent.position + Vec2(1, 2)
    assert child.transform.local_position == Vec3(1, 2, 0)


def test_set_parent_keeping_world_position():
    parent = GameObject()
    parent.set_position(10, 20)
    child = GameObject()
    child.set_position(15, 30)
    before = child.position
    child.set_parent(parent, True)
    assert child.position == before
    assert child.transform.local_position.xy() == before - parent.position


def test_unparenting_keeps_world_position():
    parent = GameObject()
    parent.set_position(5, 5)
    child = GameObject()
    child.set_parent(parent, False)
    child.set_position(2, 3)
    world = child.position
    child.set_parent(None, False)
    assert child.parent is None
    assert child.position == world
    assert child not in parent.children


def test_set_parent_sends_child_added_event():
    parent = GameObject()
    observer = Collector()
    parent.event_dispatcher.add_observer(observer)
    child = GameObject()
    child.set_parent(parent, False)
    assert parent.children == (child,)
    assert child.parent is parent
    assert [e.event_type for e in observer.events] == [EVENT_GAMEOBJECT_CHILDADDED]
    assert observer.events[0].context.parent is parent
    assert observer.events[0].context.child is child


def test_set_parent_without_events():
    parent = GameObject()
    observer = Collector()
    parent.event_dispatcher.add_observer(observer)
    GameObject().set_parent(parent, False, False)
    assert observer.events == []
    assert len(parent.children) == 1


def test_reparenting_notifies_old_parent_of_removal():
    old = GameObject()
    new = GameObject()
    observer = Collector()
    old.event_dispatcher.add_observer(observer)
    child = GameObject()
    child.set_parent(old, False)
    child.set_parent(new, False)
    assert old.children == ()
    assert new.children == (child,)
    assert observer.events[-1].event_type == EVENT_GAMEOBJECT_CHILDREMOVED


def test_is_parent_of_is_recursive():
    root = GameObject()
    middle = GameObject()
    leaf = GameObject()
    middle.set_parent(root, False)
    leaf.set_parent(middle, False)
    assert root.is_parent_of(leaf)
    assert root.is_parent_of(middle)
    assert not leaf.is_parent_of(root)


def test_parenting_cycle_is_rejected():
    root = GameObject()
    child = GameObject()
    child.set_parent(root, False)
    with pytest.raises(ValueError):
        root.set_parent(child, False)
    with pytest.raises(ValueError):
        root.set_parent(root, False)
    assert root.parent is None


def test_transform_rotation_and_scale():
    obj = GameObject()
    obj.transform.set_rotation(45.0)
    obj.transform.set_scale(2, 3, 4)
    assert obj.transform.rotation == 45.0
    assert obj.transform.scale == Vec3(2, 3, 4)


def test_local_position_setter_marks_world_dirty():
    obj = GameObject()
    obj.transform.local_position = Vec3(7, 8, 9)
    assert obj.transform.world_position == Vec3(7, 8, 9)
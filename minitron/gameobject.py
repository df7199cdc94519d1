"""Game objects, their components and their transforms."""

from __future__ import annotations

from typing import Any, TypeVar

from .events import (
    EVENT_GAMEOBJECT_CHILDADDED,
    EVENT_GAMEOBJECT_CHILDREMOVED,
    EVENT_GAMEOBJECT_TRANSFORMCHANGED,
    ChildHierarchyChangedContext,
    Event,
    EventDispatcher,
    TransformChangedContext,
)
from .geometry import Vec2, Vec3

C = TypeVar("C", bound="Component")


class Component:
    """Behaviour attached to a game object; subclasses override the hooks."""

    def __init__(self) -> None:
        self._owner: GameObject | None = None
        self._delete_flag = False
        self._lifetime = 0.0
        self._fixed_lifetime = 0.0
        self._late_updates = 0

    def delete_component(self) -> None:
        """Flag this component for removal at the end of the owner's late update."""
        self._delete_flag = True

    @property
    def is_flagged_for_delete(self) -> bool:
        return self._delete_flag

    @property
    def owner(self) -> GameObject | None:
        return self._owner

    @property
    def lifetime(self) -> float:
        """Total time passed to the base ``update``."""
        return self._lifetime

    @property
    def fixed_lifetime(self) -> float:
        """Total time passed to the base ``fixed_update``."""
        return self._fixed_lifetime

    @property
    def late_updates(self) -> int:
        """Number of calls to the base ``late_update``."""
        return self._late_updates

    def _set_owner(self, owner: GameObject | None) -> None:
        self._owner = owner
        if owner is not None:
            self.on_owner_initialized()

    def update(self, delta_time: float) -> None:
        self._lifetime += delta_time

    def fixed_update(self, fixed_time: float) -> None:
        self._fixed_lifetime += fixed_time

    def late_update(self, delta_time: float) -> None:
        self._late_updates += 1

    def on_owner_initialized(self) -> None:
        """Called once the component has been given an owner."""

    def on_removed(self) -> None:
        """Called when the component is taken off its owner for good."""
        self._delete_flag = True


class Transform:
    """Local position of a game object and its cached world position."""

    def __init__(self, owner: GameObject) -> None:
        self._owner = owner
        self._dirty = False
        self._local = Vec3()
        self._world = Vec3()
        self._rotation = 0.0
        self._scale = Vec3()

    @property
    def world_position(self) -> Vec3:
        if self._dirty:
            self._update_world_position()
        return self._world

    @property
    def local_position(self) -> Vec3:
        return self._local

    @local_position.setter
    def local_position(self, value: Vec3) -> None:
        self._local = value
        self._dirty = True

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def scale(self) -> Vec3:
        return self._scale

    def set_position(self, x: float, y: float, z: float) -> None:
        self.local_position = Vec3(x, y, z)

    def set_rotation(self, angle: float) -> None:
        self._rotation = angle

    def set_scale(self, x: float, y: float, z: float) -> None:
        self._scale = Vec3(x, y, z)

    def mark_dirty(self) -> None:
        self._dirty = True

    def _update_world_position(self) -> None:
        parent = self._owner.parent
        if parent is None:
            self._world = self._local
        else:
            self._world = parent.transform.world_position + self._local
        self._dirty = False


class GameObject:
    """A node in the scene hierarchy that owns components."""

    def __init__(self) -> None:
        self._parent: GameObject | None = None
        self._children: list[GameObject] = []
        self._destroyed = False
        self._transform = Transform(self)
        self._components: list[Component] = []
        self._dispatcher = EventDispatcher()

    def update(self, delta_time: float) -> None:
        for component in tuple(self._components):
            component.update(delta_time)

    def fixed_update(self, fixed_time: float) -> None:
        for component in tuple(self._components):
            component.fixed_update(fixed_time)

    def late_update(self, delta_time: float) -> None:
        for component in tuple(self._components):
            component.late_update(delta_time)
        removed = [c for c in self._components if c.is_flagged_for_delete]
        if removed:
            self._components = [c for c in self._components if not c.is_flagged_for_delete]
            for component in removed:
                component.on_removed()

    def render(self) -> None:
        """Render every component that knows how to render itself."""
        for component in tuple(self._components):
            render = getattr(component, "render", None)
            if callable(render):
                render()

    def destroy(self) -> None:
        """Flag this object for removal from its scene."""
        self._destroyed = True

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def dispose(self) -> None:
        """Release all components; called when the object leaves its scene."""
        components, self._components = self._components, []
        for component in components:
            component.on_removed()

    def set_position(self, x: float, y: float) -> None:
        """Set the local position and announce the change."""
        old_position = self._transform.world_position
        self._transform.set_position(x, y, 0.0)
        for child in self._children:
            child.transform.mark_dirty()
        context = TransformChangedContext(self, old_position, self._transform.world_position)
        self._dispatcher.notify_observers(Event(EVENT_GAMEOBJECT_TRANSFORMCHANGED, context))

    @property
    def position(self) -> Vec2:
        return self._transform.world_position.xy()

    @property
    def transform(self) -> Transform:
        return self._transform

    @property
    def parent(self) -> GameObject | None:
        return self._parent

    @property
    def children(self) -> tuple[GameObject, ...]:
        return tuple(self._children)

    @property
    def event_dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    def get_component(self, component_type: type[C]) -> C | None:
        """Return the first component of ``component_type``, or None."""
        return next((c for c in self._components if isinstance(c, component_type)), None)

    def has_component(self, component_type: type[Component]) -> bool:
        return self.get_component(component_type) is not None

    def add_component(self, component_type: type[C], *args: Any, **kwargs: Any) -> C:
        """Create a component of ``component_type``, attach it and return it."""
        component = component_type(*args, **kwargs)
        component._set_owner(self)
        self._components.append(component)
        return component

    def remove_component(self, component_type: type[Component]) -> bool:
        """Flag the first component of ``component_type`` for removal."""
        component = self.get_component(component_type)
        if component is None:
            return False
        component.delete_component()
        return True

    def is_parent_of(self, obj: GameObject | None) -> bool:
        """Return True if ``obj`` is anywhere below this object."""
        return any(child is obj or child.is_parent_of(obj) for child in self._children)

    def set_parent(
        self,
        parent: GameObject | None,
        keep_world_position: bool,
        send_event: bool = True,
    ) -> None:
        """Move this object under ``parent`` (None makes it a scene root)."""
        if parent is self or self.is_parent_of(parent):
            raise ValueError("setting this parent would create a cycle")
        if parent is None:
            self._transform.local_position = self._transform.world_position
        elif keep_world_position:
            self._transform.local_position = (
                self._transform.world_position - parent.transform.world_position
            )
        if self._parent is not None:
            self._parent._remove_child(self, send_event)
        self._parent = parent
        if parent is not None:
            parent._add_child(self, send_event)
        self._transform.mark_dirty()

    def _remove_child(self, obj: GameObject, send_event: bool) -> None:
        if send_event:
            context = ChildHierarchyChangedContext(self, obj)
            self._dispatcher.notify_observers(Event(EVENT_GAMEOBJECT_CHILDREMOVED, context))
        self._children = [child for child in self._children if child is not obj]

    def _add_child(self, obj: GameObject, send_event: bool) -> None:
        self._children.append(obj)
        if send_event:
            context = ChildHierarchyChangedContext(self, obj)
            self._dispatcher.notify_observers(Event(EVENT_GAMEOBJECT_CHILDADDED, context))
import pytest

from minitron.services import (
    NullPhysicsSystem,
    NullSoundSystem,
    PhysicsSystem,
    SoundSystem,
    get_physics_system,
    get_sound_system,
    register_physics_system,
    register_sound_system,
)


class RecordingSound(SoundSystem):
    def __init__(self):
        self.played = []
        self.paths = []

    def play(self, sound_id, volume):
        self.played.append((sound_id, volume))

    def register_audio(self, file_path):
        self.paths.append(file_path)
        return len(self.paths) - 1


class RecordingPhysics(PhysicsSystem):
    def __init__(self):
        self.log = []

    def physics_update(self, delta_time):
        self.log.append(("update", delta_time))

    def register_component(self, component):
        self.log.append(("register", component))

    def unregister_component(self, component):
        self.log.append(("unregister", component))


@pytest.fixture
def restore_services():
    sound = get_sound_system()
    physics = get_physics_system()
    yield
    register_sound_system(sound)
    register_physics_system(physics)


def test_null_sound_system_registers_as_zero():
    system = NullSoundSystem()
    assert system.register_audio("a.wav") == 0
    assert system.register_audio("b.wav") == 0


def test_register_sound_system_round_trip(restore_services):
    system = RecordingSound()
    register_sound_system(system)
    assert get_sound_system() is system
    get_sound_system().play(3, 0.5)
    assert system.played == [(3, 0.5)]


def test_register_physics_system_round_trip(restore_services):
    system = RecordingPhysics()
    register_physics_system(system)
    assert get_physics_system() is system
    get_physics_system().physics_update(0.25)
    assert system.log == [("update", 0.25)]


def test_abstract_sound_system_cannot_be_created():
    with pytest.raises(TypeError):
        SoundSystem()


def test_abstract_physics_system_cannot_be_created():
    with pytest.raises(TypeError):
        PhysicsSystem()


def test_null_physics_system_replaced_and_restored(restore_services):
    original = get_physics_system()
    replacement = NullPhysicsSystem()
    register_physics_system(replacement)
    assert get_physics_system() is replacement
    register_physics_system(original)
    assert get_physics_system() is original
"""A sound system that plays clips through the pygame mixer on a worker thread."""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable

import pygame

from .services import SoundSystem

logger = logging.getLogger(__name__)

Loader = Callable[[str], Any]


@dataclass(frozen=True)
class _SoundRequest:
    sound_id: int
    volume: float


class _AudioClip:
    """A clip that is loaded the first time it is played."""

    def __init__(self, path: str, loader: Loader) -> None:
        self._path = path
        self._loader = loader
        self._sound: Any = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._sound is not None

    def load(self) -> None:
        with self._lock:
            if self._sound is not None:
                return
            try:
                self._sound = self._loader(self._path)
            except (pygame.error, OSError) as exc:
                logger.error("Failed to load sound file %s: %s", self._path, exc)

    def play(self, volume: float) -> None:
        if not self.is_loaded:
            self.load()
        with self._lock:
            if self._sound is not None:
                self._sound.set_volume(min(max(volume, 0.0), 1.0))
                self._sound.play()


def _load_mixer_sound(path: str) -> Any:
    return pygame.mixer.Sound(path)


class MixerSoundSystem(SoundSystem):
    """Queues play requests and plays them on a background thread."""

    def __init__(
        self,
        *,
        loader: Loader | None = None,
        frequency: int = 44100,
        channels: int = 2,
        buffer: int = 2048,
    ) -> None:
        self._owns_mixer = False
        if loader is None:
            loader = _load_mixer_sound
            try:
                pygame.mixer.init(frequency, -16, channels, buffer)
                self._owns_mixer = True
            except pygame.error as exc:
                logger.error("Mixer could not initialize: %s", exc)
        self._loader = loader
        self._clips: list[_AudioClip] = []
        self._requests: queue.Queue[_SoundRequest | None] = queue.Queue()
        self._closed = False
        self._worker = threading.Thread(target=self._consume, daemon=True)
        self._worker.start()

    def register_audio(self, file_path: str) -> int:
        """Register ``file_path`` and return its id; loading is deferred."""
        self._clips.append(_AudioClip(file_path, self._loader))
        return len(self._clips) - 1

    def play(self, sound_id: int, volume: float) -> None:
        """Queue ``sound_id`` to be played at ``volume`` (0.0 to 1.0)."""
        if self._closed:
            raise RuntimeError("sound system is closed")
        if not 0 <= sound_id < len(self._clips):
            raise ValueError(f"invalid sound id: {sound_id}")
        self._requests.put(_SoundRequest(sound_id, volume))

    def close(self) -> None:
        """Play what is queued, stop the worker and release the mixer."""
        if self._closed:
            return
        self._closed = True
        self._requests.put(None)
        self._worker.join()
        if self._owns_mixer:
            pygame.mixer.quit()
            self._owns_mixer = False

    def __enter__(self) -> MixerSoundSystem:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _consume(self) -> None:
        while True:
            request = self._requests.get()
            if request is None:
                break
            try:
                self._clips[request.sound_id].play(request.volume)
            except Exception:
                logger.exception("Playing sound %d failed", request.sound_id)
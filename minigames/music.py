from __future__ import annotations

import logging
import os
from typing import Dict, Mapping, Optional

import pygame

logger = logging.getLogger(__name__)


class MusicController:
    """Background music and one-shot sound cues. Every call is fire-and-forget."""

    def __init__(self, *, volume: float = 0.3, sfx_volume: float = 0.5) -> None:
        self.current_path: Optional[str] = None
        self.volume = max(0.0, min(1.0, float(volume)))
        self.sfx_volume = max(0.0, min(1.0, float(sfx_volume)))
        self.playing = False
        self.sfx: Dict[str, pygame.mixer.Sound] = {}
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as exc:
            logger.info("audio unavailable: %s", exc)

    def set_volume(self, value: float) -> None:
        self.volume = max(0.0, min(1.0, float(value)))
        try:
            if pygame.mixer.get_init():
                pygame.mixer.music.set_volume(self.volume)
        except pygame.error:
            pass

    def fade_to(self, path: Optional[str], *, ms: int = 600, loop: int = -1) -> None:
        if not path or not os.path.exists(path):
            return
        try:
            if pygame.mixer.get_init():
                pygame.mixer.music.fadeout(max(0, int(ms)))
                pygame.mixer.music.load(path)
                pygame.mixer.music.set_volume(self.volume)
                pygame.mixer.music.play(loop, fade_ms=max(0, int(ms)))
                self.current_path = path
                self.playing = True
        except pygame.error as exc:
            logger.warning("could not play %s: %s", path, exc)

    def toggle(self, path: Optional[str]) -> bool:
        """Start or stop the background track. Returns the new playing flag."""
        if self.playing:
            try:
                if pygame.mixer.get_init():
                    pygame.mixer.music.fadeout(300)
            except pygame.error:
                pass
            self.playing = False
        else:
            self.fade_to(path, ms=300)
        return self.playing

    def load_sfx(self, paths: Mapping[str, str]) -> None:
        if not pygame.mixer.get_init():
            return
        for name, path in paths.items():
            if not path or not os.path.exists(path):
                continue
            try:
                sound = pygame.mixer.Sound(path)
                sound.set_volume(self.sfx_volume)
                self.sfx[name] = sound
            except pygame.error as exc:
                logger.warning("could not load sound %s: %s", path, exc)

    def play_sfx(self, name: str) -> None:
        sound = self.sfx.get(name)
        if sound is not None:
            sound.play()


__all__ = ["MusicController"]

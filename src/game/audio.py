# src/game/audio.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

from .config import ASSETS_DIR, JUMP_SOUND, HIT_SOUND, SOUND_VOLUME

logger = logging.getLogger(__name__)


class SoundBank:
    """Jump / hit effects. Missing files or no audio device -> silent."""

    def __init__(self, assets_dir: Path = ASSETS_DIR, volume: float = SOUND_VOLUME):
        self.sounds: Dict[str, Optional[pygame.mixer.Sound]] = {"jump": None, "hit": None}
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            logger.warning("audio disabled: %s", e)
            return

        for name, filename in (("jump", JUMP_SOUND), ("hit", HIT_SOUND)):
            path = Path(assets_dir) / filename
            if not path.exists():
                logger.info("sound %s not found, skipping", path)
                continue
            try:
                snd = pygame.mixer.Sound(str(path))
                snd.set_volume(volume)
                self.sounds[name] = snd
            except pygame.error as e:
                logger.warning("could not load %s: %s", path, e)

    def _play(self, name: str):
        snd = self.sounds.get(name)
        if snd is None:
            return
        try:
            snd.play()
        except pygame.error as e:
            logger.debug("playback of %s failed: %s", name, e)

    def play_jump(self):
        self._play("jump")

    def play_hit(self):
        self._play("hit")

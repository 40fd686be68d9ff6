from __future__ import annotations

import logging
import os
from typing import Dict, List, Mapping, Optional, Sequence

import pygame


logger = logging.getLogger(__name__)

DEFAULT_SOUNDS: Dict[str, str] = {
    "lock": "click6.wav",
    "single": "clear-single.ogg",
    "double": "clear-double.ogg",
    "triple": "clear-triple.ogg",
    "tetris": "clear-tetris.ogg",
    "gameover": "gameover.mp3",
    "left": "click1.wav",
    "rotate_up": "click2.wav",
    "right": "click3.wav",
    "rotate_down": "click4.wav",
    "shift": "click5.wav",
}

DEFAULT_VOLUMES: Dict[str, float] = {
    "left": 0.75,
    "right": 0.75,
    "rotate_up": 0.75,
    "rotate_down": 0.75,
    "shift": 0.75,
}

DEFAULT_PLAYLIST: Sequence[str] = ("bg-music-01.mp3", "bg-music-02.mp3", "bg-music-03.mp3")
MUSIC_VOLUME = 0.5

# Posted by pygame.mixer.music when a track finishes
MUSIC_END_EVENT = pygame.USEREVENT + 1


class SoundBoard:
    """Plays named game events and a looping background playlist through pygame.mixer.

    Anything that cannot be loaded (no audio device, missing or undecodable
    file) is skipped with a warning and the matching event stays silent.
    The playlist advances when the host forwards `MUSIC_END_EVENT` to
    `music_ended`, until `stop_all` is called.
    """

    def __init__(
        self,
        sound_dir: Optional[str] = None,
        sounds: Optional[Mapping[str, str]] = None,
        volumes: Optional[Mapping[str, float]] = None,
        playlist: Optional[Sequence[str]] = None,
    ) -> None:
        self.sound_dir = sound_dir
        self.volumes: Dict[str, float] = dict(DEFAULT_VOLUMES if volumes is None else volumes)
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.playlist: List[str] = []
        self.playlist_index = 0
        self.music_on = False
        self.enabled = False
        if sound_dir is None:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("Audio disabled, mixer unavailable: %s", exc)
            return
        self.enabled = True
        for name, filename in (DEFAULT_SOUNDS if sounds is None else sounds).items():
            self._load(name, os.path.join(sound_dir, filename))
        for filename in DEFAULT_PLAYLIST if playlist is None else playlist:
            path = os.path.join(sound_dir, filename)
            if os.path.isfile(path):
                self.playlist.append(path)
            else:
                logger.warning("Background track not found at %s", path)

    def _load(self, name: str, path: str) -> None:
        if not os.path.isfile(path):
            logger.warning("Sound %s not found at %s", name, path)
            return
        try:
            self.sounds[name] = pygame.mixer.Sound(path)
        except pygame.error as exc:
            logger.warning("Could not decode sound %s (%s): %s", name, path, exc)
            return
        logger.info("Loaded sound: %s (%s)", path, name)

    def play(self, name: str, volume: Optional[float] = None) -> None:
        sound = self.sounds.get(name)
        if sound is None:
            return
        sound.set_volume(volume if volume is not None else self.volumes.get(name, 1.0))
        sound.play()

    # Background music

    def start_music(self) -> bool:
        if not self.enabled or not self.playlist:
            return False
        self.music_on = True
        pygame.mixer.music.set_endevent(MUSIC_END_EVENT)
        return self._play_next_track()

    def music_ended(self) -> None:
        if self.music_on:
            logger.info("Background music ended")
            self._play_next_track()

    def _play_next_track(self) -> bool:
        path = self.playlist[self.playlist_index]
        self.playlist_index = (self.playlist_index + 1) % len(self.playlist)
        try:
            pygame.mixer.music.load(path)
        except pygame.error as exc:
            logger.warning("Could not play background track %s: %s", path, exc)
            return False
        pygame.mixer.music.set_volume(MUSIC_VOLUME)
        pygame.mixer.music.play()
        logger.info("Playing background music: %s", path)
        return True

    def stop_all(self) -> None:
        self.music_on = False
        if self.enabled and pygame.mixer.get_init():
            pygame.mixer.music.stop()
            pygame.mixer.stop()

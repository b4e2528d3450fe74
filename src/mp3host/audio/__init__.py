"""Audio helpers for mp3host."""

from .convert import wav_to_mp3
from .player import AudioPlayer, save_audio

__all__ = ["AudioPlayer", "save_audio", "wav_to_mp3"]

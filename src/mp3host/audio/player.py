"""Audio preview playback and saving using pygame."""

# ruff: noqa: E402
import os

# Suppress pygame's welcome message BEFORE any pygame import
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

import warnings

# Suppress pygame's pkg_resources deprecation warning spam
warnings.filterwarnings("ignore", category=UserWarning, module="pygame.pkgdata")

import io
from pathlib import Path

import pygame


def save_audio(audio_data: bytes, filepath: str | Path) -> Path:
    """Save audio bytes to a file.

    Args:
        audio_data: Audio data to save.
        filepath: Path where the audio file should be saved.

    Returns:
        The path that was written.

    Raises:
        ValueError: If no audio data provided.
        OSError: If file cannot be written.
    """
    if not audio_data:
        raise ValueError("No audio data provided")

    filepath = Path(filepath)

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_bytes(audio_data)
    except OSError as e:
        raise OSError(f"Failed to save audio to {filepath}: {e}") from e

    return filepath


class AudioPlayer:
    """Plays generated speech through the system speakers."""

    def __init__(self) -> None:
        """Initialize the audio player with pygame mixer.

        Raises:
            RuntimeError: If pygame mixer fails to initialize.
        """
        try:
            pygame.mixer.init()
        except pygame.error as e:
            raise RuntimeError(f"Failed to initialize pygame audio mixer: {e}") from e

    def play_bytes(self, audio_data: bytes) -> None:
        """Play audio from bytes through system speakers (blocking).

        Args:
            audio_data: Audio data in MP3 or WAV format.

        Raises:
            ValueError: If no audio data provided.
            RuntimeError: If audio playback fails.
        """
        if not audio_data:
            raise ValueError("No audio data provided")

        try:
            pygame.mixer.music.load(io.BytesIO(audio_data))
            pygame.mixer.music.play()

            while pygame.mixer.music.get_busy():
                pygame.time.Clock().tick(10)

        except pygame.error as e:
            raise RuntimeError(f"Failed to play audio: {e}") from e

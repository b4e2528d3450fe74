"""Unit tests for audio saving, playback validation and conversion."""

import io
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

import soundfile as sf

from mp3host.audio.convert import wav_to_mp3
from mp3host.audio.player import AudioPlayer, save_audio
from mp3host.errors import ValidationError


class TestSaveAudio:
    """Test save_audio."""

    def test_writes_bytes_and_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "out.wav"

        written = save_audio(b"RIFF", str(target))

        assert written == target
        assert target.read_bytes() == b"RIFF"

    def test_empty_data_raises_value_error(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="No audio data provided"):
            save_audio(b"", tmp_path / "out.wav")


class TestAudioPlayerValidation:
    """Test AudioPlayer validation logic."""

    def test_play_bytes_with_empty_data_raises_value_error(self) -> None:
        with patch("mp3host.audio.player.pygame.mixer.init"):
            player = AudioPlayer()

            with pytest.raises(ValueError, match="No audio data provided"):
                player.play_bytes(b"")

    def test_mixer_failure_raises_runtime_error(self) -> None:
        import pygame

        with patch(
            "mp3host.audio.player.pygame.mixer.init",
            side_effect=pygame.error("no audio device"),
        ):
            with pytest.raises(RuntimeError, match="Failed to initialize"):
                AudioPlayer()


class TestWavToMp3:
    """Test wav_to_mp3 conversion."""

    def test_garbage_input_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError, match="Could not convert"):
            wav_to_mp3(b"definitely not audio")

    def test_converts_wav(self) -> None:
        if "MP3" not in sf.available_formats():
            pytest.skip("libsndfile built without MP3 support")

        buf = io.BytesIO()
        sf.write(buf, [0.0, 0.1, -0.1, 0.0] * 4000, 16000, format="WAV")

        mp3 = wav_to_mp3(buf.getvalue())

        assert mp3
        assert not mp3.startswith(b"RIFF")

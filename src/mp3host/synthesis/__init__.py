"""Speech synthesis for mp3host.

Text is spoken by a hosted voice-cloning model conditioned on a reference
sample.
"""

from .client import SpeechClient
from .models import (
    DEFAULT_REFERENCE_URL,
    MODEL_SETTINGS,
    ModelSettings,
    ReferenceAudio,
    ReferenceSource,
    SynthesisRequest,
)
from .results import AudioFile, AudioUrl, fetch_bytes, parse_result, read_audio

__all__ = [
    "DEFAULT_REFERENCE_URL",
    "MODEL_SETTINGS",
    "AudioFile",
    "AudioUrl",
    "ModelSettings",
    "ReferenceAudio",
    "ReferenceSource",
    "SpeechClient",
    "SynthesisRequest",
    "fetch_bytes",
    "parse_result",
    "read_audio",
]

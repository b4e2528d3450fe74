"""Speech synthesis data models and fixed model settings."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

SPACE_ID = "ResembleAI/Chatterbox-Multilingual-TTS"
API_NAME = "/generate_tts_audio"
LANGUAGE = "tr"
DEFAULT_REFERENCE_URL = (
    "https://storage.googleapis.com/chatterbox-demo-samples/mtl_prompts/tr_m.flac"
)


@dataclass(frozen=True)
class ModelSettings:
    """Generation hyperparameters sent with every request.

    Args:
        exaggeration: Emotion intensity of the generated voice
        temperature: Sampling temperature
        seed: Random seed, 0 lets the model pick
        cfg_weight: Classifier-free guidance weight
    """

    exaggeration: float = 0.5
    temperature: float = 0.8
    seed: int = 0
    cfg_weight: float = 0.5


MODEL_SETTINGS = ModelSettings()


class ReferenceSource(Enum):
    """Where the voice reference sample comes from."""

    DEFAULT_URL = "default-url"
    USER_SUPPLIED = "user-supplied"


@dataclass(frozen=True)
class ReferenceAudio:
    """Reference sample bytes with the name they are uploaded under."""

    data: bytes
    filename: str


@dataclass(frozen=True)
class SynthesisRequest:
    """Text to speak plus the choice of reference voice.

    Args:
        text: Text to convert to speech
        reference_source: Default sample or a user supplied file
        reference_file: The user supplied sample, if any
    """

    text: str
    reference_source: ReferenceSource = ReferenceSource.DEFAULT_URL
    reference_file: Path | None = None

"""Client for the hosted speech synthesis model."""

import asyncio
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from gradio_client import Client, handle_file

from ..errors import ConnectError, RemoteError
from .models import API_NAME, LANGUAGE, MODEL_SETTINGS, SPACE_ID, ReferenceAudio
from .results import parse_result, read_audio

logger = logging.getLogger(__name__)


class SpeechClient:
    """Voice-cloning text-to-speech through a Gradio Space.

    The gradio client is synchronous, so every call to it runs in a worker
    thread to keep the event loop free.
    """

    def __init__(
        self,
        space: str = SPACE_ID,
        timeout: float = 120.0,
        client_factory: Callable[..., Client] = Client,
    ) -> None:
        """Initialize the speech client without connecting.

        Args:
            space: Hugging Face Space that hosts the model
            timeout: Timeout in seconds for downloading results
            client_factory: Callable building the gradio client
        """
        self.space = space
        self._timeout = timeout
        self._client_factory = client_factory
        self._client: Client | None = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Open the connection to the Space.

        Raises:
            ConnectError: If the Space cannot be reached
        """
        if self._client is not None:
            return
        logger.debug(f"Connecting to {self.space}")
        try:
            self._client = await asyncio.to_thread(
                self._client_factory, self.space, verbose=False
            )
        except Exception as e:
            raise ConnectError(
                f"Could not connect to speech service {self.space}: {e}", e
            ) from e

    async def synthesize(self, text: str, reference: ReferenceAudio) -> bytes:
        """Generate speech for text in the voice of the reference sample.

        Args:
            text: Text to speak
            reference: Voice sample to imitate

        Returns:
            Generated audio bytes (WAV format)

        Raises:
            ConnectError: If the Space or the result cannot be reached
            RemoteError: If the model reports a failure
            ProtocolError: If the response shape is not recognized
        """
        await self.connect()

        with tempfile.TemporaryDirectory(prefix="mp3host-") as tmp:
            reference_path = Path(tmp) / Path(reference.filename).name
            reference_path.write_bytes(reference.data)

            def _predict() -> object:
                return self._client.predict(
                    text_input=text,
                    language_id=LANGUAGE,
                    audio_prompt_path_input=handle_file(str(reference_path)),
                    exaggeration_input=MODEL_SETTINGS.exaggeration,
                    temperature_input=MODEL_SETTINGS.temperature,
                    seed_num_input=MODEL_SETTINGS.seed,
                    cfgw_input=MODEL_SETTINGS.cfg_weight,
                    api_name=API_NAME,
                )

            logger.debug(f"Synthesizing {len(text)} chars with {self.space}")
            try:
                raw = await asyncio.to_thread(_predict)
            except Exception as e:
                raise RemoteError(f"Speech synthesis failed: {e}", None, e) from e

        result = parse_result(raw)
        audio = await read_audio(result, self._timeout)
        if not audio:
            raise RemoteError("No audio data received from speech service")
        return audio

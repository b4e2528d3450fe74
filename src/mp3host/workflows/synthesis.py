"""Synthesis workflow: speak text in a reference voice, then hand it on."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from ..audio.convert import wav_to_mp3
from ..audio.player import save_audio
from ..errors import Mp3HostError, ValidationError
from ..progress import ProgressCallback
from ..synthesis.client import SpeechClient
from ..synthesis.models import (
    DEFAULT_REFERENCE_URL,
    ReferenceAudio,
    ReferenceSource,
    SynthesisRequest,
)
from ..synthesis.results import fetch_bytes
from .upload import (
    MP3_MEDIA_TYPE,
    PendingUpload,
    UploadOrchestrator,
    UploadOutcome,
    UploadState,
)

logger = logging.getLogger(__name__)


class SynthesisState(Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    SYNTHESIZING = "synthesizing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SynthesisResult:
    """Generated speech held in memory until saved or uploaded."""

    audio: bytes
    created_at: datetime

    @property
    def stem(self) -> str:
        return f"speech_{self.created_at:%Y%m%d_%H%M%S}"

    @property
    def file_name(self) -> str:
        """Download name, timestamped at generation time."""
        return f"{self.stem}.wav"


@dataclass(frozen=True)
class SynthesisOutcome:
    """Final result of one synthesis attempt."""

    state: SynthesisState
    result: SynthesisResult | None = None
    error: Mp3HostError | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is SynthesisState.SUCCEEDED

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""


def validate_request(request: SynthesisRequest) -> None:
    """Check a request before anything goes over the network.

    Raises:
        ValidationError: If the text is blank or a custom reference is missing
    """
    if not request.text or not request.text.strip():
        raise ValidationError("Text cannot be empty")
    if (
        request.reference_source is ReferenceSource.USER_SUPPLIED
        and request.reference_file is None
    ):
        raise ValidationError("Choose a reference audio file")


class SynthesisOrchestrator:
    """Runs the synthesis workflow and keeps the latest result.

    generate() and save_to_storage() never raise; failures come back in the
    outcome. Starting a new generation discards the previous result.
    """

    def __init__(
        self,
        speech_client: SpeechClient,
        default_reference_url: str = DEFAULT_REFERENCE_URL,
        fetch: Callable[[str], Awaitable[bytes]] = fetch_bytes,
        transcode: Callable[[bytes], bytes] = wav_to_mp3,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            speech_client: Client for the hosted model
            default_reference_url: Voice sample used when none is supplied
            fetch: Downloads the default voice sample
            transcode: Converts generated WAV audio to MP3 for upload
            clock: Returns the current local time
        """
        self._speech_client = speech_client
        self._default_reference_url = default_reference_url
        self._fetch = fetch
        self._transcode = transcode
        self._clock = clock
        self.state = SynthesisState.IDLE
        self.result: SynthesisResult | None = None

    def _transition(self, state: SynthesisState) -> None:
        logger.debug(f"Synthesis state {self.state.value} -> {state.value}")
        self.state = state

    def _fail(self, error: Mp3HostError) -> SynthesisOutcome:
        self._transition(SynthesisState.FAILED)
        logger.debug(f"Synthesis failed: {error}")
        return SynthesisOutcome(state=SynthesisState.FAILED, error=error)

    async def _resolve_reference(
        self, request: SynthesisRequest
    ) -> ReferenceAudio:
        if request.reference_source is ReferenceSource.USER_SUPPLIED:
            path = Path(request.reference_file)
            try:
                data = await asyncio.to_thread(path.read_bytes)
            except OSError as e:
                raise ValidationError(
                    f"Cannot read reference file {path}: {e}", e
                ) from e
            return ReferenceAudio(data=data, filename=path.name)

        url = self._default_reference_url
        data = await self._fetch(url)
        filename = PurePosixPath(urlparse(url).path).name or "reference.wav"
        return ReferenceAudio(data=data, filename=filename)

    async def generate(self, request: SynthesisRequest) -> SynthesisOutcome:
        """Generate speech for a request.

        Args:
            request: Text and reference voice choice

        Returns:
            Outcome carrying the generated audio or the error
        """
        self.result = None
        try:
            validate_request(request)
        except ValidationError as e:
            return self._fail(e)

        try:
            self._transition(SynthesisState.CONNECTING)
            reference = await self._resolve_reference(request)
            await self._speech_client.connect()

            self._transition(SynthesisState.SYNTHESIZING)
            audio = await self._speech_client.synthesize(
                request.text.strip(), reference
            )
        except Mp3HostError as e:
            return self._fail(e)
        except Exception as e:
            logger.exception("Unexpected synthesis failure")
            return self._fail(Mp3HostError(str(e), e))

        self.result = SynthesisResult(audio=audio, created_at=self._clock())
        self._transition(SynthesisState.SUCCEEDED)
        logger.info(f"Generated {len(audio)} bytes of speech")
        return SynthesisOutcome(state=SynthesisState.SUCCEEDED, result=self.result)

    def download(self, directory: str | Path) -> Path:
        """Save the latest result as a WAV file in a directory.

        Returns:
            Path of the written file

        Raises:
            ValidationError: If nothing has been generated yet
            OSError: If the file cannot be written
        """
        if self.result is None:
            raise ValidationError("Nothing has been generated yet")
        path = Path(directory) / self.result.file_name
        return save_audio(self.result.audio, path)

    def to_pending_upload(self) -> PendingUpload:
        """Package the latest result as an MP3 upload.

        Raises:
            ValidationError: If nothing has been generated or conversion fails
        """
        if self.result is None:
            raise ValidationError("Nothing has been generated yet")
        mp3 = self._transcode(self.result.audio)
        return PendingUpload.from_bytes(
            mp3, f"{self.result.stem}.mp3", media_type=MP3_MEDIA_TYPE
        )

    async def save_to_storage(
        self,
        uploader: UploadOrchestrator,
        on_progress: ProgressCallback | None = None,
    ) -> UploadOutcome:
        """Upload the latest result through the regular upload workflow."""
        try:
            pending = self.to_pending_upload()
        except Mp3HostError as e:
            return UploadOutcome(state=UploadState.FAILED, error=e)
        return await uploader.upload(pending, on_progress)

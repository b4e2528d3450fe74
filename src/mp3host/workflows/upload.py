"""Upload workflow: validate a file, commit it to GitHub, record it."""

import logging
import mimetypes
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..errors import AuthError, Mp3HostError, ValidationError
from ..github.client import RepositoryClient
from ..github.paths import build_upload_path, raw_url
from ..progress import ProgressCallback, SimulatedProgress
from ..storage.credentials import CredentialStore
from ..storage.history import HistoryLog
from ..storage.models import HistoryEntry

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 100 * 1024 * 1024
MP3_EXTENSION = ".mp3"
MP3_MEDIA_TYPE = "audio/mpeg"


class UploadState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class PendingUpload:
    """A file waiting to be uploaded.

    Args:
        data: File contents
        name: File name as the user supplied it
        size: Declared size in bytes
        media_type: Declared media type, if known
    """

    data: bytes
    name: str
    size: int
    media_type: str | None = None

    @classmethod
    def from_bytes(
        cls, data: bytes, name: str, media_type: str | None = None
    ) -> "PendingUpload":
        if media_type is None:
            media_type, _ = mimetypes.guess_type(name)
        return cls(data=data, name=name, size=len(data), media_type=media_type)

    @classmethod
    def from_path(cls, path: str | Path) -> "PendingUpload":
        """Read a local file, rejecting it before reading if it cannot pass.

        Raises:
            ValidationError: If the name, type or size is rejected
            OSError: If the file cannot be read
        """
        path = Path(path)
        media_type, _ = mimetypes.guess_type(path.name)
        header = cls(
            data=b"", name=path.name, size=path.stat().st_size, media_type=media_type
        )
        validate_upload(header)
        return cls.from_bytes(path.read_bytes(), path.name, media_type)


@dataclass(frozen=True)
class UploadOutcome:
    """Final result of one upload attempt."""

    state: UploadState
    url: str | None = None
    entry: HistoryEntry | None = None
    error: Mp3HostError | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is UploadState.SUCCEEDED

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""


def validate_upload(pending: PendingUpload) -> None:
    """Check that a file may be uploaded.

    A file passes when either its extension is .mp3 or its media type is
    audio/mpeg, and it is no larger than 100 MiB.

    Raises:
        ValidationError: If the file is rejected
    """
    is_mp3_name = pending.name.lower().endswith(MP3_EXTENSION)
    if not is_mp3_name and pending.media_type != MP3_MEDIA_TYPE:
        raise ValidationError("Only MP3 files are accepted")
    if pending.size > MAX_UPLOAD_BYTES:
        raise ValidationError("File is too large (max 100MB)")


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class UploadOrchestrator:
    """Runs the upload workflow against the saved credentials.

    upload() never raises: every failure ends in an outcome with state
    FAILED and the causing error attached.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        history: HistoryLog,
        client_factory: Callable[[str], RepositoryClient] = RepositoryClient,
        progress_interval: float = 0.2,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            credentials: Store holding the token and repository name
            history: Log that receives successful uploads
            client_factory: Builds a repository client from a token
            progress_interval: Seconds between simulated progress ticks
            clock: Returns the current time in milliseconds
        """
        self._credentials = credentials
        self._history = history
        self._client_factory = client_factory
        self._progress_interval = progress_interval
        self._clock = clock
        self.state = UploadState.IDLE

    def _transition(self, state: UploadState) -> None:
        logger.debug(f"Upload state {self.state.value} -> {state.value}")
        self.state = state

    def _fail(self, error: Mp3HostError) -> UploadOutcome:
        self._transition(UploadState.FAILED)
        logger.debug(f"Upload failed: {error}")
        return UploadOutcome(state=UploadState.FAILED, error=error)

    async def upload(
        self,
        pending: PendingUpload,
        on_progress: ProgressCallback | None = None,
    ) -> UploadOutcome:
        """Upload a file and record it in the history.

        Args:
            pending: File to upload
            on_progress: Receives simulated progress values from 0 to 100

        Returns:
            Outcome carrying the public URL on success or the error on failure
        """
        credentials = self._credentials.load()
        if not credentials.is_complete:
            return self._fail(AuthError("Token and repository name are not set"))

        self._transition(UploadState.VALIDATING)
        try:
            validate_upload(pending)
        except ValidationError as e:
            return self._fail(e)

        self._transition(UploadState.UPLOADING)
        progress = SimulatedProgress(on_progress, self._progress_interval)
        progress.start()
        try:
            url = await self._commit(
                credentials.token, credentials.repository_name, pending
            )
        except Mp3HostError as e:
            await progress.fail()
            return self._fail(e)
        except Exception as e:
            logger.exception("Unexpected upload failure")
            await progress.fail()
            return self._fail(Mp3HostError(str(e), e))
        await progress.complete()

        # The file is committed at this point, so the URL is always returned
        try:
            entry = self._history.add(pending.name, url, pending.size)
        except OSError as e:
            logger.warning(f"Uploaded {pending.name} but could not record it: {e}")
            entry = None
        self._transition(UploadState.SUCCEEDED)
        logger.info(f"Uploaded {pending.name} to {url}")
        return UploadOutcome(state=UploadState.SUCCEEDED, url=url, entry=entry)

    async def _commit(
        self, token: str, repo_name: str, pending: PendingUpload
    ) -> str:
        async with self._client_factory(token) as client:
            username = await client.resolve_identity()
            path = build_upload_path(pending.name, self._clock())
            await client.put_file(
                username,
                repo_name,
                path,
                pending.data,
                message=f"Upload {pending.name}",
            )
        return raw_url(username, repo_name, path)

"""Application context owning mp3host's state objects."""

import functools
import logging
from dataclasses import dataclass

from .config import Mp3HostConfig, load_config
from .github.client import RepositoryClient
from .storage import CredentialStore, HistoryLog, get_state_dir
from .storage.models import Credentials
from .synthesis.client import SpeechClient
from .synthesis.results import fetch_bytes
from .workflows.synthesis import SynthesisOrchestrator
from .workflows.upload import UploadOrchestrator

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Config plus the persisted state every workflow shares."""

    config: Mp3HostConfig
    credentials: CredentialStore
    history: HistoryLog

    @classmethod
    def create(cls, config: Mp3HostConfig | None = None) -> "AppContext":
        """Build a context from the given or the loaded configuration."""
        config = config or load_config()
        state_dir = get_state_dir(config.storage.state_dir)
        logger.debug(f"Using state directory {state_dir}")
        return cls(
            config=config,
            credentials=CredentialStore(state_dir),
            history=HistoryLog(state_dir),
        )

    def repository_client(self, token: str) -> RepositoryClient:
        return RepositoryClient(token, timeout=self.config.http.timeout)

    def upload_orchestrator(self) -> UploadOrchestrator:
        return UploadOrchestrator(
            self.credentials,
            self.history,
            client_factory=self.repository_client,
            progress_interval=self.config.upload.progress_interval,
        )

    def synthesis_orchestrator(self) -> SynthesisOrchestrator:
        timeout = self.config.http.timeout
        return SynthesisOrchestrator(
            SpeechClient(timeout=timeout),
            fetch=functools.partial(fetch_bytes, timeout=timeout),
        )

    async def save_credentials(
        self, token: str, repository_name: str
    ) -> tuple[Credentials, bool]:
        """Save new credentials and make sure the repository exists.

        Returns:
            The saved credentials and whether the repository was created

        Raises:
            ValidationError: If either value is empty
            AuthError: If GitHub rejects the token
            RemoteError: If the repository cannot be checked or created
        """
        credentials = self.credentials.save(token, repository_name)
        async with self.repository_client(credentials.token) as client:
            username = await client.resolve_identity()
            created = await client.ensure_repository_exists(
                username, credentials.repository_name
            )
        return credentials, created

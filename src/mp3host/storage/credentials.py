"""JSON-backed credential storage."""

import json
import logging
import os
from pathlib import Path

from ..errors import ValidationError
from .models import Credentials

logger = logging.getLogger(__name__)

SETTINGS_FILE = "mp3host_settings.json"


class CredentialStore:
    """Stores the GitHub token and target repository name.

    The file is read on every load so a value saved by another command is
    picked up. Unreadable or corrupt data loads as empty credentials.
    """

    def __init__(self, state_dir: Path) -> None:
        self.path = state_dir / SETTINGS_FILE

    def load(self) -> Credentials:
        """Load saved credentials.

        Returns:
            Saved credentials, or empty credentials if none are usable
        """
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return Credentials()
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable settings at {self.path}: {e}")
            return Credentials()

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed settings at {self.path}")
            return Credentials()

        token = data.get("token")
        repo = data.get("repo")
        return Credentials(
            token=token if isinstance(token, str) else "",
            repository_name=repo if isinstance(repo, str) else "",
        )

    def save(self, token: str, repository_name: str) -> Credentials:
        """Persist new credentials.

        Args:
            token: GitHub bearer token
            repository_name: Target repository name

        Returns:
            The saved credentials

        Raises:
            ValidationError: If either value is empty after trimming
        """
        token = token.strip()
        repository_name = repository_name.strip()
        if not token or not repository_name:
            raise ValidationError("Token and repository name are required")

        credentials = Credentials(token=token, repository_name=repository_name)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Owner-only: the file holds a bearer token
        fd = os.open(str(self.path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps({"token": token, "repo": repository_name}))
        logger.debug(f"Saved credentials for repository {repository_name}")
        return credentials

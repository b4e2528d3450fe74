"""Local persisted state for mp3host."""

from pathlib import Path

from .credentials import CredentialStore
from .history import MAX_HISTORY_ENTRIES, HistoryLog
from .models import Credentials, HistoryEntry

__all__ = [
    "MAX_HISTORY_ENTRIES",
    "CredentialStore",
    "Credentials",
    "HistoryEntry",
    "HistoryLog",
    "get_state_dir",
]


def get_state_dir(base: Path) -> Path:
    """Get or create the mp3host state directory.

    Args:
        base: Configured state directory

    Returns:
        Path to the state directory
    """
    base.mkdir(parents=True, exist_ok=True)
    return base

"""Bounded upload history persisted as JSON."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from .models import HistoryEntry

logger = logging.getLogger(__name__)

HISTORY_FILE = "mp3host_history.json"
MAX_HISTORY_ENTRIES = 50


class HistoryLog:
    """Newest-first record of completed uploads.

    Holds at most MAX_HISTORY_ENTRIES entries; adding past the limit drops
    the oldest ones. Every mutation rewrites the whole file.
    """

    def __init__(self, state_dir: Path) -> None:
        self.path = state_dir / HISTORY_FILE
        self._entries = self._load()

    def _load(self) -> list[HistoryEntry]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable history at {self.path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Ignoring malformed history at {self.path}")
            return []

        entries = []
        for item in data:
            try:
                entries.append(HistoryEntry.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed history entry {item!r}: {e}")
        return entries[:MAX_HISTORY_ENTRIES]

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([entry.to_dict() for entry in self._entries]),
            encoding="utf-8",
        )

    def entries(self) -> list[HistoryEntry]:
        """Return a copy of the entries, newest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(
        self,
        file_name: str,
        url: str,
        size_bytes: int,
        created_at: datetime | None = None,
    ) -> HistoryEntry:
        """Record a completed upload at the front of the log.

        Args:
            file_name: Original file name
            url: Public URL of the upload
            size_bytes: Uploaded size
            created_at: Completion time, defaults to now

        Returns:
            The new entry
        """
        entry = HistoryEntry(
            file_name=file_name,
            url=url,
            size_bytes=size_bytes,
            created_at=created_at or datetime.now(timezone.utc),
        )
        self._entries.insert(0, entry)
        del self._entries[MAX_HISTORY_ENTRIES:]
        self._save()
        return entry

    def remove(self, index: int) -> HistoryEntry:
        """Delete the entry at a zero-based position.

        Raises:
            IndexError: If no entry exists at that position
        """
        if not 0 <= index < len(self._entries):
            raise IndexError(f"No history entry at position {index}")
        entry = self._entries.pop(index)
        self._save()
        return entry

    def clear(self) -> None:
        """Delete every entry."""
        self._entries.clear()
        self._save()

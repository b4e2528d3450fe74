"""Data models for persisted state."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Credentials:
    """Saved GitHub access settings.

    Attributes:
        token: GitHub bearer token
        repository_name: Repository that receives the uploads
    """

    token: str = ""
    repository_name: str = ""

    @property
    def is_complete(self) -> bool:
        """Whether both values needed for remote calls are present."""
        return bool(self.token) and bool(self.repository_name)


@dataclass(frozen=True)
class HistoryEntry:
    """A completed upload.

    Attributes:
        file_name: Name of the file as the user supplied it
        url: Public raw URL of the uploaded file
        size_bytes: Size of the uploaded content
        created_at: When the upload finished
    """

    file_name: str
    url: str
    size_bytes: int
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "name": self.file_name,
            "url": self.url,
            "size": self.size_bytes,
            "date": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        """Build an entry from its stored form.

        Raises:
            KeyError: If a field is missing
            ValueError: If a field has the wrong type
        """
        name = data["name"]
        url = data["url"]
        size = data["size"]
        if not isinstance(name, str) or not isinstance(url, str):
            raise ValueError("name and url must be strings")
        if isinstance(size, bool) or not isinstance(size, int):
            raise ValueError("size must be an integer")
        return cls(
            file_name=name,
            url=url,
            size_bytes=size,
            created_at=datetime.fromisoformat(data["date"]),
        )

"""GitHub storage backend for mp3host."""

from .client import RepositoryClient
from .paths import build_upload_path, raw_url, sanitize_file_name

__all__ = [
    "RepositoryClient",
    "build_upload_path",
    "raw_url",
    "sanitize_file_name",
]

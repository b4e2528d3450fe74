"""Upload path and public URL construction.

The raw URL format is the durable output of an upload and must not change.
"""

import re

RAW_CONTENT_HOST = "raw.githubusercontent.com"
BRANCH = "main"
UPLOAD_DIR = "uploads"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_file_name(name: str) -> str:
    """Replace every character outside [A-Za-z0-9._-] with an underscore."""
    return _UNSAFE_CHARS.sub("_", name)


def build_upload_path(file_name: str, timestamp_ms: int) -> str:
    """Build the repository path for an upload.

    The millisecond timestamp prefix is the only collision avoidance; two
    uploads of the same name in the same millisecond share a path.

    Args:
        file_name: Name as supplied by the user
        timestamp_ms: Upload time in milliseconds since the epoch

    Returns:
        Path of the form uploads/<timestamp>_<sanitized name>
    """
    return f"{UPLOAD_DIR}/{timestamp_ms}_{sanitize_file_name(file_name)}"


def raw_url(username: str, repo_name: str, path: str) -> str:
    """Public URL of a file committed to the main branch."""
    return f"https://{RAW_CONTENT_HOST}/{username}/{repo_name}/{BRANCH}/{path}"

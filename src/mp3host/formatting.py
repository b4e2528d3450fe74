"""Human-readable formatting for CLI output."""

from datetime import datetime


def format_size(size_bytes: int) -> str:
    """Format a byte count as B, KB or MB with one decimal."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def format_date(moment: datetime) -> str:
    """Format a timestamp as a short local date, e.g. '5 Mar 2026'."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return f"{moment.day} {moment:%b %Y}"

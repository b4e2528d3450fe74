"""Configuration management for mp3host.

Loads configuration from ~/.config/mp3host/config.toml.
Priority chain: CLI flags > env vars > config file.
"""

import logging
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "mp3host"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG = """\
# mp3host configuration

[storage]
# Where the saved token, repository name and upload history live
state_dir = "~/.local/share/mp3host"

[upload]
# Repository suggested by `mp3host setup`
default_repository = "mp3-storage"

# Seconds between ticks of the upload progress bar
progress_interval = 0.2

[http]
# Request timeout in seconds for GitHub and audio downloads
timeout = 120.0

[synthesis]
# Directory where generated speech is saved by default
output_dir = "."

# The GitHub token is never stored here. Run `mp3host setup` instead.
# Environment overrides:
#   MP3HOST_STATE_DIR, MP3HOST_DEFAULT_REPO,
#   MP3HOST_PROGRESS_INTERVAL, MP3HOST_HTTP_TIMEOUT
"""


@dataclass(frozen=True)
class StorageConfig:
    """Local state configuration."""

    state_dir: Path


@dataclass(frozen=True)
class UploadConfig:
    """Upload workflow configuration."""

    default_repository: str
    progress_interval: float


@dataclass(frozen=True)
class HTTPConfig:
    """HTTP client configuration."""

    timeout: float


@dataclass(frozen=True)
class SynthesisConfig:
    """Speech synthesis configuration."""

    output_dir: Path


@dataclass(frozen=True)
class Mp3HostConfig:
    """Top-level mp3host configuration."""

    storage: StorageConfig
    upload: UploadConfig
    http: HTTPConfig
    synthesis: SynthesisConfig


_cached_config: Mp3HostConfig | None = None


def generate_config() -> Path:
    """Generate default config file at ~/.config/mp3host/config.toml."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(DEFAULT_CONFIG)
    return CONFIG_PATH


def load_config() -> Mp3HostConfig:
    """Load configuration from config file with env var overrides.

    On first run, writes the default config file and continues with it.

    Returns:
        Loaded and validated Mp3HostConfig.

    Raises:
        SystemExit: If the config file is invalid.
    """
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    if not CONFIG_PATH.exists():
        path = generate_config()
        logger.info(f"No config found, generated {path}")

    try:
        with open(CONFIG_PATH, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Invalid config file {CONFIG_PATH}: {e}", file=sys.stderr)
        print("Fix it or delete it to regenerate.", file=sys.stderr)
        raise SystemExit(1) from e

    storage = data.get("storage", {})
    upload = data.get("upload", {})
    http_cfg = data.get("http", {})
    synthesis = data.get("synthesis", {})

    # Validate required fields
    missing = []
    if "state_dir" not in storage:
        missing.append("storage.state_dir")
    if "default_repository" not in upload:
        missing.append("upload.default_repository")
    if "progress_interval" not in upload:
        missing.append("upload.progress_interval")

    if missing:
        print(
            f"Missing required config values: {', '.join(missing)}",
            file=sys.stderr,
        )
        print(f"Edit {CONFIG_PATH} or delete it to regenerate.", file=sys.stderr)
        raise SystemExit(1)

    # Env vars override config file values
    state_dir = os.getenv("MP3HOST_STATE_DIR", storage["state_dir"])
    interval = os.getenv("MP3HOST_PROGRESS_INTERVAL", upload["progress_interval"])
    timeout = os.getenv("MP3HOST_HTTP_TIMEOUT", http_cfg.get("timeout", 120.0))

    _cached_config = Mp3HostConfig(
        storage=StorageConfig(state_dir=Path(state_dir).expanduser()),
        upload=UploadConfig(
            default_repository=os.getenv(
                "MP3HOST_DEFAULT_REPO", upload["default_repository"]
            ),
            progress_interval=float(interval),
        ),
        http=HTTPConfig(timeout=float(timeout)),
        synthesis=SynthesisConfig(
            output_dir=Path(synthesis.get("output_dir", ".")).expanduser()
        ),
    )

    return _cached_config

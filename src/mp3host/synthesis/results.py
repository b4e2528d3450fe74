"""Parsing and retrieval of synthesis results.

The hosted model answers with loosely structured data. parse_result turns
every known shape into one of two tagged variants and rejects the rest.
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import httpx

from ..errors import ConnectError, ProtocolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioUrl:
    """Generated audio served over HTTP."""

    url: str


@dataclass(frozen=True)
class AudioFile:
    """Generated audio already downloaded to a local file."""

    path: Path


AudioReference = AudioUrl | AudioFile


def _from_string(value: str) -> AudioReference:
    if value.startswith(("http://", "https://")):
        return AudioUrl(value)
    return AudioFile(Path(value))


def parse_result(raw: object) -> AudioReference:
    """Turn a raw model response into an audio reference.

    Accepted shapes:
        - "https://..." or "/tmp/.../audio.wav"
        - {"url": "..."}
        - {"path": "..."}
        - {"value": <any accepted shape>}
        - [<any accepted shape>, ...]

    Raises:
        ProtocolError: If the response matches none of these shapes
    """
    if isinstance(raw, str) and raw:
        return _from_string(raw)

    if isinstance(raw, Mapping):
        url = raw.get("url")
        if isinstance(url, str) and url:
            return AudioUrl(url)
        path = raw.get("path")
        if isinstance(path, str) and path:
            return _from_string(path)
        if "value" in raw:
            return parse_result(raw["value"])

    if isinstance(raw, (list, tuple)) and raw:
        return parse_result(raw[0])

    raise ProtocolError(f"Unrecognized synthesis response: {raw!r}")


async def fetch_bytes(
    url: str,
    timeout: float = 120.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bytes:
    """Download a URL and return its body.

    Raises:
        ConnectError: If the server cannot be reached or answers with an error
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout, transport=transport, follow_redirects=True
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as e:
        raise ConnectError(f"Could not download {url}: {e}", e) from e

    logger.debug(f"Downloaded {len(response.content)} bytes from {url}")
    return response.content


async def read_audio(
    reference: AudioReference,
    timeout: float = 120.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bytes:
    """Retrieve the bytes behind an audio reference.

    Raises:
        ConnectError: If a remote reference cannot be downloaded
        ProtocolError: If a local reference cannot be read
    """
    if isinstance(reference, AudioUrl):
        return await fetch_bytes(reference.url, timeout, transport)
    if isinstance(reference, AudioFile):
        try:
            return await asyncio.to_thread(reference.path.read_bytes)
        except OSError as e:
            raise ProtocolError(
                f"Synthesis result file is unreadable: {reference.path}", e
            ) from e
    raise ProtocolError(f"Unsupported audio reference: {reference!r}")

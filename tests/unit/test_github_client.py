"""Unit tests for RepositoryClient request handling."""

import base64
import json
import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from mp3host.errors import AuthError, RemoteError
from mp3host.github.client import REPO_DESCRIPTION, RepositoryClient


def _client(handler, token: str = "ghp_valid") -> RepositoryClient:
    return RepositoryClient(token, transport=httpx.MockTransport(handler))


class TestResolveIdentity:
    """Test resolve_identity."""

    @pytest.mark.asyncio
    async def test_returns_login_and_sends_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"login": "octocat"})

        async with _client(handler) as client:
            assert await client.resolve_identity() == "octocat"

        assert str(seen[0].url) == "https://api.github.com/user"
        assert seen[0].headers["Authorization"] == "Bearer ghp_valid"
        assert seen[0].headers["Accept"] == "application/vnd.github.v3+json"

    @pytest.mark.asyncio
    async def test_rejected_token_raises_auth_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Bad credentials"})

        async with _client(handler) as client:
            with pytest.raises(AuthError, match="GitHub token is invalid"):
                await client.resolve_identity()

    @pytest.mark.asyncio
    async def test_transport_failure_raises_remote_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route", request=request)

        async with _client(handler) as client:
            with pytest.raises(RemoteError, match="GitHub request failed") as exc_info:
                await client.resolve_identity()

        assert isinstance(exc_info.value.original_error, httpx.ConnectError)


class TestEnsureRepositoryExists:
    """Test ensure_repository_exists."""

    @pytest.mark.asyncio
    async def test_existing_repository_is_not_created(
        self, fake_github
    ) -> None:
        async with fake_github.client_factory("ghp_valid") as client:
            created = await client.ensure_repository_exists("octocat", "mp3-storage")

        assert created is False
        assert [r.method for r in fake_github.requests] == ["GET"]

    @pytest.mark.asyncio
    async def test_missing_repository_is_created_public(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(404, json={"message": "Not Found"})
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json={})

        async with _client(handler) as client:
            created = await client.ensure_repository_exists("octocat", "voices")

        assert created is True
        assert bodies == [
            {
                "name": "voices",
                "description": REPO_DESCRIPTION,
                "private": False,
                "auto_init": True,
            }
        ]

    @pytest.mark.asyncio
    async def test_repeated_calls_are_idempotent(self, fake_github) -> None:
        async with fake_github.client_factory("ghp_valid") as client:
            first = await client.ensure_repository_exists("octocat", "new-repo")
            second = await client.ensure_repository_exists("octocat", "new-repo")

        assert (first, second) == (True, False)
        assert "new-repo" in fake_github.repositories

    @pytest.mark.asyncio
    async def test_creation_failure_passes_message_through(
        self, fake_github
    ) -> None:
        fake_github.create_error = "name already exists on this account"

        async with fake_github.client_factory("ghp_valid") as client:
            with pytest.raises(RemoteError, match="name already exists") as exc_info:
                await client.ensure_repository_exists("octocat", "other")

        assert exc_info.value.status_code == 422

    @pytest.mark.asyncio
    async def test_unexpected_check_status_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="oops")

        async with _client(handler) as client:
            with pytest.raises(RemoteError, match="Could not check repository"):
                await client.ensure_repository_exists("octocat", "voices")


class TestPutFile:
    """Test put_file."""

    @pytest.mark.asyncio
    async def test_sends_base64_content_and_message(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"commit": {"sha": "abc"}})

        async with _client(handler) as client:
            result = await client.put_file(
                "octocat", "repo", "uploads/1_a.mp3", b"\x00ID3", "Upload a.mp3"
            )

        assert result == {"commit": {"sha": "abc"}}
        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/repos/octocat/repo/contents/uploads/1_a.mp3"
        body = json.loads(seen[0].content)
        assert body["message"] == "Upload a.mp3"
        assert base64.b64decode(body["content"]) == b"\x00ID3"

    @pytest.mark.asyncio
    async def test_failure_uses_service_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(409, json={"message": "sha wasn't supplied"})

        async with _client(handler) as client:
            with pytest.raises(RemoteError, match="sha wasn't supplied"):
                await client.put_file("o", "r", "p", b"x", "m")

    @pytest.mark.asyncio
    async def test_failure_without_body_uses_default(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>bad gateway</html>")

        async with _client(handler) as client:
            with pytest.raises(RemoteError, match="Upload failed") as exc_info:
                await client.put_file("o", "r", "p", b"x", "m")

        assert exc_info.value.status_code == 502

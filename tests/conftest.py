"""Pytest configuration and fixtures for mp3host tests."""

import base64
import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mp3host.context import AppContext
from mp3host.github.client import RepositoryClient


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and state at a per-test directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr("mp3host.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("mp3host.config.CONFIG_PATH", config_dir / "config.toml")
    monkeypatch.setattr("mp3host.config._cached_config", None)

    state_dir = tmp_path / "state"
    monkeypatch.setenv("MP3HOST_STATE_DIR", str(state_dir))
    monkeypatch.setenv("MP3HOST_PROGRESS_INTERVAL", "0.01")
    monkeypatch.delenv("MP3HOST_DEFAULT_REPO", raising=False)
    monkeypatch.delenv("MP3HOST_HTTP_TIMEOUT", raising=False)
    return state_dir


class FakeGitHub:
    """In-memory stand-in for the GitHub REST API behind httpx.MockTransport."""

    def __init__(
        self,
        login: str = "octocat",
        token: str = "ghp_valid",
        repositories: tuple[str, ...] = (),
    ) -> None:
        self.login = login
        self.token = token
        self.repositories = set(repositories)
        self.files: dict[str, bytes] = {}
        self.commit_messages: list[str] = []
        self.requests: list[httpx.Request] = []
        self.create_error: str | None = None
        self.put_error: str | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"message": "Bad credentials"})

        path = request.url.path
        if request.method == "GET" and path == "/user":
            return httpx.Response(200, json={"login": self.login})

        if request.method == "POST" and path == "/user/repos":
            if self.create_error:
                return httpx.Response(422, json={"message": self.create_error})
            body = json.loads(request.content)
            self.repositories.add(body["name"])
            return httpx.Response(201, json={"name": body["name"]})

        prefix = f"/repos/{self.login}/"
        if path.startswith(prefix):
            repo, _, rest = path[len(prefix):].partition("/")
            if request.method == "GET" and not rest:
                if repo in self.repositories:
                    return httpx.Response(200, json={"name": repo})
                return httpx.Response(404, json={"message": "Not Found"})
            if request.method == "PUT" and rest.startswith("contents/"):
                if self.put_error:
                    return httpx.Response(422, json={"message": self.put_error})
                body = json.loads(request.content)
                file_path = rest[len("contents/"):]
                self.files[file_path] = base64.b64decode(body["content"])
                self.commit_messages.append(body["message"])
                return httpx.Response(
                    201, json={"content": {"path": file_path}, "commit": {"sha": "1"}}
                )

        return httpx.Response(404, json={"message": "Not Found"})

    @property
    def network_calls(self) -> int:
        return len(self.requests)

    def client_factory(self, token: str) -> RepositoryClient:
        return RepositoryClient(token, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub(repositories=("mp3-storage",))


@pytest.fixture
def context(fake_github: FakeGitHub, monkeypatch: pytest.MonkeyPatch) -> AppContext:
    """Application context whose GitHub calls go to fake_github."""
    ctx = AppContext.create()
    monkeypatch.setattr(ctx, "repository_client", fake_github.client_factory)
    return ctx


@pytest.fixture
def configured_context(context: AppContext) -> AppContext:
    """Context with valid credentials already saved."""
    context.credentials.save("ghp_valid", "mp3-storage")
    return context

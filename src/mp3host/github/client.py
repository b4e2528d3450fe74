"""GitHub REST API client for repository storage."""

import base64
import logging

import httpx

from ..errors import AuthError, RemoteError

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
REPO_DESCRIPTION = "MP3 file hosting via MP3 Host"


class RepositoryClient:
    """Async client for the parts of the GitHub API that mp3host uses.

    Use as an async context manager so the underlying connection pool is
    closed when the workflow finishes.
    """

    def __init__(
        self,
        token: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self._client = httpx.AsyncClient(
            base_url=API_URL,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github.v3+json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RepositoryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteError(f"GitHub request failed: {e}", None, e) from e

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        """Pull GitHub's error message out of a failed response."""
        try:
            message = response.json().get("message")
        except (ValueError, AttributeError):
            message = None
        return message or default

    async def resolve_identity(self) -> str:
        """Return the login of the token's owner.

        Raises:
            AuthError: If GitHub rejects the token
            RemoteError: If the request cannot be sent
        """
        response = await self._request("GET", "/user")
        if not response.is_success:
            raise AuthError("GitHub token is invalid")
        login = response.json()["login"]
        logger.debug(f"Token belongs to {login}")
        return login

    async def ensure_repository_exists(self, username: str, repo_name: str) -> bool:
        """Create the repository if it does not exist yet.

        New repositories are public and initialized with a first commit so
        the main branch exists for uploads.

        Args:
            username: Repository owner
            repo_name: Repository name

        Returns:
            True if the repository was created, False if it already existed

        Raises:
            RemoteError: If the existence check or the creation fails
        """
        response = await self._request("GET", f"/repos/{username}/{repo_name}")
        if response.is_success:
            return False
        if response.status_code != 404:
            raise RemoteError(
                self._error_message(response, "Could not check repository"),
                response.status_code,
            )

        logger.info(f"Creating repository {username}/{repo_name}")
        response = await self._request(
            "POST",
            "/user/repos",
            json={
                "name": repo_name,
                "description": REPO_DESCRIPTION,
                "private": False,
                "auto_init": True,
            },
        )
        if not response.is_success:
            raise RemoteError(
                self._error_message(response, "Could not create repository"),
                response.status_code,
            )
        return True

    async def put_file(
        self,
        username: str,
        repo_name: str,
        path: str,
        content: bytes,
        message: str,
    ) -> dict:
        """Create or overwrite a file through the contents API.

        Args:
            username: Repository owner
            repo_name: Repository name
            path: Path of the file inside the repository
            content: Raw file bytes
            message: Commit message

        Returns:
            Decoded response body describing the commit

        Raises:
            RemoteError: If GitHub does not accept the file
        """
        response = await self._request(
            "PUT",
            f"/repos/{username}/{repo_name}/contents/{path}",
            json={
                "message": message,
                "content": base64.b64encode(content).decode("ascii"),
            },
        )
        if not response.is_success:
            raise RemoteError(
                self._error_message(response, "Upload failed"),
                response.status_code,
            )
        logger.debug(f"Committed {path} ({len(content)} bytes)")
        return response.json()

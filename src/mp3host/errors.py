"""Custom mp3host exceptions."""


class Mp3HostError(Exception):
    """Base exception for mp3host errors."""

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class AuthError(Mp3HostError):
    """Exception raised for authentication failures.

    This typically occurs when:
    - No token or repository name has been saved yet
    - The stored token is rejected by GitHub
    """

    pass


class RemoteError(Mp3HostError):
    """Exception raised when a remote service answers with a failure.

    The message is passed through from the service when it provides one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.status_code = status_code


class ConnectError(Mp3HostError):
    """Exception raised when the synthesis endpoint cannot be reached."""

    pass


class ProtocolError(Mp3HostError):
    """Exception raised when a synthesis response has an unknown shape."""

    pass


class ValidationError(Mp3HostError):
    """Exception raised when a local precondition fails.

    This typically occurs when:
    - The file is not an MP3 or is larger than the upload limit
    - The text to synthesize is empty
    - A custom reference voice was chosen but no file was given
    """

    pass

"""
Error types for Repozip.

"Every failure has a name. Give it the right one." — schema.cx
"""


class RepozipError(Exception):
    """Base class for every error Repozip raises on purpose."""

    pass


class ConfigError(RepozipError):
    """Missing or invalid credential, settings file or CLI input."""

    pass


class TransportError(RepozipError):
    """The request never got a response (DNS, connection, timeout)."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class HttpStatusError(RepozipError):
    """GitHub answered with a 4xx or 5xx status."""

    def __init__(self, status_code: int, url: str, message: str = "") -> None:
        self.status_code = status_code
        self.url = url
        self.message = message
        text = f"HTTP {status_code} for {url}"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)


class DecodeError(RepozipError):
    """A response body did not have the expected shape."""

    pass


class ArchiveWriteError(RepozipError):
    """An archive could not be written to disk."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path

"""Exception types raised by the client and its collaborators."""


class RSSClientError(Exception):
    """Base class for every error raised by rssclient."""


class InvalidArgumentError(RSSClientError, ValueError):
    """A fetch was requested with an unknown channel or a bad limit."""


class ConfigurationError(RSSClientError):
    """A required collaborator (e.g. the cache store) is not set."""


class TransportError(RSSClientError):
    """A feed could not be retrieved over HTTP."""

    def __init__(self, message: str, url: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code

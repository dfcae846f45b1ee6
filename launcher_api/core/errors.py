"""Domain exceptions.

Raised by the content layer and translated to HTTP responses by the routers.
"""


class LauncherError(Exception):
    """Base class for launcher backend errors."""


class NewsReadError(LauncherError):
    """The news file is missing or unreadable."""


class NewsParseError(LauncherError):
    """The news file is not valid JSON of the expected shape."""


class ClientFileNotFoundError(LauncherError):
    """The configured client file does not exist under the clients directory."""


class ClientFileIOError(LauncherError):
    """The client file exists but could not be opened or inspected."""


class HashError(LauncherError):
    """The content digest of a file could not be computed."""

"""
Exceptions raised by blogger-client.
"""

from pathlib import Path
from typing import Optional


class BloggerError(Exception):
    """Base exception for blogger-client errors."""

    pass


class MissingParameterError(BloggerError):
    """Raised when a required request parameter is absent or empty."""

    def __init__(self, param_name: str, message: Optional[str] = None):
        self.param_name = param_name
        super().__init__(message or f"{param_name} is required")


class AuthFlowError(BloggerError):
    """Raised when the interactive OAuth flow fails or is denied."""

    pass


class StorageError(BloggerError):
    """Raised when the token file cannot be read or written."""

    def __init__(self, path: Path, operation: str, reason: str):
        self.path = Path(path)
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to {operation} {self.path}: {reason}")


class MalformedEndpointError(BloggerError):
    """Raised when an endpoint is not a known 'resource.action' pair."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        self.endpoint = endpoint
        message = f"Malformed endpoint {endpoint!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RequestError(BloggerError):
    """Raised when a remote call fails for any reason."""

    def __init__(self, method: str, endpoint: str, cause: Exception):
        self.method = method.upper()
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(
            f"Error making {self.method} request to {endpoint}: {cause}"
        )


class NotFoundError(BloggerError):
    """Raised when a looked-up resource does not exist."""

    pass

"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class TcpClientError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(TcpClientError):
    """Raised when the client configuration fails validation."""


class ConnectError(TcpClientError):
    """Raised when the server cannot be reached within the connect timeout."""


class LogFileError(TcpClientError):
    """Raised when the outcome log file cannot be opened."""


class ValidationError(TcpClientError):
    """Raised when a requested filename contains characters outside the whitelist."""

    def __init__(self, filename: str):
        super().__init__(f"invalid filename: {filename}")
        self.filename = filename


class DownloadError(TcpClientError):
    """Base class for failures that happen after the connection is established."""


class RequestError(DownloadError):
    """Raised when the request line cannot be written to the connection."""


class FileCreateError(DownloadError):
    """Raised when the local output file cannot be created."""


class DeadlineError(DownloadError):
    """Raised when the read deadline cannot be armed on the connection."""


class ReadError(DownloadError):
    """Raised when reading from the connection fails."""


class ReadTimeoutError(ReadError):
    """Raised when no data arrives before the read deadline."""


class FileWriteError(DownloadError):
    """Raised when received bytes cannot be written to the output file."""

"""
Pydantic model for client configuration.
Replaces the fixed connection constants with a validated, injectable object.
"""

from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from tcp_client.exceptions import ConfigurationError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_BUFFER_SIZE = 8192
DEFAULT_LOG_FILENAME = "tcp-client.log"
DEFAULT_TIMEOUT = 30.0  # seconds


class ClientConfig(BaseModel):
    """A validated configuration model for a single download run."""

    # Server endpoint
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    # Transfer settings
    buffer_size: int = DEFAULT_BUFFER_SIZE
    connect_timeout: float = DEFAULT_TIMEOUT
    read_timeout: float = DEFAULT_TIMEOUT

    # Outcome log
    log_filename: str = DEFAULT_LOG_FILENAME

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("host", "log_filename")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Value cannot be empty.")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Ensures the port is a usable TCP port number."""
        if v < 1 or v > 65535:
            raise ValueError("Port must be between 1 and 65535.")
        return v

    @field_validator("buffer_size")
    @classmethod
    def validate_buffer_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Buffer size must be at least 1 byte.")
        return v

    @field_validator("connect_timeout", "read_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be greater than zero.")
        return v

    @property
    def address(self) -> str:
        """The server endpoint in 'host:port' form."""
        return f"{self.host}:{self.port}"

    @classmethod
    def build(cls, overrides: dict[str, Any] | None = None) -> "ClientConfig":
        """
        Creates a configuration from the defaults with the given overrides applied.

        Overrides whose value is None are ignored, so CLI options that were not
        supplied fall back to the defaults.

        Raises:
            ConfigurationError: If any value fails validation.
        """
        settings = {
            key: value for key, value in (overrides or {}).items() if value is not None
        }
        try:
            return cls(**settings)
        except ValidationError as e:
            raise ConfigurationError(f"invalid configuration:\n{e}") from e

"""
Data Models Layer.

This package contains the client configuration model and the
per-transfer statistics record.
"""

from .config import ClientConfig
from .stats import TransferStats

__all__ = ["ClientConfig", "TransferStats"]

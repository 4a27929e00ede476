"""
Network Layer.

This package owns the single outbound TCP connection used for a download.
"""

from .connection import Connection, open_connection

__all__ = ["Connection", "open_connection"]

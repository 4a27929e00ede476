"""A minimal TCP file download client."""

__version__ = "0.1.0"

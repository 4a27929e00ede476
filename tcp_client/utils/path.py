"""
Utilities for checking requested filenames before they reach the wire or the disk.
"""

import re

from tcp_client.exceptions import ValidationError

FILENAME_PATTERN = re.compile(r"[a-zA-Z0-9._-]+")


def is_valid_filename(filename: str) -> bool:
    """Returns True if the whole filename consists of whitelisted characters."""
    return FILENAME_PATTERN.fullmatch(filename) is not None


def validate_filename(filename: str) -> None:
    """
    Rejects filenames that could escape the working directory or break the
    request line.

    Only letters, digits, '.', '_' and '-' are allowed, and the name must not
    be empty.

    Raises:
        ValidationError: If the filename contains any other character.
    """
    if not is_valid_filename(filename):
        raise ValidationError(filename)

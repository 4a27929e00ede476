"""
Append-only log of terminal download outcomes.

Each run appends one timestamped line per outcome to the log file, in the
'YYYY/MM/DD HH:MM:SS message' layout.
"""

import logging
import os

from tcp_client.exceptions import LogFileError

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
LOG_FILE_MODE = 0o644


class OutcomeLogger:
    """
    Writes outcome lines to a log file opened once in append mode.

    Usage:
        with OutcomeLogger("tcp-client.log") as outcomes:
            outcomes.download_completed("test.txt")
    """

    def __init__(self, log_path: str | os.PathLike):
        """
        Opens the log file, creating it with mode 0644 if it does not exist.

        Raises:
            LogFileError: If the file cannot be opened for appending.
        """
        self.log_path = os.fspath(log_path)
        try:
            fd = os.open(
                self.log_path, os.O_CREAT | os.O_APPEND | os.O_WRONLY, LOG_FILE_MODE
            )
        except OSError as e:
            raise LogFileError(f"error creating log file: {e}") from e
        try:
            self._stream = os.fdopen(fd, "a", encoding="utf-8")
        except OSError as e:
            os.close(fd)
            raise LogFileError(f"error creating log file: {e}") from e

        self._handler = logging.StreamHandler(self._stream)
        self._handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))

        # Detached from the logging hierarchy so outcome lines never reach the
        # console handlers, and two instances never share a handler.
        self._logger = logging.Logger("tcp_client.outcome", level=logging.INFO)
        self._logger.addHandler(self._handler)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _write(self, level: int, message: str) -> None:
        if self._closed:
            log.debug(f"Outcome log already closed, dropping: {message}")
            return
        self._logger.log(level, message)
        log.debug(message)

    def invalid_filename(self, error: Exception) -> None:
        """Log a rejected filename."""
        self._write(logging.ERROR, f"invalid filename: {error}")

    def download_failed(self, error: Exception) -> None:
        """Log a failed download."""
        self._write(logging.ERROR, f"error downloading file: {error}")

    def download_completed(self, filename: str) -> None:
        """Log a completed download."""
        self._write(logging.INFO, f"downloaded file {filename}")

    def close(self) -> None:
        """Flush and close the log file. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._logger.removeHandler(self._handler)
        self._handler.flush()
        self._handler.close()
        self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

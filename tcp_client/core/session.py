"""
Runs one download end to end: connect, open the outcome log, validate the
filename, download, and record the outcome.
"""

import logging

from tcp_client.core.downloader import download_file
from tcp_client.exceptions import DownloadError, ValidationError
from tcp_client.models.config import ClientConfig
from tcp_client.models.stats import TransferStats
from tcp_client.net.connection import open_connection
from tcp_client.utils.outcome_logger import OutcomeLogger
from tcp_client.utils.path import validate_filename

log = logging.getLogger(__name__)


class DownloadSession:
    """Owns the connection and the outcome log for a single run."""

    def __init__(self, config: ClientConfig):
        self.config = config

    async def run(self, filename: str) -> TransferStats:
        """
        Downloads `filename` from the configured server.

        Connection and log file failures are raised before anything is logged.
        Validation and download failures are written to the outcome log and
        then re-raised.

        Raises:
            ConnectError: The server could not be reached.
            LogFileError: The outcome log could not be opened.
            ValidationError: The filename was rejected.
            DownloadError: The transfer failed.
        """
        async with open_connection(self.config) as connection:
            with OutcomeLogger(self.config.log_filename) as outcomes:
                try:
                    validate_filename(filename)
                except ValidationError as e:
                    outcomes.invalid_filename(e)
                    raise

                log.debug(f"Requesting '{filename}' from {self.config.address}")
                try:
                    stats = await download_file(connection, filename, self.config)
                except DownloadError as e:
                    outcomes.download_failed(e)
                    raise

                outcomes.download_completed(filename)
                return stats

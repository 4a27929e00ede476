"""
Dataclass for tracking the statistics of a single transfer.
"""

import time
from dataclasses import dataclass, field


@dataclass
class TransferStats:
    """Tracks bytes and chunks received during one download."""

    filename: str
    bytes_received: int = 0
    chunks_received: int = 0
    started_at: float = field(default_factory=time.monotonic, repr=False)
    finished_at: float | None = field(default=None, repr=False)

    def record_chunk(self, size: int) -> None:
        """Accounts for one chunk written to the output file."""
        self.bytes_received += size
        self.chunks_received += 1

    def finish(self) -> None:
        self.finished_at = time.monotonic()

    @property
    def duration_s(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at

    @property
    def avg_speed_bps(self) -> float:
        """Average transfer speed in bytes per second."""
        duration = self.duration_s
        if duration <= 0:
            return 0.0
        return self.bytes_received / duration

"""
Dataclass for tracking download run statistics.
"""

import time
from dataclasses import dataclass, field


@dataclass
class RunStats:
    """Tracks statistics for a single run of the sequence controller."""

    files_downloaded: int = 0
    files_failed: int = 0
    total_size_downloaded: int = 0
    last_saved_counter: int | None = None
    last_file_name: str | None = None
    downloaded_files: list[str] = field(default_factory=list)
    _start_time: float = field(default=0.0, repr=False)
    _end_time: float | None = field(default=None, repr=False)

    def __post_init__(self):
        self._start_time = time.monotonic()

    def record_success(self, file_name: str, size: int) -> None:
        self.files_downloaded += 1
        self.total_size_downloaded += size
        self.downloaded_files.append(file_name)

    def record_failure(self) -> None:
        self.files_failed += 1

    def finish(self) -> None:
        """Freezes the run duration."""
        self._end_time = time.monotonic()

    @property
    def duration(self) -> float:
        end = self._end_time if self._end_time is not None else time.monotonic()
        return end - self._start_time

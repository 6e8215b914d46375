"""
Persists the number of the last successfully downloaded file so later runs can
resume where the previous one stopped.
"""

import contextlib
import logging
import os
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from satdownload.exceptions import CounterLockedError, CounterPersistenceError

log = logging.getLogger(__name__)

DEFAULT_COUNTER = 1


class CounterStore:
    """
    Reads and writes the single-line counter file.

    The file holds the sequence number of the last successful download; `load`
    returns the number to try next.
    """

    def __init__(self, counter_file: Path, enabled: bool = True):
        """
        Args:
            counter_file: Location of the counter file.
            enabled: When False, `save` never touches the file.
        """
        self.counter_file = Path(counter_file)
        self.enabled = enabled
        self._lock = FileLock(f"{self.counter_file}.lock", timeout=0)

    def load(self) -> int:
        """Returns the next file number to try. Falls back to 1, never raises."""
        try:
            with open(self.counter_file, encoding="utf-8") as f:
                line = f.readline().strip()
            next_counter = int(line) + 1
        except FileNotFoundError:
            log.info(f"Could not find counter file {self.counter_file}")
            next_counter = 0
        except ValueError:
            log.warning(f"Invalid number in counter file {self.counter_file}")
            next_counter = 0
        except OSError as e:
            log.error(f"[red]Error reading counter file {self.counter_file}: {e}[/red]")
            next_counter = 0

        if next_counter < DEFAULT_COUNTER:
            log.info(f"Using default counter value of {DEFAULT_COUNTER}")
            return DEFAULT_COUNTER
        log.debug(f"Resuming from file number {next_counter}")
        return next_counter

    def save(self, counter: int) -> bool:
        """
        Overwrites the counter file with `counter`.

        Returns:
            True if the value was written, False if saving is disabled or failed.
        """
        if not self.enabled:
            log.debug(f"Counter saving disabled; not recording {counter}")
            return False
        try:
            self._write(counter)
        except CounterPersistenceError as e:
            log.error(f"[red]{e}[/red]")
            return False
        log.debug(f"Saved counter {counter} to {self.counter_file}")
        return True

    def _write(self, counter: int) -> None:
        tmp_path = self.counter_file.with_name(self.counter_file.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(f"{counter}\n")
            os.replace(tmp_path, self.counter_file)
        except OSError as e:
            raise CounterPersistenceError(
                f"Error writing to counter file {self.counter_file}: {e}"
            ) from e

    @contextlib.contextmanager
    def lock(self) -> Iterator[None]:
        """
        Holds an advisory lock on the counter file for the duration of a run.

        Raises:
            CounterLockedError: If another process already holds the lock.
        """
        try:
            self._lock.acquire()
        except Timeout:
            raise CounterLockedError(
                f"Counter file {self.counter_file} is in use by another run."
            ) from None
        try:
            yield
        finally:
            self._lock.release()

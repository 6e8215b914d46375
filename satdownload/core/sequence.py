"""
The orchestrator that walks the numbered file sequence for one date.

For each file it logs in, resolves the file to a download URL, transfers it and
then decides whether to record progress and move on to the next number.
"""

import contextlib
import logging
from dataclasses import dataclass
from typing import Optional

from satdownload.api.client import ScoresDownloadClient
from satdownload.exceptions import FileNotAvailableError, SatDownloadError
from satdownload.models.config import RunConfig
from satdownload.models.stats import RunStats
from satdownload.storage.counter import CounterStore
from satdownload.transfer.downloader import Downloader
from satdownload.utils.formatting import build_file_name

log = logging.getLogger(__name__)


@dataclass
class SequenceState:
    """Mutable position of a run within the file sequence."""

    counter: int
    file_name: str
    download_consecutive: bool
    explicit_file_name: bool = False


class SequenceController:
    """Drives login, resolve and transfer for consecutive score files."""

    def __init__(
        self,
        config: RunConfig,
        api_client: ScoresDownloadClient,
        counter_store: Optional[CounterStore] = None,
        downloader: Optional[Downloader] = None,
        stats: Optional[RunStats] = None,
    ):
        self.config = config
        self.api_client = api_client
        self.stats = stats or RunStats()
        self.counter_store = counter_store or CounterStore(
            config.counter_file, enabled=config.save_counter
        )
        self.downloader = downloader or Downloader(api_client, self.stats)

    def file_name_for(self, counter: int) -> str:
        return build_file_name(
            self.config.org_id,
            self.config.date_string,
            counter,
            self.config.file_num_padding,
            self.config.file_extension,
        )

    def initial_state(
        self, file_num: Optional[int] = None, file_name: Optional[str] = None
    ) -> SequenceState:
        """
        Determines where the run starts.

        An explicit `file_name` downloads exactly that file with continuation
        off. Otherwise the run starts at `file_num`, or at the number after the
        one recorded in the counter file.
        """
        if file_name:
            return SequenceState(
                counter=file_num if file_num is not None else 0,
                file_name=file_name,
                download_consecutive=False,
                explicit_file_name=True,
            )

        counter = file_num if file_num is not None else self.counter_store.load()
        return SequenceState(
            counter=counter,
            file_name=self.file_name_for(counter),
            download_consecutive=self.config.download_consecutive_files,
        )

    async def fetch(self, file_name: str) -> bool:
        """Authenticates, resolves and transfers one file. Never raises for expected failures."""
        log.info(f"Getting download token for {file_name}")
        try:
            token = await self.api_client.login(
                self.config.username, self.config.password
            )
            file_info = await self.api_client.resolve_file(token, file_name)
        except FileNotAvailableError as e:
            log.info(f"{e}; no more files to download")
            return False
        except SatDownloadError as e:
            log.error(f"[red]{e}[/red]")
            return False

        return await self.downloader.transfer(file_info, self.config.local_file_path)

    def advance(self, state: SequenceState) -> bool:
        """
        Records a successful download and moves to the next file.

        Returns:
            True if another file should be attempted.
        """
        if not state.download_consecutive or state.counter <= 0:
            return False

        if self.counter_store.save(state.counter):
            self.stats.last_saved_counter = state.counter

        state.counter += 1
        state.file_name = self.file_name_for(state.counter)
        return True

    async def run(
        self, file_num: Optional[int] = None, file_name: Optional[str] = None
    ) -> RunStats:
        """
        Downloads files until the sequence ends or continuation is off.

        Args:
            file_num: Starting file number instead of the counter file.
            file_name: Exact file to download; disables continuation.

        Returns:
            Statistics for the run.

        Raises:
            CounterLockedError: If another run holds the counter file.
        """
        uses_counter_file = self.counter_store.enabled and not file_name
        run_lock = (
            self.counter_store.lock() if uses_counter_file else contextlib.nullcontext()
        )

        with run_lock:
            state = self.initial_state(file_num, file_name)
            try:
                while True:
                    self.stats.last_file_name = state.file_name
                    if not await self.fetch(state.file_name):
                        self.stats.record_failure()
                        break
                    if not self.advance(state):
                        break
            finally:
                self.stats.finish()

        log.info("Done.")
        return self.stats

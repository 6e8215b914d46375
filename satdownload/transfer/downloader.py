"""
Handles the low-level streaming of resolved score files to local storage.
"""

import asyncio
import logging
from pathlib import Path

import aiofiles
import aiohttp

from satdownload.api.client import ScoresDownloadClient
from satdownload.exceptions import TransferError
from satdownload.models.file_info import FileInfo
from satdownload.models.stats import RunStats
from satdownload.utils.path import create_dir, local_file_name

log = logging.getLogger(__name__)


class Downloader:
    """Streams a single resolved file to disk. Never retries."""

    BUFFER_SIZE = 2048

    def __init__(self, api_client: ScoresDownloadClient, stats: RunStats | None = None):
        self._api_client = api_client
        self.stats = stats

    async def transfer(self, file_info: FileInfo, destination_dir: Path) -> bool:
        """
        Downloads `file_info` into `destination_dir`.

        Returns:
            True only if the whole stream was read and written. Failures are
            logged and reported as False; a partial file may remain on disk.
        """
        log.info(f"Downloading file: {file_info.file_name}")
        destination = Path(destination_dir) / local_file_name(file_info.file_name)
        try:
            size = await self._stream_to_file(file_info.file_url, destination)
        except TransferError as e:
            log.error(f"[red]Error: {e}[/red]")
            return False
        except Exception as e:
            log.error(f"[red]Unexpected error downloading {destination.name}: {e}[/red]")
            log.debug("Full traceback:", exc_info=True)
            return False

        log.info(f"File downloaded to: {destination}")
        if self.stats is not None:
            self.stats.record_success(destination.name, size)
        return True

    async def _stream_to_file(self, url: str, destination: Path) -> int:
        """Writes the body at `url` to `destination`, returning the byte count."""
        try:
            create_dir(destination.parent)
            session = await self._api_client.get_session()
            async with session.get(
                url, headers={"Accept": "application/octet-stream"}
            ) as response:
                if not 200 <= response.status < 300:
                    raise TransferError(
                        f"Download failed : HTTP error code : {response.status}"
                    )

                bytes_written = 0
                async with aiofiles.open(destination, "wb") as f:
                    async for chunk in response.content.iter_chunked(self.BUFFER_SIZE):
                        await f.write(chunk)
                        bytes_written += len(chunk)
                return bytes_written
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise TransferError(f"Transfer of {destination.name} failed: {e}") from e

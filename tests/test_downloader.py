"""
Tests for satdownload.transfer.downloader.
"""

import aiohttp
import pytest

from satdownload.api.client import ScoresDownloadClient
from satdownload.models.file_info import FileInfo
from satdownload.models.stats import RunStats
from satdownload.transfer.downloader import Downloader

from .conftest import URL_ROOT, make_response, make_session

FILE_INFO = FileInfo(
    file_name="ABC123_20240115_000001.txt",
    file_url="https://cdn.example.com/download?sig=abc",
)


def make_downloader(response, stats=None):
    session = make_session(get_responses=[response])
    client = ScoresDownloadClient(URL_ROOT, session=session)
    return Downloader(client, stats), session


class TestTransfer:
    @pytest.mark.asyncio
    async def test_streams_all_chunks_to_file(self, tmp_path):
        stats = RunStats()
        downloader, session = make_downloader(
            make_response(200, chunks=[b"line one\n", b"line two\n"]), stats
        )

        assert await downloader.transfer(FILE_INFO, tmp_path) is True

        written = tmp_path / "ABC123_20240115_000001.txt"
        assert written.read_bytes() == b"line one\nline two\n"
        assert stats.files_downloaded == 1
        assert stats.total_size_downloaded == 18
        call_args = session.get.call_args
        assert call_args[0][0] == FILE_INFO.file_url
        assert call_args[1]["headers"]["Accept"] == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_reads_in_bounded_chunks(self, tmp_path):
        response = make_response(200, chunks=[b"x"])
        downloader, _ = make_downloader(response)

        await downloader.transfer(FILE_INFO, tmp_path)

        response.content.iter_chunked.assert_called_once_with(Downloader.BUFFER_SIZE)

    @pytest.mark.asyncio
    async def test_zero_byte_body_is_a_successful_transfer(self, tmp_path):
        downloader, _ = make_downloader(make_response(200, chunks=[]))

        assert await downloader.transfer(FILE_INFO, tmp_path) is True

        written = tmp_path / "ABC123_20240115_000001.txt"
        assert written.exists()
        assert written.read_bytes() == b""

    @pytest.mark.asyncio
    async def test_creates_destination_directory(self, tmp_path):
        destination = tmp_path / "nested" / "inbound"
        downloader, _ = make_downloader(make_response(200, chunks=[b"data"]))

        assert await downloader.transfer(FILE_INFO, destination) is True
        assert (destination / "ABC123_20240115_000001.txt").read_bytes() == b"data"

    @pytest.mark.asyncio
    async def test_error_status_returns_false(self, tmp_path):
        stats = RunStats()
        downloader, _ = make_downloader(make_response(403), stats)

        assert await downloader.transfer(FILE_INFO, tmp_path) is False
        assert stats.files_downloaded == 0

    @pytest.mark.asyncio
    async def test_interrupted_stream_returns_false_and_leaves_partial_file(
        self, tmp_path
    ):
        response = make_response(
            200,
            chunks=[b"partial"],
            stream_error=aiohttp.ClientPayloadError("connection reset"),
        )
        downloader, _ = make_downloader(response)

        assert await downloader.transfer(FILE_INFO, tmp_path) is False
        assert (tmp_path / "ABC123_20240115_000001.txt").read_bytes() == b"partial"

    @pytest.mark.asyncio
    async def test_connection_error_returns_false(self, tmp_path):
        session = make_session()
        session.get.side_effect = aiohttp.ClientConnectionError("unreachable")
        downloader = Downloader(ScoresDownloadClient(URL_ROOT, session=session))

        assert await downloader.transfer(FILE_INFO, tmp_path) is False

    @pytest.mark.asyncio
    async def test_local_write_error_returns_false(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way")
        downloader, _ = make_downloader(make_response(200, chunks=[b"data"]))

        assert await downloader.transfer(FILE_INFO, blocker) is False

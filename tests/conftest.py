"""
Shared fixtures and aiohttp mocking helpers.
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from satdownload.models.config import RunConfig

URL_ROOT = "https://scores.example.com"


async def _aiter(chunks, error=None):
    for chunk in chunks:
        yield chunk
    if error is not None:
        raise error


def make_response(
    status=200, json_body=None, json_error=None, chunks=(), stream_error=None
):
    """Builds a mock aiohttp response usable as an async context manager."""
    response = AsyncMock()
    response.status = status
    if json_error is not None:
        response.json = AsyncMock(side_effect=json_error)
    else:
        response.json = AsyncMock(return_value=json_body)
    response.content = MagicMock()
    response.content.iter_chunked = MagicMock(
        return_value=_aiter(list(chunks), stream_error)
    )
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


def make_session(request_responses=(), get_responses=()):
    """Builds a mock aiohttp session returning the given responses in order."""
    session = MagicMock()
    session.closed = False
    session.request = MagicMock(side_effect=list(request_responses))
    session.get = MagicMock(side_effect=list(get_responses))
    session.close = AsyncMock()
    return session


@pytest.fixture
def make_config(tmp_path: Path):
    """Factory for RunConfig objects rooted in a temporary directory."""

    def _make(**overrides) -> RunConfig:
        values = {
            "username": "user",
            "password": "secret",
            "org_id": "ABC123",
            "date_string": "20240115",
            "local_file_path": tmp_path / "inbound",
            "counter_file": tmp_path / "SATdownload.counter",
            "scoredwnld_url_root": URL_ROOT,
        }
        values.update(overrides)
        return RunConfig(**values)

    return _make


@pytest.fixture
def properties_file(tmp_path: Path):
    """Writes a properties config file and returns its path."""

    def _write(text: str) -> Path:
        path = tmp_path / "config.properties"
        path.write_text(text, encoding="utf-8")
        return path

    return _write

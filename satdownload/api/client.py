"""
Async client for the College Board PAScoresDwnld web service.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from satdownload.exceptions import FileNotAvailableError, ResolutionError
from satdownload.models.file_info import FileInfo

from .auth import ScoresAuthenticator

log = logging.getLogger(__name__)


class ScoresDownloadClient:
    """
    Client for the scores download JSON API.

    A single aiohttp session is shared by the API calls and the file transfers
    of a run. Certificate and hostname verification are on unless
    `insecure_skip_verify` is set.
    """

    SERVICE_PATH = "pascoredwnld"
    TIMEOUT = aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90)

    def __init__(
        self,
        url_root: str,
        insecure_skip_verify: bool = False,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initializes the API client.

        Args:
            url_root: Scheme and host of the service, e.g. https://host.
            insecure_skip_verify: Trust any server certificate and hostname.
            session: An existing session to use instead of creating one.
        """
        self.url_root = url_root.rstrip("/")
        self.insecure_skip_verify = insecure_skip_verify

        self._session = session
        self._owns_session = session is None
        self._authenticator = ScoresAuthenticator(self)

    @property
    def authenticator(self) -> ScoresAuthenticator:
        """Provides access to the authentication helper."""
        return self._authenticator

    async def get_session(self) -> aiohttp.ClientSession:
        """Returns the active session, creating it on first use."""
        if self._session is None or self._session.closed:
            if self.insecure_skip_verify:
                log.warning(
                    "[yellow]TLS certificate and hostname verification is "
                    "DISABLED for this run.[/yellow]"
                )
            connector = aiohttp.TCPConnector(
                ssl=False if self.insecure_skip_verify else True,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector, timeout=self.TIMEOUT
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def api_call(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Makes a JSON API call and returns the decoded body.

        Raises:
            aiohttp.ClientResponseError: For any non-2xx status.
            ValueError: If the body is not valid JSON.
        """
        session = await self.get_session()
        url = f"{self.url_root}/{self.SERVICE_PATH}/{endpoint}"

        async with session.request(
            method,
            url,
            params=params,
            json=json,
            headers={"Accept": "application/json"},
        ) as r:
            if not 200 <= r.status < 300:
                log.debug(f"API call to {endpoint} returned HTTP {r.status}")
                raise aiohttp.ClientResponseError(
                    r.request_info,
                    (),
                    status=r.status,
                    message=f"Failed : HTTP error code : {r.status}",
                )
            return await r.json(content_type=None)

    async def login(self, username: str, password: str) -> str:
        """Obtains a fresh session token."""
        return await self._authenticator.authenticate(username, password)

    async def resolve_file(self, token: str, file_name: str) -> FileInfo:
        """
        Exchanges a session token and file name for a download URL.

        Raises:
            FileNotAvailableError: If the service answers 404.
            ResolutionError: For any other failure.
        """
        try:
            body = await self.api_call(
                "GET", "file", params={"tok": token, "filename": file_name}
            )
        except aiohttp.ClientResponseError as e:
            if e.status == 404:
                raise FileNotAvailableError(
                    f"File {file_name} is not available", status=e.status
                ) from e
            raise ResolutionError(
                f"Getting download link for {file_name} failed : "
                f"HTTP error code : {e.status}",
                status=e.status,
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ResolutionError(
                f"Getting download link for {file_name} failed: {e}"
            ) from e
        except ValueError as e:
            raise ResolutionError(f"Malformed file response for {file_name}: {e}") from e

        file_url = body.get("fileUrl") if isinstance(body, dict) else None
        if not file_url:
            raise ResolutionError(f"File response for {file_name} has no fileUrl")

        log.debug(f"Resolved {file_name} to a download URL")
        return FileInfo(file_name=file_name, file_url=str(file_url))

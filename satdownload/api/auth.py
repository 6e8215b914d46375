"""
Handles authentication with the scores download service.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

import aiohttp

from satdownload.exceptions import AuthenticationError

if TYPE_CHECKING:
    from .client import ScoresDownloadClient

log = logging.getLogger(__name__)


class ScoresAuthenticator:
    """
    Manages the login flow for the scores download client.
    """

    def __init__(self, api_client: "ScoresDownloadClient"):
        """
        Initializes the authenticator.

        Args:
            api_client: A reference to the main ScoresDownloadClient instance.
        """
        self._api_client = api_client

    async def authenticate(self, username: str, password: str) -> str:
        """
        Logs in with a username and password.

        Tokens are short lived, so callers request a new one for every file.

        Args:
            username: The account user name.
            password: The account password.

        Returns:
            The session token.

        Raises:
            AuthenticationError: On a non-2xx status, a transport failure, or a
            response without a token.
        """
        log.debug(f"Requesting session token for {username}")
        payload = {"username": username, "password": password}

        try:
            body = await self._api_client.api_call("POST", "login", json=payload)
        except aiohttp.ClientResponseError as e:
            raise AuthenticationError(f"Login failed : HTTP error code : {e.status}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AuthenticationError(f"Login request failed: {e}") from e
        except ValueError as e:
            raise AuthenticationError(f"Malformed login response: {e}") from e

        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            raise AuthenticationError("Login response did not contain a token.")
        return str(token)

"""
HTTP client for communicating with the Users service.

This module asks the Users service whether a user exists. It keeps the two
possible failures apart: "the user does not exist" is a False return value,
while "the Users service could not answer" is a UserServiceUnavailable error.
"""
import asyncio
import logging
import os
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..schemas import UserExistence

logger = logging.getLogger(__name__)

USERS_SERVICE_URL = os.getenv("USERS_SERVICE_URL", "http://localhost:8080")
TIMEOUT = float(os.getenv("USERS_SERVICE_TIMEOUT", "5.0"))  # seconds


class UserServiceUnavailable(Exception):
    """Raised when the existence of a user cannot be determined."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(f"Cannot verify user '{user_id}': {reason}")
        self.user_id = user_id
        self.reason = reason


class UsersClient:
    """
    Existence-check client for the Users service.

    Args:
        base_url: Base address of the Users service
        timeout: Upper bound, in seconds, for a whole existence check
        transport: Optional httpx transport (used to route calls in-process or to mock them)
    """

    def __init__(
        self,
        base_url: str = USERS_SERVICE_URL,
        timeout: float = TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def user_exists(self, user_id: str) -> bool:
        """
        Check if a user exists in the Users service.

        Args:
            user_id: The identifier of the user to validate

        Returns:
            True if the user exists, False if it does not

        Raises:
            UserServiceUnavailable: On network errors, timeouts, unexpected
                status codes or undecodable replies
        """
        try:
            exists = await asyncio.wait_for(self._check(user_id), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Users service timed out checking user {user_id}")
            raise UserServiceUnavailable(user_id, f"no reply within {self.timeout}s") from None
        except httpx.HTTPError as e:
            logger.warning(f"Users service unreachable checking user {user_id}: {e}")
            raise UserServiceUnavailable(user_id, str(e) or type(e).__name__) from e
        except UserServiceUnavailable as e:
            logger.warning(str(e))
            raise
        logger.info(f"User {user_id} exists: {exists}")
        return exists

    async def _check(self, user_id: str) -> bool:
        url = f"{self.base_url}/users/exists/{quote(user_id, safe='')}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(url)

        if response.status_code == 400:
            # Not a well-formed identifier, so no user can have it
            return False
        if response.status_code != 200:
            raise UserServiceUnavailable(user_id, f"unexpected status {response.status_code}")

        try:
            result = UserExistence.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise UserServiceUnavailable(user_id, f"undecodable reply: {e}") from e
        if result.id != user_id:
            raise UserServiceUnavailable(user_id, f"reply is for user '{result.id}'")
        return result.exists

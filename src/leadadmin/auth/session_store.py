"""
Client-side authentication session.

The session is three keys in an async key/value store: the bearer token, its
absolute expiry (epoch milliseconds, stored as a string) and a JSON-serialized
user profile. Expiry is enforced when the token is read, there is no background
timer. Reading an expired token clears the whole session.

When no storage is configured (e.g. server-side rendering or a batch job with
no interactive user) every operation is a no-op that returns None/False.
"""
import json
import logging
import re
import time
from typing import Any, Callable, Optional

from .storage import AsyncKeyValue

logger = logging.getLogger(__name__)

TOKEN_KEY = 'adminToken'
USER_KEY = 'adminUser'
TOKEN_EXPIRY_KEY = 'tokenExpiry'

DEFAULT_TTL = '7d'
MS_PER_DAY = 24 * 60 * 60 * 1000

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def parse_ttl_days(ttl: str) -> int:
    """
    Parse a day-count ttl string such as "7d" into milliseconds.

    Only the leading integer is used. Anything unparsable yields 0 so the token
    expires immediately instead of living forever.
    """
    match = _LEADING_INT.match(ttl) if isinstance(ttl, str) else None
    if not match:
        logger.warning(f"Could not parse token ttl {ttl!r}, treating it as already expired")
        return 0
    return int(match.group(1)) * MS_PER_DAY


def _now_ms() -> int:
    return int(time.time() * 1000)


def _mask(token: str) -> str:
    return f"{token[:6]}...{token[-4:]}" if len(token) > 12 else token[:3] + "..."


class SessionStore:
    """Persists one admin session (token, expiry and cached user profile)."""

    def __init__(
        self,
        storage: Optional[AsyncKeyValue],
        clock: Callable[[], int] = _now_ms,
    ):
        """
        Args:
            storage: Backend to persist into, or None when no persistent storage
                is available in the current context.
            clock: Returns the current time in epoch milliseconds.
        """
        self._storage = storage
        self._clock = clock

    @property
    def has_storage(self) -> bool:
        return self._storage is not None

    async def set_token(self, token: str, ttl: str = DEFAULT_TTL) -> None:
        if self._storage is None:
            return

        expires_at = self._clock() + parse_ttl_days(ttl)
        await self._storage.put(TOKEN_KEY, token)
        await self._storage.put(TOKEN_EXPIRY_KEY, str(expires_at))
        logger.debug(f"Stored token {_mask(token)} expiring at {expires_at}")

    async def get_token(self) -> Optional[str]:
        if self._storage is None:
            return None

        token = await self._storage.get(TOKEN_KEY)
        if not token:
            return None

        expiry = await self._storage.get(TOKEN_EXPIRY_KEY)
        try:
            expires_at = int(expiry) if expiry is not None else None
        except ValueError:
            logger.warning(f"Stored token expiry {expiry!r} is not a timestamp")
            expires_at = None

        if expires_at is None or self._clock() > expires_at:
            logger.info("Session token expired or has no valid expiry, clearing session")
            await self.clear()
            return None

        return token

    async def set_user(self, profile: Any) -> None:
        if self._storage is None:
            return
        await self._storage.put(USER_KEY, json.dumps(profile))

    async def get_user(self) -> Optional[Any]:
        if self._storage is None:
            return None

        # A profile without a live token is not a session
        if await self.get_token() is None:
            return None

        user_data = await self._storage.get(USER_KEY)
        if not user_data:
            return None

        try:
            return json.loads(user_data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Failed to parse stored user data: {e}")
            return None

    async def clear(self) -> None:
        if self._storage is None:
            return

        # Token goes first: once it is gone the rest of the session is ignored
        await self._storage.delete(TOKEN_KEY)
        await self._storage.delete(USER_KEY)
        await self._storage.delete(TOKEN_EXPIRY_KEY)
        logger.debug("Session cleared")

    async def is_authenticated(self) -> bool:
        return await self.get_token() is not None

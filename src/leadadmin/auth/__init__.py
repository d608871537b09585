"""Client-side admin session: token lifecycle and its storage backends."""

from .session_store import SessionStore, parse_ttl_days, TOKEN_KEY, USER_KEY, TOKEN_EXPIRY_KEY
from .storage import (
    AsyncKeyValue,
    InMemoryStorage,
    RedisStorage,
    EncryptedDiskStorage,
    StorageError,
    create_storage,
)

__all__ = [
    "SessionStore",
    "parse_ttl_days",
    "TOKEN_KEY",
    "USER_KEY",
    "TOKEN_EXPIRY_KEY",
    "AsyncKeyValue",
    "InMemoryStorage",
    "RedisStorage",
    "EncryptedDiskStorage",
    "StorageError",
    "create_storage",
]

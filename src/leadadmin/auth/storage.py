import os
import hashlib
import logging
from typing import Optional, Protocol

import redis.asyncio as aioredis
from redis import RedisError

from .redis_client import get_redis_client

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when a storage backend cannot complete an operation."""


class AsyncKeyValue(Protocol):
    """Key/value interface the session store persists through."""

    async def get(self, key: str) -> Optional[str]: ...
    async def put(self, key: str, value: str) -> None: ...
    async def delete(self, key: str) -> bool: ...


class InMemoryStorage:
    """Process-local storage. Suitable for tests and short-lived scripts."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class RedisStorage:
    """Redis-based session storage."""

    def __init__(
        self,
        redis_key_prefix: str = "leadadmin:session",
        redis_client: Optional[aioredis.Redis] = None,
    ):
        self._redis_key_prefix = redis_key_prefix
        self._client = redis_client or get_redis_client()

    def _make_key(self, key: str) -> str:
        return f"{self._redis_key_prefix}:{key}"

    def _handle_redis_error(self, operation: str, key: str, error: Exception) -> None:
        logger.error(f"Redis error during {operation} for key {self._make_key(key)}: {error}")
        raise StorageError(f"Session storage error during {operation}") from error

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self._client.get(self._make_key(key))
        except RedisError as e:
            self._handle_redis_error("read", key, e)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def put(self, key: str, value: str) -> None:
        try:
            await self._client.set(self._make_key(key), value)
        except RedisError as e:
            self._handle_redis_error("write", key, e)

    async def delete(self, key: str) -> bool:
        try:
            result = await self._client.delete(self._make_key(key))
        except RedisError as e:
            self._handle_redis_error("delete", key, e)
        return result > 0


class EncryptedDiskStorage:
    """Encrypted disk-based session storage, one file per key."""

    def __init__(
        self,
        storage_path: str,
        key_prefix: str = "leadadmin:session",
        encryption_key_env: str = "SESSION_ENCRYPTION_KEY",
    ):
        self._storage_path = storage_path
        self._key_prefix = key_prefix
        self._encryption_key = os.getenv(encryption_key_env)

        if not self._encryption_key:
            raise ValueError(f"Encryption key not found in environment variable {encryption_key_env}")

        from cryptography.fernet import Fernet
        self._fernet = Fernet(self._encryption_key.encode())

        os.makedirs(storage_path, exist_ok=True, mode=0o700)

    def _get_file_path(self, key: str) -> str:
        safe_key = hashlib.sha256(f"{self._key_prefix}:{key}".encode()).hexdigest()
        return os.path.join(self._storage_path, f"{safe_key}.enc")

    async def get(self, key: str) -> Optional[str]:
        from cryptography.fernet import InvalidToken

        try:
            with open(self._get_file_path(key), 'rb') as f:
                encrypted = f.read()
        except FileNotFoundError:
            return None

        try:
            return self._fernet.decrypt(encrypted).decode('utf-8')
        except InvalidToken as e:
            logger.error(f"Could not decrypt stored value for key '{key}'")
            raise StorageError(f"Corrupted session data for key '{key}'") from e

    async def put(self, key: str, value: str) -> None:
        file_path = self._get_file_path(key)
        encrypted = self._fernet.encrypt(value.encode('utf-8'))
        with open(file_path, 'wb') as f:
            f.write(encrypted)
        os.chmod(file_path, 0o600)

    async def delete(self, key: str) -> bool:
        try:
            os.remove(self._get_file_path(key))
            return True
        except FileNotFoundError:
            return False


def create_storage(
    storage_type: str = "memory",
    **kwargs
) -> Optional[AsyncKeyValue]:
    """
    Create the storage backend for the session store.

    Returns None for storage type "none", i.e. a non-interactive context in which
    the session store turns every operation into a no-op.
    """
    if storage_type == "none":
        logger.info("Session storage disabled, session operations will be no-ops")
        return None

    if storage_type == "memory":
        logger.warning("Using in-memory session storage - sessions are lost when the process exits")
        return InMemoryStorage()

    if storage_type == "redis":
        return RedisStorage(
            redis_key_prefix=kwargs.get("key_prefix", "leadadmin:session"),
            redis_client=kwargs.get("redis_client"),
        )

    if storage_type == "encrypted_disk":
        storage_path = kwargs.get("storage_path")
        if not storage_path:
            raise ValueError("storage_path must be provided for encrypted_disk storage")
        return EncryptedDiskStorage(
            storage_path,
            key_prefix=kwargs.get("key_prefix", "leadadmin:session"),
            encryption_key_env=kwargs.get("encryption_key_env", "SESSION_ENCRYPTION_KEY"),
        )

    raise ValueError(f"Unknown session storage type '{storage_type}'")

"""
Admin API Client Singleton

This module provides a singleton admin API client for the dashboard. The client
is initialized once (storage backend, session store, HTTP dispatcher and the
resource wrappers) and can be accessed via get_admin_client().
"""

import logging
from typing import Optional

from ..auth.redis_client import get_redis_client
from ..auth.session_store import SessionStore
from ..auth.storage import create_storage
from ..config import ApiEndpoints, ClientSettings, load_settings
from .api_client import ApiClient, RedirectCallback
from .resources import AuthResource, DashboardResource, LeadsResource, TestimonialsResource, UsersResource

logger = logging.getLogger(__name__)


class AdminClient:
    """Bundle of the dispatcher and the resource wrappers sharing one session."""

    def __init__(self, api: ApiClient, endpoints: ApiEndpoints):
        self.api = api
        self.endpoints = endpoints
        self.auth = AuthResource(api, endpoints)
        self.leads = LeadsResource(api, endpoints)
        self.users = UsersResource(api, endpoints)
        self.testimonials = TestimonialsResource(api, endpoints)
        self.dashboard = DashboardResource(api, endpoints)

    @property
    def session(self) -> SessionStore:
        return self.api.session_store


def build_admin_client(
    settings: ClientSettings,
    on_unauthenticated: Optional[RedirectCallback] = None,
) -> AdminClient:
    """
    Wire an AdminClient from settings.

    Raises:
        ValueError: If the configured session storage cannot be created.
    """
    storage_kwargs = {
        "key_prefix": settings.session_key_prefix,
        "storage_path": settings.session_storage_path,
    }
    if settings.session_storage == "redis":
        storage_kwargs["redis_client"] = get_redis_client(settings.redis_url)

    storage = create_storage(settings.session_storage, **storage_kwargs)
    session_store = SessionStore(storage)
    api = ApiClient(
        session_store,
        on_unauthenticated=on_unauthenticated,
        login_url=settings.login_url,
    )
    return AdminClient(api, ApiEndpoints(settings.api_url))


class AdminClientManager:
    """
    Manages a singleton instance of the admin API client.

    This ensures that:
    1. Storage and HTTP session are created once
    2. The same session store is shared by every caller in the process
    3. Shutdown closes the HTTP session centrally
    """

    _instance: Optional['AdminClientManager'] = None
    _client: Optional[AdminClient] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def initialize(
        self,
        settings: Optional[ClientSettings] = None,
        on_unauthenticated: Optional[RedirectCallback] = None,
    ) -> None:
        """
        Initialize the admin client.

        Args:
            settings: Client settings, loaded from the environment when omitted
            on_unauthenticated: Redirect callback for interactive contexts

        Raises:
            ValueError: If initialization fails or configuration is invalid
        """
        if self._initialized:
            logger.warning('Admin client already initialized, skipping...')
            return

        try:
            logger.info('Initializing admin API client...')
            self._client = build_admin_client(settings or load_settings(), on_unauthenticated)
            self._initialized = True
            logger.info('Admin API client initialized successfully')
        except Exception as e:
            logger.error(f'Failed to initialize admin API client: {e}')
            raise ValueError(f'Admin client initialization failed: {e}') from e

    def get_client(self) -> AdminClient:
        """
        Get the singleton admin client instance.

        Raises:
            RuntimeError: If the client hasn't been initialized
        """
        if not self._initialized or self._client is None:
            raise RuntimeError(
                'Admin client not initialized. Call initialize_admin_client() first.'
            )
        return self._client

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def close(self) -> None:
        """Clean up resources during shutdown."""
        if self._client is not None:
            await self._client.api.close()

        self._initialized = False
        self._client = None
        logger.info('Admin client cleaned up')


# Singleton instance
_admin_manager = AdminClientManager()


def initialize_admin_client(
    settings: Optional[ClientSettings] = None,
    on_unauthenticated: Optional[RedirectCallback] = None,
) -> None:
    _admin_manager.initialize(settings=settings, on_unauthenticated=on_unauthenticated)


def get_admin_client() -> AdminClient:
    """
    Get the singleton admin client.

    Example:
        >>> initialize_admin_client()
        >>> client = get_admin_client()
        >>> result = await client.leads.list()
    """
    return _admin_manager.get_client()


async def close_admin_client() -> None:
    await _admin_manager.close()


def is_admin_client_initialized() -> bool:
    return _admin_manager.is_initialized

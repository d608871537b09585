"""
Tests for the admin client singleton

Run with: pytest test/client/test_manager.py -v
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from leadadmin.client.manager import (
    AdminClient,
    AdminClientManager,
    build_admin_client,
    initialize_admin_client,
    get_admin_client,
    close_admin_client,
    is_admin_client_initialized,
    _admin_manager
)
from leadadmin.config import ClientSettings


@pytest.fixture
def reset_singleton():
    """Reset the singleton between tests."""
    _admin_manager._initialized = False
    _admin_manager._client = None
    yield
    _admin_manager._initialized = False
    _admin_manager._client = None


@pytest.fixture
def settings():
    return ClientSettings(api_url="http://api.test", login_url="/admin/login", session_storage="memory")


def test_singleton_pattern(reset_singleton):
    manager1 = AdminClientManager()
    manager2 = AdminClientManager()

    assert manager1 is manager2, "Should return same instance"


def test_build_admin_client_wiring(settings):
    redirect = MagicMock()
    client = build_admin_client(settings, on_unauthenticated=redirect)

    assert isinstance(client, AdminClient)
    assert client.endpoints.leads == "http://api.test/api/leads"
    assert client.api.login_url == "/admin/login"
    assert client.api.on_unauthenticated is redirect
    assert client.session.has_storage
    assert client.leads.api is client.api
    assert client.testimonials.api is client.api
    assert client.dashboard.endpoints is client.endpoints


def test_build_without_storage():
    client = build_admin_client(ClientSettings(session_storage="none"))
    assert client.session.has_storage is False


def test_build_with_redis_uses_configured_url():
    settings = ClientSettings(session_storage="redis", redis_url="redis://cache:6379/2")
    with patch('leadadmin.client.manager.get_redis_client') as mock_get_client:
        mock_get_client.return_value = AsyncMock()
        client = build_admin_client(settings)

    mock_get_client.assert_called_once_with("redis://cache:6379/2")
    assert client.session.has_storage


def test_initialize_admin_client(reset_singleton, settings):
    initialize_admin_client(settings)

    assert is_admin_client_initialized()
    assert isinstance(get_admin_client(), AdminClient)


def test_initialize_from_environment(reset_singleton, monkeypatch):
    monkeypatch.setenv("ADMIN_API_URL", "https://admin-api.example.com")
    monkeypatch.setenv("SESSION_STORAGE", "none")

    initialize_admin_client()

    client = get_admin_client()
    assert client.endpoints.users == "https://admin-api.example.com/api/users"
    assert client.session.has_storage is False


def test_get_client_before_init(reset_singleton):
    with pytest.raises(RuntimeError, match="not initialized"):
        get_admin_client()


def test_double_initialization(reset_singleton, settings):
    with patch('leadadmin.client.manager.build_admin_client') as mock_build:
        initialize_admin_client(settings)
        initialize_admin_client(settings)

        assert mock_build.call_count == 1


def test_initialization_failure(reset_singleton):
    bad_settings = ClientSettings(session_storage="encrypted_disk", session_storage_path=None)

    with pytest.raises(ValueError, match="Admin client initialization failed"):
        initialize_admin_client(bad_settings)

    assert not is_admin_client_initialized()


def test_invalid_storage_env(reset_singleton, monkeypatch):
    monkeypatch.setenv("SESSION_STORAGE", "sqlite")

    with pytest.raises(ValueError, match="Admin client initialization failed"):
        initialize_admin_client()


@pytest.mark.asyncio
async def test_close_admin_client(reset_singleton, settings):
    initialize_admin_client(settings)
    client = get_admin_client()
    client.api.close = AsyncMock()

    await close_admin_client()

    assert not is_admin_client_initialized()
    client.api.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_shared_session_across_resources(reset_singleton, settings):
    initialize_admin_client(settings)
    client = get_admin_client()

    await client.session.set_token("tok-abc", "7d")
    await client.session.set_user({"id": "u1"})

    assert await client.auth.current_user() == {"id": "u1"}
    await client.auth.logout()
    assert await client.api.session_store.is_authenticated() is False

"""Async client for the loan-lead admin API: session handling and request dispatch."""

from .auth import SessionStore, create_storage
from .client import (
    ApiClient,
    RequestDescriptor,
    DispatchError,
    Ok,
    Err,
    AdminClient,
    build_admin_client,
    initialize_admin_client,
    get_admin_client,
    close_admin_client,
)
from .config import ClientSettings, ApiEndpoints, load_settings

__all__ = [
    "SessionStore",
    "create_storage",
    "ApiClient",
    "RequestDescriptor",
    "DispatchError",
    "Ok",
    "Err",
    "AdminClient",
    "build_admin_client",
    "initialize_admin_client",
    "get_admin_client",
    "close_admin_client",
    "ClientSettings",
    "ApiEndpoints",
    "load_settings",
]

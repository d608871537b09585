from .result import DispatchError, Ok, Err, Result
from .api_client import ApiClient, RequestDescriptor
from .resources import AuthResource, DashboardResource, LeadsResource, UsersResource, TestimonialsResource
from .manager import (
    AdminClient,
    AdminClientManager,
    build_admin_client,
    initialize_admin_client,
    get_admin_client,
    close_admin_client,
    is_admin_client_initialized,
)

__all__ = [
    "DispatchError",
    "Ok",
    "Err",
    "Result",
    "ApiClient",
    "RequestDescriptor",
    "AuthResource",
    "LeadsResource",
    "UsersResource",
    "TestimonialsResource",
    "DashboardResource",
    "AdminClient",
    "AdminClientManager",
    "build_admin_client",
    "initialize_admin_client",
    "get_admin_client",
    "close_admin_client",
    "is_admin_client_initialized",
]

"""
Configuration for the lead admin client.

Settings come from environment variables (a local .env file is loaded first):
- ADMIN_API_URL: base URL of the admin REST API
- ADMIN_LOGIN_URL: login entry point users are redirected to
- SESSION_STORAGE: none | memory | redis | encrypted_disk
- SESSION_KEY_PREFIX: namespace for session keys in shared storage
- REDIS_URL: used by the redis session storage
- SESSION_STORAGE_PATH: directory for the encrypted_disk session storage
- SESSION_ENCRYPTION_KEY: Fernet key for the encrypted_disk session storage
"""
import os
import logging
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:4000"
VALID_STORAGE_TYPES = ("none", "memory", "redis", "encrypted_disk")


@dataclass(frozen=True)
class ClientSettings:
    api_url: str = DEFAULT_API_URL
    login_url: str = "/login"
    session_storage: str = "memory"
    session_key_prefix: str = "leadadmin:session"
    redis_url: str = "redis://localhost:6379"
    session_storage_path: str | None = None


class ApiEndpoints:
    """URLs of the admin API, relative to a base URL."""

    def __init__(self, base_url: str = DEFAULT_API_URL):
        self.base_url = base_url.rstrip("/")

    @property
    def login(self) -> str:
        return f"{self.base_url}/api/auth/login"

    @property
    def leads(self) -> str:
        return f"{self.base_url}/api/leads"

    def lead_status(self, lead_id: str) -> str:
        return f"{self.leads}/{lead_id}/status"

    def lead_assign(self, lead_id: str) -> str:
        return f"{self.leads}/{lead_id}/assign"

    @property
    def users(self) -> str:
        return f"{self.base_url}/api/users"

    def user(self, user_id: str) -> str:
        return f"{self.users}/{user_id}"

    @property
    def testimonials_moderation(self) -> str:
        return f"{self.base_url}/api/testimonials/moderation"

    def testimonial(self, testimonial_id: str) -> str:
        return f"{self.base_url}/api/testimonials/{testimonial_id}"

    def testimonial_approve(self, testimonial_id: str) -> str:
        return f"{self.testimonial(testimonial_id)}/approve"

    def testimonial_reject(self, testimonial_id: str) -> str:
        return f"{self.testimonial(testimonial_id)}/reject"


def load_settings() -> ClientSettings:
    """
    Build client settings from environment variables.

    Raises:
        ValueError: If SESSION_STORAGE names an unknown storage type.
    """
    session_storage = os.getenv("SESSION_STORAGE", "memory").strip().lower()
    if session_storage not in VALID_STORAGE_TYPES:
        raise ValueError(
            f"Invalid SESSION_STORAGE '{session_storage}'. "
            f"Valid values: {', '.join(VALID_STORAGE_TYPES)}"
        )

    api_url = os.getenv("ADMIN_API_URL", "").strip()
    if not api_url:
        logger.warning(f"ADMIN_API_URL not set, using development default {DEFAULT_API_URL}")
        api_url = DEFAULT_API_URL

    return ClientSettings(
        api_url=api_url,
        login_url=os.getenv("ADMIN_LOGIN_URL", "/login").strip(),
        session_storage=session_storage,
        session_key_prefix=os.getenv("SESSION_KEY_PREFIX", "leadadmin:session").strip(),
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379").strip(),
        session_storage_path=os.getenv("SESSION_STORAGE_PATH") or None,
    )


__all__ = [
    'ClientSettings',
    'ApiEndpoints',
    'load_settings',
]

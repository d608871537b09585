import logging

import pytest

from leadadmin.config import ApiEndpoints, ClientSettings, load_settings
from leadadmin.utils.log_config import configure_logging


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("ADMIN_API_URL", "ADMIN_LOGIN_URL", "SESSION_STORAGE", "SESSION_KEY_PREFIX",
                 "REDIS_URL", "SESSION_STORAGE_PATH"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env, caplog):
    with caplog.at_level(logging.WARNING):
        settings = load_settings()

    assert settings == ClientSettings()
    assert "ADMIN_API_URL not set" in caplog.text


def test_reads_environment(clean_env):
    clean_env.setenv("ADMIN_API_URL", "https://api.example.com")
    clean_env.setenv("ADMIN_LOGIN_URL", "/admin/login")
    clean_env.setenv("SESSION_STORAGE", " Redis ")
    clean_env.setenv("SESSION_STORAGE_PATH", "/var/lib/leadadmin")

    settings = load_settings()

    assert settings.api_url == "https://api.example.com"
    assert settings.login_url == "/admin/login"
    assert settings.session_storage == "redis"
    assert settings.session_storage_path == "/var/lib/leadadmin"


def test_rejects_unknown_storage(clean_env):
    clean_env.setenv("SESSION_STORAGE", "sqlite")
    with pytest.raises(ValueError, match="Invalid SESSION_STORAGE"):
        load_settings()


def test_endpoints_strip_trailing_slash():
    endpoints = ApiEndpoints("https://api.example.com/")
    assert endpoints.login == "https://api.example.com/api/auth/login"
    assert endpoints.lead_assign("42") == "https://api.example.com/api/leads/42/assign"
    assert endpoints.testimonial_reject("t9") == "https://api.example.com/api/testimonials/t9/reject"


@pytest.mark.parametrize("level, applied", [("debug", "DEBUG"), ("VERBOSE", "INFO")])
def test_configure_logging_levels(level, applied):
    assert configure_logging(level) == applied

from .log_config import configure_logging
from .listing import (
    Page,
    paginate,
    sort_leads,
    filter_leads,
    filter_testimonials,
    sort_testimonials_for_moderation,
    testimonial_stats,
    DashboardStats,
    dashboard_stats,
)
from .validation import (
    ValidationRule,
    PasswordCheck,
    is_valid_email,
    is_valid_phone,
    validate_password_strength,
    validate_field,
    validate_form,
    sanitize_input,
    COMMON_RULES,
)

__all__ = [
    "configure_logging",
    "Page",
    "paginate",
    "sort_leads",
    "filter_leads",
    "filter_testimonials",
    "sort_testimonials_for_moderation",
    "testimonial_stats",
    "DashboardStats",
    "dashboard_stats",
    "ValidationRule",
    "PasswordCheck",
    "is_valid_email",
    "is_valid_phone",
    "validate_password_strength",
    "validate_field",
    "validate_form",
    "sanitize_input",
    "COMMON_RULES",
]

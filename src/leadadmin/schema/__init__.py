from .schema import (
    LEAD_STATUSES,
    TestimonialStatus,
    ApiModel,
    Lead,
    AdminUser,
    NewUserForm,
    UserUpdate,
    Testimonial,
    LoginResponse,
)

__all__ = [
    "LEAD_STATUSES",
    "TestimonialStatus",
    "ApiModel",
    "Lead",
    "AdminUser",
    "NewUserForm",
    "UserUpdate",
    "Testimonial",
    "LoginResponse",
]

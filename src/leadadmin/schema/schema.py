from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


LEAD_STATUSES = ("SUBMITTED", "UNDER_REVIEW", "APPROVED", "REJECTED", "COMPLETED")
TestimonialStatus = Literal["PENDING", "APPROVED", "REJECTED"]


class ApiModel(BaseModel):
    """Base for payloads exchanged with the admin API (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Lead(ApiModel):
    """A loan application submitted through the public site."""

    id: str
    full_name: str = Field(alias="fullName")
    email: Optional[str] = None
    phone: str
    occupation: Optional[str] = None
    monthly_income: Optional[float] = Field(default=None, alias="monthlyIncome")
    loan_amount: float = Field(alias="loanAmount")
    loan_type: str = Field(alias="loanType")
    location: Optional[str] = None
    message: Optional[str] = None
    status: str = Field(
        description="Workflow status of the lead.",
        examples=list(LEAD_STATUSES),
    )
    assigned_to: Optional[str] = Field(default=None, alias="assignedTo")
    created_at: datetime = Field(alias="createdAt")


class AdminUser(ApiModel):
    id: str
    username: str
    email: Optional[str] = None
    role: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class NewUserForm(ApiModel):
    username: str
    email: str = ""
    password: str
    role: str = "ADMIN"


class UserUpdate(ApiModel):
    """Partial update of an admin user. Blank email/password are left unchanged."""

    role: str
    email: Optional[str] = None
    password: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"role": self.role}
        if self.email:
            payload["email"] = self.email
        if self.password:
            payload["password"] = self.password
        return payload


class Testimonial(ApiModel):
    id: str
    name: str
    rating: float
    message: str
    status: TestimonialStatus
    created_at: datetime = Field(alias="createdAt")
    moderated_at: Optional[datetime] = Field(default=None, alias="moderatedAt")
    moderated_by: Optional[str] = Field(default=None, alias="moderatedBy")


class LoginResponse(ApiModel):
    token: str
    user: dict[str, Any] = Field(default_factory=dict)
    expires_in: str = Field(default="7d", alias="expiresIn")

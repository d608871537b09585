"""
Client-side list handling for the dashboard views: sorting, filtering,
pagination and moderation stats. Everything here is pure and synchronous.
"""
import math
from dataclasses import dataclass
from datetime import date
from typing import Generic, Literal, Optional, Sequence, TypeVar

from ..schema import AdminUser, Lead, Testimonial

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
RECENT_LEADS_LIMIT = 5

SortOrder = Literal["newest", "oldest"]
TestimonialFilter = Literal["ALL", "PENDING", "APPROVED", "REJECTED"]


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    per_page: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(items: Sequence[T], page: int = 1, per_page: int = DEFAULT_PAGE_SIZE) -> Page[T]:
    """
    Slice one 1-based page out of items.

    Out-of-range pages are clamped to the nearest valid page. An empty list
    yields page 1 of 0.
    """
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")

    total_items = len(items)
    total_pages = math.ceil(total_items / per_page)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * per_page

    return Page(
        items=list(items[start:start + per_page]),
        page=page,
        per_page=per_page,
        total_items=total_items,
        total_pages=total_pages,
    )


def sort_leads(leads: Sequence[Lead], order: SortOrder = "newest") -> list[Lead]:
    return sorted(leads, key=lambda lead: lead.created_at, reverse=(order == "newest"))


def filter_leads(leads: Sequence[Lead], status: Optional[str] = None) -> list[Lead]:
    if not status:
        return list(leads)
    return [lead for lead in leads if lead.status == status]


def filter_testimonials(
    testimonials: Sequence[Testimonial],
    status: TestimonialFilter = "ALL",
) -> list[Testimonial]:
    if status == "ALL":
        return list(testimonials)
    return [t for t in testimonials if t.status == status]


def sort_testimonials_for_moderation(testimonials: Sequence[Testimonial]) -> list[Testimonial]:
    """Pending testimonials first, newest first within each group."""
    newest_first = sorted(testimonials, key=lambda t: t.created_at, reverse=True)
    return sorted(newest_first, key=lambda t: t.status != "PENDING")


def testimonial_stats(testimonials: Sequence[Testimonial]) -> dict[str, int]:
    return {
        "total": len(testimonials),
        "pending": sum(1 for t in testimonials if t.status == "PENDING"),
        "approved": sum(1 for t in testimonials if t.status == "APPROVED"),
        "rejected": sum(1 for t in testimonials if t.status == "REJECTED"),
    }


@dataclass(frozen=True)
class DashboardStats:
    total_leads: int
    today_leads: int
    total_users: int
    pending_testimonials: int
    recent_leads: list[Lead]


def dashboard_stats(
    leads: Sequence[Lead],
    users: Sequence[AdminUser],
    testimonials: Sequence[Testimonial],
    today: Optional[date] = None,
) -> DashboardStats:
    """
    Summarize the dashboard overview.

    A lead counts for today when its creation time, converted to local time,
    falls on ``today`` (the local date by default).
    """
    today = today or date.today()
    return DashboardStats(
        total_leads=len(leads),
        today_leads=sum(1 for lead in leads if lead.created_at.astimezone().date() == today),
        total_users=len(users),
        pending_testimonials=sum(1 for t in testimonials if t.status == "PENDING"),
        recent_leads=sort_leads(leads)[:RECENT_LEADS_LIMIT],
    )

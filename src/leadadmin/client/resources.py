"""
Typed wrappers for the admin API endpoints.

Each method returns a Result. Successful payloads are validated into the schema
models; a payload that does not match becomes an Err so callers keep a single
failure path.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from ..config import ApiEndpoints
from ..schema import AdminUser, Lead, LoginResponse, NewUserForm, Testimonial, UserUpdate
from .api_client import ApiClient
from .result import DispatchError, Err, Ok, Result

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from server"

_login_adapter = TypeAdapter(LoginResponse)
_leads_adapter = TypeAdapter(list[Lead])
_user_adapter = TypeAdapter(AdminUser)
_users_adapter = TypeAdapter(list[AdminUser])
_testimonial_adapter = TypeAdapter(Testimonial)
_testimonials_adapter = TypeAdapter(list[Testimonial])


def _validated(result: Result[Any], adapter: TypeAdapter) -> Result[Any]:
    match result:
        case Ok(value=value):
            try:
                return Ok(adapter.validate_python(value))
            except ValidationError as e:
                logger.error(f"Unexpected response payload: {e}")
                return Err(DispatchError(UNEXPECTED_RESPONSE_MESSAGE, 0, e.errors()))
        case _:
            return result


def _discard_body(result: Result[Any]) -> Result[None]:
    return result.map(lambda _: None)


class _Resource:
    def __init__(self, api: ApiClient, endpoints: ApiEndpoints):
        self.api = api
        self.endpoints = endpoints


class AuthResource(_Resource):
    async def login(self, username: str, password: str) -> Result[LoginResponse]:
        """
        Exchange admin credentials for a bearer token and start a session.

        On success the token (with the server supplied expiry) and the user
        profile are written to the session store.
        """
        result = _validated(
            await self.api.post(
                self.endpoints.login,
                {"username": username, "password": password},
                requires_auth=False,
            ),
            _login_adapter,
        )
        if isinstance(result, Ok):
            login = result.value
            await self.api.session_store.set_token(login.token, login.expires_in)
            await self.api.session_store.set_user(login.user)
            logger.info(f"Admin '{username}' logged in")
        return result

    async def logout(self) -> None:
        await self.api.session_store.clear()
        logger.info("Admin logged out")

    async def current_user(self) -> Optional[dict[str, Any]]:
        return await self.api.session_store.get_user()


class LeadsResource(_Resource):
    async def list(self) -> Result[list[Lead]]:
        return _validated(await self.api.get(self.endpoints.leads), _leads_adapter)

    async def update_status(self, lead_id: str, status: str) -> Result[None]:
        return _discard_body(
            await self.api.patch(self.endpoints.lead_status(lead_id), {"status": status})
        )

    async def assign(self, lead_id: str, user_id: Optional[str]) -> Result[None]:
        """Assign a lead to an admin user. An empty or None user_id unassigns it."""
        return _discard_body(
            await self.api.patch(self.endpoints.lead_assign(lead_id), {"userId": user_id or None})
        )

    async def load_with_users(self) -> Result[tuple[list[Lead], list[AdminUser]]]:
        """Fetch leads and the assignable users concurrently."""
        leads_result, users_result = await asyncio.gather(
            self.api.get(self.endpoints.leads),
            self.api.get(self.endpoints.users),
        )
        leads_result = _validated(leads_result, _leads_adapter)
        if isinstance(leads_result, Err):
            return leads_result
        users_result = _validated(users_result, _users_adapter)
        if isinstance(users_result, Err):
            return users_result
        return Ok((leads_result.value, users_result.value))


class UsersResource(_Resource):
    async def list(self) -> Result[list[AdminUser]]:
        return _validated(await self.api.get(self.endpoints.users), _users_adapter)

    async def create(self, form: NewUserForm) -> Result[AdminUser]:
        return _validated(
            await self.api.post(self.endpoints.users, form.model_dump()),
            _user_adapter,
        )

    async def update(self, user_id: str, update: UserUpdate) -> Result[AdminUser]:
        return _validated(
            await self.api.patch(self.endpoints.user(user_id), update.to_payload()),
            _user_adapter,
        )

    async def delete(self, user_id: str) -> Result[None]:
        return _discard_body(await self.api.delete(self.endpoints.user(user_id)))


class TestimonialsResource(_Resource):
    async def list_for_moderation(self) -> Result[list[Testimonial]]:
        return _validated(
            await self.api.get(self.endpoints.testimonials_moderation),
            _testimonials_adapter,
        )

    async def approve(self, testimonial_id: str) -> Result[Testimonial]:
        return _validated(
            await self.api.patch(self.endpoints.testimonial_approve(testimonial_id)),
            _testimonial_adapter,
        )

    async def reject(self, testimonial_id: str) -> Result[Testimonial]:
        return _validated(
            await self.api.patch(self.endpoints.testimonial_reject(testimonial_id)),
            _testimonial_adapter,
        )

    async def delete(self, testimonial_id: str) -> Result[None]:
        return _discard_body(await self.api.delete(self.endpoints.testimonial(testimonial_id)))


class DashboardResource(_Resource):
    async def load_overview(
        self,
    ) -> Result[tuple[list[Lead], list[AdminUser], list[Testimonial]]]:
        """
        Fetch leads, users and moderation testimonials concurrently for the
        dashboard overview. Returns the first error in that order.
        """
        results = await asyncio.gather(
            self.api.get(self.endpoints.leads),
            self.api.get(self.endpoints.users),
            self.api.get(self.endpoints.testimonials_moderation),
        )
        adapters = (_leads_adapter, _users_adapter, _testimonials_adapter)

        values = []
        for result, adapter in zip(results, adapters):
            result = _validated(result, adapter)
            if isinstance(result, Err):
                return result
            values.append(result.value)
        return Ok(tuple(values))

import inspect
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

import aiohttp
from multidict import CIMultiDict

from ..auth.session_store import SessionStore
from ..auth.storage import StorageError
from .result import DispatchError, Err, Ok, Result

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {'Content-Type': 'application/json'}

NO_TOKEN_MESSAGE = "No authentication token"
UNAUTHORIZED_MESSAGE = "Unauthorized"
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
GENERIC_ERROR_BODY = {'message': 'An error occurred'}

RedirectCallback = Callable[[str], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class RequestDescriptor:
    """One outbound call. body is sent as-is, it must already be serialized."""
    url: str
    method: str = "GET"
    body: Optional[Union[str, bytes]] = None
    headers: Optional[Mapping[str, str]] = None
    requires_auth: bool = True


class ApiClient:
    """
    Single choke point for calls to the admin REST API.

    Injects the bearer token from the session store, turns every outcome into an
    ``Ok`` or an ``Err(DispatchError)`` and sends the user back to the login page
    when the session is missing or rejected. Never retries.
    """

    def __init__(
        self,
        session_store: SessionStore,
        on_unauthenticated: Optional[RedirectCallback] = None,
        login_url: str = "/login",
        http_session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Args:
            session_store: Where the bearer token is read from (and cleared on 401).
            on_unauthenticated: Navigates the user to ``login_url``. Leave as None
                when there is no interactive user to redirect.
            login_url: Login entry point handed to ``on_unauthenticated``.
            http_session: Optional aiohttp session to reuse. One is created lazily
                otherwise and closed by ``close()``.
        """
        self.session_store = session_store
        self.on_unauthenticated = on_unauthenticated
        self.login_url = login_url
        self._http_session = http_session
        self._owns_http_session = http_session is None

    async def get_client(self) -> aiohttp.ClientSession:
        if self._http_session is None or self._http_session.closed:
            self._http_session = aiohttp.ClientSession()
            self._owns_http_session = True
        return self._http_session

    async def close(self) -> None:
        if self._owns_http_session and self._http_session is not None and not self._http_session.closed:
            await self._http_session.close()
            logger.info("API client HTTP session closed")
        self._http_session = None

    async def _redirect_to_login(self) -> None:
        if self.on_unauthenticated is None:
            logger.debug("No interactive context, skipping login redirect")
            return
        try:
            outcome = self.on_unauthenticated(self.login_url)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            logger.error(f"Login redirect callback failed: {e}")

    async def _read_token(self) -> Optional[str]:
        try:
            return await self.session_store.get_token()
        except StorageError as e:
            logger.error(f"Could not read session token, treating session as absent: {e}")
            return None

    async def _clear_session(self) -> None:
        try:
            await self.session_store.clear()
        except StorageError as e:
            logger.error(f"Could not clear session after 401: {e}")

    async def _error_from_response(self, response: aiohttp.ClientResponse) -> DispatchError:
        try:
            error_data = await response.json(content_type=None)
        except (ValueError, aiohttp.ContentTypeError):
            error_data = dict(GENERIC_ERROR_BODY)

        # Empty bodies decode to None instead of raising
        if error_data is None:
            error_data = dict(GENERIC_ERROR_BODY)

        message = None
        if isinstance(error_data, dict):
            message = error_data.get('message')
        if not message:
            message = f"HTTP Error {response.status}"

        return DispatchError(str(message), response.status, error_data)

    async def dispatch(self, descriptor: RequestDescriptor) -> Result[Any]:
        headers = CIMultiDict(DEFAULT_HEADERS)
        if descriptor.headers:
            headers.update(descriptor.headers)

        if descriptor.requires_auth:
            token = await self._read_token()
            if not token:
                logger.info(f"No session token for {descriptor.method} {descriptor.url}, redirecting to login")
                await self._redirect_to_login()
                return Err(DispatchError(NO_TOKEN_MESSAGE, 401, None))
            headers['Authorization'] = f"Bearer {token}"

        try:
            client = await self.get_client()
            logger.debug(f"dispatch says: {descriptor.method} {descriptor.url} (auth: {descriptor.requires_auth})")

            async with client.request(
                descriptor.method,
                descriptor.url,
                data=descriptor.body,
                headers=headers,
            ) as response:
                status = response.status
                logger.info(f"dispatch says: Received response with status {status} from {descriptor.url}")

                if status == 401:
                    await self._clear_session()
                    await self._redirect_to_login()
                    return Err(DispatchError(UNAUTHORIZED_MESSAGE, 401, None))

                if not 200 <= status < 300:
                    error = await self._error_from_response(response)
                    logger.error(f"dispatch says: Error from {descriptor.url} (status: {status}): {error.payload}")
                    return Err(error)

                content_type = response.headers.get('Content-Type', '')
                if 'application/json' in content_type:
                    return Ok(await response.json(content_type=None))

                # Body is buffered so the handle stays readable after release
                await response.read()
                return Ok(response)

        except Exception as e:
            logger.error(f"dispatch says: Request to {descriptor.url} failed: {type(e).__name__}: {e}")
            return Err(DispatchError(NETWORK_ERROR_MESSAGE, 0, e))

    async def get(self, url: str, **options) -> Result[Any]:
        return await self.dispatch(RequestDescriptor(url, method="GET", **options))

    async def post(self, url: str, data: Any = None, **options) -> Result[Any]:
        body = json.dumps(data) if data is not None else None
        return await self.dispatch(RequestDescriptor(url, method="POST", body=body, **options))

    async def patch(self, url: str, data: Any = None, **options) -> Result[Any]:
        body = json.dumps(data) if data is not None else None
        return await self.dispatch(RequestDescriptor(url, method="PATCH", body=body, **options))

    async def delete(self, url: str, **options) -> Result[Any]:
        return await self.dispatch(RequestDescriptor(url, method="DELETE", **options))

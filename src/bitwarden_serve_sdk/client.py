"""
Bitwarden Client

Main client class for talking to a local ``bw serve`` instance.
"""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from .config import ClientConfig
from .exceptions import (
    BadRequestError,
    DecodingError,
    EmptyLoginError,
    EmptySecureNoteError,
    NotALoginError,
    NotASecureNoteError,
    NotFoundError,
    SerializationError,
    TransportError,
    UnexpectedStatusError,
    WrongPasswordError,
)
from .models import Item, ItemResponse, ItemType, Login, UnlockRequest

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:4628"

UNLOCK_PATH = "/unlock"
LOCK_PATH = "/lock"
ITEM_PATH = "/object/item/"

Body = Union[BaseModel, Dict[str, Any]]
M = TypeVar("M", bound=BaseModel)


class BitwardenClient:
    """
    Client for the HTTP API exposed by ``bw serve``.

    Every operation issues exactly one request and raises a
    :class:`~bitwarden_serve_sdk.exceptions.BitwardenError` subclass on
    failure. Nothing is retried or cached; the server owns the lock state.
    Each operation has an ``a``-prefixed asyncio counterpart.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Bitwarden client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:4628``
            config: Optional client configuration
            transport: Optional httpx transport for synchronous calls
            async_transport: Optional httpx transport for asynchronous calls.
                Defaults to ``transport`` when that one also supports async.
        """
        self.base_url = base_url.rstrip("/")
        self.config = config or ClientConfig()

        if async_transport is None and isinstance(transport, httpx.AsyncBaseTransport):
            async_transport = transport

        self._async_transport = async_transport
        self._limits = httpx.Limits(
            max_keepalive_connections=self.config.max_connections,
            max_connections=self.config.max_connections,
        )
        self._client = httpx.Client(
            timeout=self.config.timeout,
            limits=self._limits,
            transport=transport,
        )
        self._async_client: Optional[httpx.AsyncClient] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def _get_async_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._async_client is None:
            self._async_client = httpx.AsyncClient(
                timeout=self.config.timeout,
                limits=self._limits,
                transport=self._async_transport,
            )
        return self._async_client

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    async def aclose(self):
        """Close both HTTP clients."""
        self._client.close()
        if self._async_client is not None:
            await self._async_client.aclose()

    # Request execution

    @staticmethod
    def _encode_body(body: Body) -> bytes:
        try:
            if isinstance(body, BaseModel):
                return body.model_dump_json(by_alias=True).encode()
            return json.dumps(body, separators=(",", ":"), allow_nan=False).encode()
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to encode request body: {e}") from e

    def _build_request(
        self,
        client: Union[httpx.Client, httpx.AsyncClient],
        method: str,
        path: str,
        body: Optional[Body],
    ) -> httpx.Request:
        # Identifiers are concatenated as-is, callers escape them.
        url = self.base_url + path
        headers = {}
        content = None
        if body is not None:
            content = self._encode_body(body)
            headers["Content-Type"] = "application/json"

        request = client.build_request(method, url, content=content, headers=headers)
        if self.config.log_requests:
            logger.debug(f"Request: {request.method} {request.url}")
        return request

    def _make_request(
        self,
        method: str,
        path: str,
        body: Optional[Body] = None,
    ) -> httpx.Response:
        """Make a synchronous HTTP request."""
        request = self._build_request(self._client, method, path, body)
        try:
            response = self._client.send(request)
        except httpx.RequestError as e:
            logger.error(f"Request failed: {e}")
            raise TransportError(f"Failed to connect to Bitwarden server: {e}") from e

        self._handle_response(response)
        return response

    async def _make_async_request(
        self,
        method: str,
        path: str,
        body: Optional[Body] = None,
    ) -> httpx.Response:
        """Make an asynchronous HTTP request."""
        client = self._get_async_client()
        request = self._build_request(client, method, path, body)
        try:
            response = await client.send(request)
        except httpx.RequestError as e:
            logger.error(f"Async request failed: {e}")
            raise TransportError(f"Failed to connect to Bitwarden server: {e}") from e

        self._handle_response(response)
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        try:
            error_data = response.json()
        except ValueError:
            return None
        if isinstance(error_data, dict) and error_data.get("message"):
            return str(error_data["message"])
        return None

    def _handle_response(self, response: httpx.Response) -> None:
        """Handle HTTP response and raise appropriate exceptions."""
        if self.config.log_responses:
            logger.debug(
                f"Response: {response.request.method} {response.request.url} "
                f"-> {response.status_code}"
            )

        if response.status_code == 200:
            return

        message = self._error_message(response)

        if response.status_code == 404:
            raise NotFoundError(message or "item not found")
        elif response.status_code == 400:
            raise BadRequestError(message or "bad request")
        else:
            raise UnexpectedStatusError(response.status_code, message)

    @staticmethod
    def _decode(response: httpx.Response, model: Type[M]) -> M:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodingError(f"Failed to decode response body: {e}") from e

    # Session Methods

    @staticmethod
    def _unlock_body(password: str) -> UnlockRequest:
        try:
            return UnlockRequest(password=password)
        except ValidationError as e:
            raise SerializationError(f"Failed to encode unlock request: {e}") from e

    def unlock(self, password: str) -> None:
        """
        Unlock the vault with the master password.

        Raises:
            WrongPasswordError: the server answered 400. That is the only
                signal it gives for a wrong password, so any other cause of a
                400 surfaces the same way.
        """
        try:
            self._make_request("POST", UNLOCK_PATH, self._unlock_body(password))
        except BadRequestError as e:
            raise WrongPasswordError() from e

    async def aunlock(self, password: str) -> None:
        """Unlock the vault with the master password (async)."""
        try:
            await self._make_async_request("POST", UNLOCK_PATH, self._unlock_body(password))
        except BadRequestError as e:
            raise WrongPasswordError() from e

    def lock(self) -> None:
        """Lock the vault."""
        self._make_request("POST", LOCK_PATH, {})

    async def alock(self) -> None:
        """Lock the vault (async)."""
        await self._make_async_request("POST", LOCK_PATH, {})

    # Item Methods

    def get_item(self, item_id: str) -> Item:
        """Get an item by ID."""
        response = self._make_request("GET", ITEM_PATH + item_id)
        return self._decode(response, ItemResponse).data

    async def aget_item(self, item_id: str) -> Item:
        """Get an item by ID (async)."""
        response = await self._make_async_request("GET", ITEM_PATH + item_id)
        return self._decode(response, ItemResponse).data

    @staticmethod
    def _login_of(item: Item) -> Login:
        # Type is checked before content.
        if item.type != ItemType.LOGIN:
            raise NotALoginError(actual=item.type)
        if item.login is None:
            raise EmptyLoginError()
        return item.login

    @staticmethod
    def _secure_note_of(item: Item) -> str:
        if item.type != ItemType.SECURE_NOTE:
            raise NotASecureNoteError(actual=item.type)
        if item.notes is None:
            raise EmptySecureNoteError()
        return item.notes

    def get_login(self, item_id: str) -> Login:
        """Get the login payload of a login item."""
        return self._login_of(self.get_item(item_id))

    async def aget_login(self, item_id: str) -> Login:
        """Get the login payload of a login item (async)."""
        return self._login_of(await self.aget_item(item_id))

    def get_secure_note(self, item_id: str) -> str:
        """Get the text of a secure note item."""
        return self._secure_note_of(self.get_item(item_id))

    async def aget_secure_note(self, item_id: str) -> str:
        """Get the text of a secure note item (async)."""
        return self._secure_note_of(await self.aget_item(item_id))

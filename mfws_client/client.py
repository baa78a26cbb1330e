"""Main clients for the M-Files Web Service REST API."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional

import httpx
import requests

from .config import MFWSSettings
from .exceptions import AuthenticationError, ForbiddenError, MFWSError, NotFoundError
from .mixins import (
    AuthenticationMixin,
    ObjectsMixin,
    PropertiesMixin,
    SearchMixin,
    StructureMixin,
    ValueListItemsMixin,
    WorkflowsMixin,
)

logger = logging.getLogger(__name__)

X_AUTHENTICATION_HEADER = "X-Authentication"
X_VAULT_HEADER = "X-Vault"
ACCEPT_LANGUAGE_HEADER = "Accept-Language"
X_PRESHARED_KEY_HEADER = "X-PresharedKey"
X_EXTENSIONS_HEADER = "X-Extensions"
AUTHORIZATION_HEADER = "Authorization"


@dataclass(frozen=True)
class RequestDefaults:
    """
    Headers sent with every request.

    Instances are immutable; authentication and the ``set_*`` helpers swap in
    a new value rather than editing the current one.
    """

    authentication_token: Optional[str] = None
    vault_guid: Optional[str] = None
    accept_language: Optional[str] = None
    preshared_key: Optional[str] = None
    extensions: Optional[str] = None
    authorization: Optional[str] = None

    def to_headers(self) -> Dict[str, str]:
        headers = {
            X_AUTHENTICATION_HEADER: self.authentication_token,
            X_VAULT_HEADER: self.vault_guid,
            ACCEPT_LANGUAGE_HEADER: self.accept_language,
            X_PRESHARED_KEY_HEADER: self.preshared_key,
            X_EXTENSIONS_HEADER: self.extensions,
            AUTHORIZATION_HEADER: self.authorization,
        }
        return {name: value for name, value in headers.items() if value is not None}


def _decode_body(text: str, loads: Callable[[], Any]) -> Any:
    if not text:
        return None
    try:
        return loads()
    except ValueError:
        return {"raw": text}


def _raise_for_status(status_code: int, method: str, resource: str, data: Any) -> None:
    """Map an error response onto the exception hierarchy."""
    if status_code < 400:
        return

    message = None
    if isinstance(data, dict):
        message = data.get("Message") or data.get("raw")
    message = message or f"HTTP {status_code}"
    logger.warning("%s %s failed with %s: %s", method, resource, status_code, message)

    if status_code == 401:
        raise AuthenticationError(message, status_code=status_code, response=data)
    elif status_code == 403:
        raise ForbiddenError(message, status_code=status_code, response=data)
    elif status_code == 404:
        raise NotFoundError(f"Resource not found: {resource}", status_code=status_code, response=data)
    raise MFWSError(f"API error: {message}", status_code=status_code, response=data)


class BaseMFWSClient(
    AuthenticationMixin,
    ObjectsMixin,
    PropertiesMixin,
    SearchMixin,
    StructureMixin,
    ValueListItemsMixin,
    WorkflowsMixin,
    ABC,
):
    """
    Shared state and operations for the sync and async clients.

    Every operation validates its arguments and builds its resource path when
    it is called, then hands the request to ``_execute``. Subclasses decide
    whether ``_execute`` returns the result or an awaitable for it.

    Args:
        base_url: Base URL of the M-Files Web Access site ("http://localhost",
            not "http://localhost/REST")
        timeout: Request timeout in seconds
        defaults: Headers to send with every request
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        defaults: RequestDefaults = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.defaults = defaults or RequestDefaults()

    @classmethod
    def from_settings(cls, settings: MFWSSettings, **kwargs):
        """Create a client from loaded settings."""
        defaults = RequestDefaults(
            vault_guid=settings.vault_guid,
            accept_language=settings.accept_language,
            preshared_key=settings.preshared_key,
        )
        return cls(settings.base_url, timeout=settings.timeout, defaults=defaults, **kwargs)

    def _url(self, resource: str) -> str:
        return self.base_url + "/" + resource.lstrip("/")

    def _build_headers(self, headers: Dict[str, str] = None) -> Dict[str, str]:
        merged = {"Accept": "application/json"}
        merged.update(self.defaults.to_headers())
        if headers:
            merged.update(headers)
        return merged

    def _update_defaults(self, **changes) -> None:
        self.defaults = replace(self.defaults, **changes)

    @abstractmethod
    def _clear_cookies(self) -> None:
        """Forget the session cookies."""

    @abstractmethod
    def _execute(
        self,
        method: str,
        resource: str,
        json: Any = None,
        headers: Dict[str, str] = None,
        parse: Callable[[Any], Any] = None,
    ):
        """Send a request and return ``parse(body)``, or an awaitable for it."""

    @abstractmethod
    def _completed(self, value: Any):
        """Return a result that needs no request, in this client's calling style."""


class MFWSClient(BaseMFWSClient):
    """
    Synchronous client for the M-Files Web Service.

    Usage:
        with MFWSClient("http://localhost") as client:
            client.authenticate_using_credentials(vault_guid, "user", "password")
            results = client.search_for_objects_by_string("hello world")

    Args:
        base_url: Base URL of the M-Files Web Access site
        timeout: Request timeout in seconds
        defaults: Headers to send with every request
        session: Optional pre-configured requests.Session
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        defaults: RequestDefaults = None,
        session: requests.Session = None,
    ):
        super().__init__(base_url, timeout=timeout, defaults=defaults)
        self._session = session or requests.Session()

    @property
    def cookies(self):
        """The session cookie jar (holds e.g. the ASP.NET session id)."""
        return self._session.cookies

    def _clear_cookies(self) -> None:
        self._session.cookies.clear()

    def _execute(self, method, resource, json=None, headers=None, parse=None):
        logger.debug("%s %s", method, resource)
        try:
            response = self._session.request(
                method=method,
                url=self._url(resource),
                json=json,
                headers=self._build_headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise MFWSError(f"Request failed: {e}") from e

        data = _decode_body(response.text, response.json)
        _raise_for_status(response.status_code, method, resource, data)
        return parse(data) if parse else data

    def _completed(self, value):
        return value

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "MFWSClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class AsyncMFWSClient(BaseMFWSClient):
    """
    Asynchronous client for the M-Files Web Service.

    Operations have the same names and arguments as on MFWSClient but return
    awaitables. Invalid arguments still raise immediately, at call time.

    Usage:
        async with AsyncMFWSClient("http://localhost") as client:
            await client.authenticate_using_credentials(vault_guid, "user", "password")
            results = await client.search_for_objects_by_string("hello world")

    Args:
        base_url: Base URL of the M-Files Web Access site
        timeout: Request timeout in seconds
        defaults: Headers to send with every request
        client: Optional pre-configured httpx.AsyncClient
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        defaults: RequestDefaults = None,
        client: httpx.AsyncClient = None,
    ):
        super().__init__(base_url, timeout=timeout, defaults=defaults)
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    @property
    def cookies(self):
        """The session cookie jar (holds e.g. the ASP.NET session id)."""
        return self._client.cookies

    def _clear_cookies(self) -> None:
        self._client.cookies.clear()

    async def _execute(self, method, resource, json=None, headers=None, parse=None):
        logger.debug("%s %s", method, resource)
        try:
            response = await self._client.request(
                method,
                self._url(resource),
                json=json,
                headers=self._build_headers(headers),
            )
        except httpx.HTTPError as e:
            raise MFWSError(f"Request failed: {e}") from e

        data = _decode_body(response.text, response.json)
        _raise_for_status(response.status_code, method, resource, data)
        return parse(data) if parse else data

    async def _completed(self, value):
        return value

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncMFWSClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

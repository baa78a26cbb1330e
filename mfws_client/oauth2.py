"""
OAuth 2.0 configuration for vaults that authenticate through an identity provider.

A vault advertises its OAuth plugin via ``get_authentication_plugins``; the
plugin's configuration is turned into an OAuth2Configuration, which builds the
authorization URI the user is sent to. The resulting tokens are handed back to
the client with ``authenticate_using_oauth2``.
"""

import base64
import hashlib
import secrets
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from .exceptions import InvalidArgumentError
from .models import PluginInfoConfiguration

FALLBACK_REDIRECT_URI = "http://localhost"


def _new_state() -> str:
    return "{" + str(uuid.uuid4()) + "}"


def _is_true(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def _parse_version(value: Optional[str]) -> Optional[Tuple[int, ...]]:
    try:
        return tuple(int(part) for part in value.split("."))
    except (AttributeError, ValueError):
        return None


def _base64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


@dataclass
class OAuth2Configuration:
    """OAuth 2.0 settings for one vault, as published by its authentication plugin."""

    authorization_endpoint: Optional[str] = None
    token_endpoint: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    protocol: Optional[str] = "OAuth 2.0"
    redirect_uri_for_web: Optional[str] = None
    redirect_uri_for_native: Optional[str] = None
    redirect_uri_for_mobile: Optional[str] = None
    redirect_uri_for_wopi: Optional[str] = None
    redirect_uri: Optional[str] = FALLBACK_REDIRECT_URI
    resource: Optional[str] = None
    scope: Optional[str] = None
    site_realm: Optional[str] = None
    grant_type: str = "authorization_code"
    force_login: bool = False
    use_id_token_as_access_token: bool = False
    use_pkce_with_authorization_code: bool = False
    state: str = field(default_factory=_new_state)
    vault_guid: Optional[str] = None
    mf_server_version: Optional[Tuple[int, ...]] = None
    plugin_info: Optional[PluginInfoConfiguration] = None
    code_verifier: Optional[str] = field(default=None, repr=False)
    code_challenge: Optional[str] = field(default=None, repr=False)

    @classmethod
    def parse_from(
        cls, plugin: PluginInfoConfiguration, force_login: bool = False
    ) -> "OAuth2Configuration":
        """Build a configuration from an authentication plugin's settings."""
        if plugin is None:
            raise InvalidArgumentError("An authentication plugin is required")

        config = plugin.configuration or {}
        return cls(
            plugin_info=plugin,
            authorization_endpoint=config.get("AuthorizationEndpoint"),
            client_id=config.get("ClientID"),
            protocol=config.get("Protocol"),
            redirect_uri_for_web=config.get("RedirectURIForWeb"),
            redirect_uri_for_native=config.get("RedirectURIForNative"),
            redirect_uri_for_wopi=config.get("RedirectURIForWOPI"),
            redirect_uri_for_mobile=config.get("RedirectURIForMobile"),
            redirect_uri=config.get("RedirectURI", FALLBACK_REDIRECT_URI),
            resource=config.get("Resource"),
            token_endpoint=config.get("TokenEndpoint"),
            scope=config.get("Scope"),
            client_secret=config.get("ClientSecret"),
            site_realm=config.get("SiteRealm"),
            vault_guid=plugin.vault_guid,
            mf_server_version=_parse_version(config.get("MFServerVersion")),
            use_id_token_as_access_token=_is_true(config.get("UseIdTokenAsAccessToken")),
            use_pkce_with_authorization_code=_is_true(config.get("UsePkceWithAuthorizationCode")),
            force_login=force_login or config.get("PromptLoginParameter") == "login",
        )

    @property
    def prompt_type(self) -> Optional[str]:
        return "login" if self.force_login else None

    def get_appropriate_redirect_uri(self) -> str:
        """The native redirect URI if set, else the general one, else localhost."""
        for candidate in (self.redirect_uri_for_native, self.redirect_uri):
            if candidate and candidate.strip():
                return candidate
        return FALLBACK_REDIRECT_URI

    def generate_authorization_uri(self, redirect_uri: str = None) -> str:
        """
        Build the URI to send the user to for authorization.

        When PKCE is enabled a new code verifier is created on each call and
        kept on the configuration for the token request.

        Args:
            redirect_uri: Where the provider should send the user back to;
                defaults to get_appropriate_redirect_uri()

        Returns:
            The authorization URI
        """
        if not self.authorization_endpoint:
            raise InvalidArgumentError("The configuration has no authorization endpoint")
        if not redirect_uri or not redirect_uri.strip():
            redirect_uri = self.get_appropriate_redirect_uri()

        params = [
            ("client_id", self.client_id or ""),
            ("redirect_uri", redirect_uri),
            ("response_type", "code"),
        ]
        for name, value in (
            ("scope", self.scope),
            ("state", self.state),
            ("prompt", self.prompt_type),
            ("resource", self.resource),
        ):
            if value and value.strip():
                params.append((name, value))

        if self.use_pkce_with_authorization_code:
            self.code_verifier = create_code_verifier()
            self.code_challenge = create_code_challenge(self.code_verifier)
            params.append(("code_challenge", self.code_challenge))
            params.append(("code_challenge_method", "S256"))

        scheme, netloc, path, query, fragment = urlsplit(self.authorization_endpoint)
        existing = [(k, v) for k, v in parse_qsl(query) if k not in dict(params)]
        return urlunsplit((scheme, netloc, path, urlencode(existing + params), fragment))

    def get_token_request_data(self, code: str, redirect_uri: str = None) -> Dict[str, str]:
        """Form fields for exchanging an authorization code at the token endpoint."""
        if not code:
            raise InvalidArgumentError("An authorization code is required")
        data = {
            "grant_type": self.grant_type,
            "code": code,
            "client_id": self.client_id or "",
            "redirect_uri": redirect_uri or self.get_appropriate_redirect_uri(),
        }
        if self.client_secret:
            data["client_secret"] = self.client_secret
        if self.resource:
            data["resource"] = self.resource
        if self.code_verifier:
            data["code_verifier"] = self.code_verifier
        return data


def create_code_verifier(size: int = 32) -> str:
    """Random PKCE code verifier: ``size`` random bytes, base64url without padding."""
    if size > 1024:
        size = 32
    return _base64url(secrets.token_bytes(size))


def create_code_challenge(code_verifier: str) -> str:
    """S256 PKCE challenge for a verifier."""
    return _base64url(hashlib.sha256(code_verifier.encode("utf-8")).digest())


@dataclass
class OAuth2TokenResponse:
    """Tokens returned by the identity provider's token endpoint."""

    token_type: Optional[str] = None
    scope: Optional[str] = None
    expires_in: Optional[int] = None
    expires_on: Optional[int] = None
    not_before: Optional[int] = None
    resource: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OAuth2TokenResponse":
        def as_int(key):
            value = data.get(key)
            return int(value) if value not in (None, "") else None

        return cls(
            token_type=data.get("token_type"),
            scope=data.get("scope"),
            expires_in=as_int("expires_in"),
            expires_on=as_int("expires_on"),
            not_before=as_int("not_before"),
            resource=data.get("resource"),
            access_token=data.get("access_token"),
            refresh_token=data.get("refresh_token"),
            id_token=data.get("id_token"),
        )

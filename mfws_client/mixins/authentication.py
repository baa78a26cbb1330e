"""Authentication and session header operations mixin."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union

from ..exceptions import InvalidArgumentError
from ..models import Authentication, PluginInfoConfiguration, Vault
from ..oauth2 import OAuth2Configuration, OAuth2TokenResponse

GuidLike = Union[str, uuid.UUID]


def format_guid(guid: GuidLike, braces: bool = False, upper: bool = False) -> str:
    """
    Normalise a vault GUID.

    Accepts a UUID or any string form ``uuid.UUID`` understands (with or
    without braces) and renders it hyphenated, optionally wrapped in braces.
    """
    if guid is None:
        raise InvalidArgumentError("A vault GUID is required")
    try:
        value = str(guid if isinstance(guid, uuid.UUID) else uuid.UUID(str(guid)))
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid vault GUID: {guid!r}") from e
    if upper:
        value = value.upper()
    return "{" + value + "}" if braces else value


class AuthenticationMixin:
    """
    Mixin providing authentication and default-header operations.

    Requires on self:
        - _execute(method, resource, json=None, headers=None, parse=None)
        - _update_defaults(**changes)
        - _clear_cookies()
        - defaults: RequestDefaults
    """

    # =========================================================================
    # Tokens
    # =========================================================================

    def _clear_authentication(self) -> None:
        self._update_defaults(authentication_token=None, authorization=None)
        self._clear_cookies()

    def _store_authentication_token(self, data) -> Optional[str]:
        token = data.get("Value") if isinstance(data, dict) else None
        self._update_defaults(authentication_token=token)
        return token

    def authenticate_using_credentials(
        self,
        vault_guid: Optional[GuidLike],
        username: str,
        password: str,
        expiration: Union[datetime, timedelta] = None,
        session_id: str = None,
    ):
        """
        Authenticate with a username and password.

        Any previous token and cookies are discarded first. On success the
        returned token is sent as ``X-Authentication`` on later requests.

        Args:
            vault_guid: Vault to log in to, or None for a server-level token
            username: Account name
            password: Account password
            expiration: When the token expires (absolute, or relative to now)
            session_id: Optional session id to bind the token to

        Returns:
            The authentication token
        """
        if not username:
            raise InvalidArgumentError("A username is required")
        if isinstance(expiration, timedelta):
            expiration = datetime.now(timezone.utc) + expiration

        self._clear_authentication()
        auth = Authentication(
            username=username,
            password=password,
            vault_guid=format_guid(vault_guid) if vault_guid is not None else None,
            expiration=expiration,
            session_id=session_id,
        )
        return self._execute(
            "POST",
            "/REST/server/authenticationtokens",
            json=auth.to_dict(),
            parse=self._store_authentication_token,
        )

    def authenticate_using_single_sign_on(self, vault_guid: GuidLike):
        """
        Authenticate using Windows single sign-on.

        The server answers with a session cookie, kept in the client's cookie
        jar; no token header is set.
        """
        vault = format_guid(vault_guid, upper=True)
        self._clear_authentication()
        return self._execute("GET", f"/WebServiceSSO.aspx?popup=1&vault={vault}")

    def authenticate_using_oauth2(
        self,
        token_response: OAuth2TokenResponse,
        configuration: OAuth2Configuration = None,
        vault_guid: GuidLike = None,
    ) -> None:
        """
        Use an OAuth 2.0 token for later requests.

        Sends ``Authorization: Bearer ...`` with the access token, or with the
        id token when the configuration asks for it. No request is made.
        """
        if token_response is None:
            raise InvalidArgumentError("A token response is required")

        use_id_token = configuration is not None and configuration.use_id_token_as_access_token
        token = token_response.id_token if use_id_token else token_response.access_token
        if not token:
            raise InvalidArgumentError("The token response does not contain a usable token")

        vault_guid = vault_guid or (configuration.vault_guid if configuration else None)

        self._clear_authentication()
        self._update_defaults(authorization=f"Bearer {token}")
        if vault_guid:
            self.set_vault(vault_guid)

    def log_out(self):
        """End the current session and forget the token."""
        return self._execute(
            "DELETE",
            "/REST/session.aspx",
            parse=lambda data: self._clear_authentication(),
        )

    # =========================================================================
    # Server information
    # =========================================================================

    def get_online_vaults(self) -> List[Vault]:
        """Get the vaults that are online and visible to the current user."""
        return self._execute(
            "GET",
            "/REST/server/vaults?online=true",
            parse=lambda data: [Vault.from_dict(v) for v in data or []],
        )

    def get_authentication_plugins(
        self, vault_guid: GuidLike = None
    ) -> List[PluginInfoConfiguration]:
        """Get the authentication plugins configured on the server (or one vault)."""
        resource = "/REST/server/authenticationprotocols"
        if vault_guid is not None:
            resource += "?vault=" + format_guid(vault_guid, braces=True)
        return self._execute(
            "GET",
            resource,
            parse=lambda data: [PluginInfoConfiguration.from_dict(p) for p in data or []],
        )

    # =========================================================================
    # Default headers
    # =========================================================================

    def set_vault(self, vault_guid: GuidLike) -> None:
        """Send ``X-Vault`` with every request."""
        self._update_defaults(vault_guid=format_guid(vault_guid, braces=True))

    def clear_vault(self) -> None:
        self._update_defaults(vault_guid=None)

    def set_accept_language(self, *languages: str) -> None:
        """Send ``Accept-Language``; call with no languages to stop sending it."""
        languages = [language for language in languages if language]
        self._update_defaults(accept_language=",".join(languages) if languages else None)

    def set_preshared_key(self, key: Optional[str]) -> None:
        """Send ``X-PresharedKey``; a blank key stops sending it."""
        self._update_defaults(preshared_key=key if key and key.strip() else None)

    def clear_preshared_key(self) -> None:
        self._update_defaults(preshared_key=None)

    def set_extensions(self, *extensions: str) -> None:
        """Send ``X-Extensions`` (e.g. "mfwa") with every request."""
        extensions = [extension for extension in extensions if extension]
        self._update_defaults(extensions=",".join(extensions) if extensions else None)

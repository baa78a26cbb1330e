"""
Client settings loaded from the environment.

Values come from environment variables, optionally seeded from a dotenv file
(``.secrets.env`` or ``.env``). Variables already set in the environment win
over the file.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import InvalidArgumentError

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class MFWSSettings:
    base_url: str
    vault_guid: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    accept_language: Optional[str] = None
    preshared_key: Optional[str] = None

    @classmethod
    def from_env(cls, env_file: str = None) -> "MFWSSettings":
        """
        Read settings from MFWS_* environment variables.

        Args:
            env_file: Optional dotenv file to load first

        Raises:
            InvalidArgumentError: If MFWS_BASE_URL is missing or MFWS_TIMEOUT
                is not a number
        """
        if env_file:
            load_dotenv(env_file, override=False)

        base_url = os.environ.get("MFWS_BASE_URL")
        if not base_url:
            raise InvalidArgumentError("MFWS_BASE_URL environment variable is required")

        timeout = os.environ.get("MFWS_TIMEOUT")
        try:
            timeout = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise InvalidArgumentError(f"MFWS_TIMEOUT must be a number, got {timeout!r}") from e

        return cls(
            base_url=base_url,
            vault_guid=os.environ.get("MFWS_VAULT_GUID") or None,
            username=os.environ.get("MFWS_USERNAME") or None,
            password=os.environ.get("MFWS_PASSWORD") or None,
            timeout=timeout,
            accept_language=os.environ.get("MFWS_ACCEPT_LANGUAGE") or None,
            preshared_key=os.environ.get("MFWS_PRESHARED_KEY") or None,
        )

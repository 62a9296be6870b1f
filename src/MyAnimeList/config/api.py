"""API endpoint and credential configuration.

Credentials never live in the YAML file: the file names the environment
variables to read them from.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from MyAnimeList.api.request import DEFAULT_BASE_URL
from MyAnimeList.auth.authenticator import TOKEN_URL
from MyAnimeList.auth.oauth import AUTHORIZE_URL, authorization_url
from MyAnimeList.config.common import (
    expect_float,
    expect_str,
    get_optional_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Store validated endpoint settings and resolved credentials.

    Attributes:
        access_token: Static or last issued access token, "" when unset.
        client_id: OAuth client id, "" when unset.
        client_secret: OAuth client secret, "" for public clients.
        refresh_token: OAuth refresh token, "" when unset.
    """

    base_url: str
    token_url: str
    authorize_url: str
    timeout: float
    user_agent: str
    access_token_env: str
    client_id_env: str
    client_secret_env: str
    refresh_token_env: str
    access_token: str
    client_id: str
    client_secret: str
    refresh_token: str

    @property
    def refreshable(self) -> bool:
        """Whether credentials for a refreshable authenticator are present."""
        return bool(self.client_id and self.refresh_token)

    def authorization_url(
        self,
        code_challenge: str,
        *,
        state: str | None = None,
        redirect_uri: str | None = None,
    ) -> str:
        """Build the authorization page URL for the configured client.

        Raises:
            ValueError: If no client id is configured.
        """
        if not self.client_id:
            raise ValueError(f"{self.client_id_env} is not set")
        return authorization_url(
            self.client_id,
            code_challenge,
            state=state,
            redirect_uri=redirect_uri,
            authorize_url=self.authorize_url,
        )


def load_api(raw: Mapping[str, Any]) -> ApiConfig:
    """Load the optional `api` section and resolve credentials from the environment.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "api", required=False)

    def env_name(field: str, default: str) -> str:
        return expect_str(get_optional_value(section, field, default), f"api.{field}")

    access_token_env = env_name("access_token_env", "MAL_ACCESS_TOKEN")
    client_id_env = env_name("client_id_env", "MAL_CLIENT_ID")
    client_secret_env = env_name("client_secret_env", "MAL_CLIENT_SECRET")
    refresh_token_env = env_name("refresh_token_env", "MAL_REFRESH_TOKEN")

    return ApiConfig(
        base_url=expect_str(get_optional_value(section, "base_url", DEFAULT_BASE_URL), "api.base_url"),
        token_url=expect_str(get_optional_value(section, "token_url", TOKEN_URL), "api.token_url"),
        authorize_url=expect_str(get_optional_value(section, "authorize_url", AUTHORIZE_URL), "api.authorize_url"),
        timeout=expect_float(get_optional_value(section, "timeout", 30), "api.timeout"),
        user_agent=expect_str(get_optional_value(section, "user_agent", ""), "api.user_agent"),
        access_token_env=access_token_env,
        client_id_env=client_id_env,
        client_secret_env=client_secret_env,
        refresh_token_env=refresh_token_env,
        access_token=_load_from_env(access_token_env),
        client_id=_load_from_env(client_id_env),
        client_secret=_load_from_env(client_secret_env),
        refresh_token=_load_from_env(refresh_token_env),
    )


def check_api(config: ApiConfig) -> None:
    """Validate api constraints.

    Raises:
        ValueError: If values violate api constraints.
    """
    for config_key, url in (
        ("api.base_url", config.base_url),
        ("api.token_url", config.token_url),
        ("api.authorize_url", config.authorize_url),
    ):
        if not url.startswith(("https://", "http://")):
            raise ValueError(f"{config_key} must be an http(s) URL")
    if config.timeout <= 0:
        raise ValueError("api.timeout must be positive")
    if config.client_id and not config.refresh_token and not config.access_token:
        raise ValueError(
            f"{config.client_id_env} is set but neither {config.refresh_token_env} "
            f"nor {config.access_token_env} is. Set them in your .env file or shell environment."
        )


def _load_from_env(name: str) -> str:
    if not name:
        return ""
    return os.getenv(name, "").strip()

"""Relay configuration.

Settings are read once at startup from the environment and an optional
``.env`` file, then passed explicitly to the app factory. Request handling
never consults the environment.
"""

from __future__ import annotations

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from hoarder_relay.errors import ConfigError

DEFAULT_PORT = 8080


class Settings(BaseSettings):
    """Environment-driven settings for the relay."""

    webhook_secret: str
    hoarder_api_url: str
    hoarder_api_token: str
    save_new_entries: bool = False

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    bookmark_timeout: float = 10.0

    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator("webhook_secret", "hoarder_api_url", "hoarder_api_token")
    @classmethod
    def _required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be set")
        return value

    @field_validator("save_new_entries", mode="before")
    @classmethod
    def _blank_is_false(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return False
        return value

    @field_validator("port", mode="before")
    @classmethod
    def _strip_colon(cls, value: object) -> object:
        # Accept Go-style listen addresses such as ":8080"
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return DEFAULT_PORT
            return value.lstrip(":")
        return value

    @field_validator("hoarder_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("must be set")
        return value


def load_settings(**overrides: object) -> Settings:
    """Build ``Settings``, turning validation failures into ``ConfigError``."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        problems = []
        for err in e.errors():
            name = ".".join(str(part) for part in err["loc"]).upper()
            problems.append(f"{name}: {err['msg']}")
        raise ConfigError("invalid configuration: " + "; ".join(problems)) from e

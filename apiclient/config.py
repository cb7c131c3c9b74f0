"""Client configuration and environment-backed settings."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from apiclient.core.codecs import Decoder, JSONDecoder
from apiclient.core.headers import basic_auth_header
from apiclient.core.request import identity
from apiclient.models import WireRequest

Validator = Callable[[bytes, int, Mapping[str, str]], None]
PrepareHook = Callable[[WireRequest], WireRequest]


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    base_url: str = Field(default="http://localhost:8000", alias="APICLIENT_BASE_URL")
    log_level: str = Field(default="INFO", alias="APICLIENT_LOG_LEVEL")
    timeout_seconds: float = Field(default=10.0, alias="APICLIENT_TIMEOUT_SECONDS", gt=0.0)
    verify_tls: bool = Field(default=True, alias="APICLIENT_VERIFY_TLS")
    follow_redirects: bool = Field(default=True, alias="APICLIENT_FOLLOW_REDIRECTS")
    default_headers: dict[str, str] = Field(
        default_factory=dict,
        alias="APICLIENT_DEFAULT_HEADERS",
    )
    basic_auth_username: str | None = Field(
        default=None,
        alias="APICLIENT_BASIC_AUTH_USERNAME",
        validation_alias=AliasChoices("APICLIENT_BASIC_AUTH_USERNAME", "APICLIENT_USERNAME"),
    )
    basic_auth_password: SecretStr | None = Field(
        default=None,
        alias="APICLIENT_BASIC_AUTH_PASSWORD",
        validation_alias=AliasChoices("APICLIENT_BASIC_AUTH_PASSWORD", "APICLIENT_PASSWORD"),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()  # type: ignore[call-arg]


@dataclass(frozen=True)
class BasicAuth:
    """Credentials for HTTP basic authentication."""

    username: str
    password: str = field(repr=False)

    @property
    def header_value(self) -> str:
        return basic_auth_header(self.username, self.password)


def _default_headers() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ClientConfig:
    """Configuration shared read-only by every call made through a client.

    ``validate`` receives ``(content, status_code, headers)`` after each
    successful round trip and raises to reject the response.
    """

    base_url: str
    validate: Validator
    default_headers: Mapping[str, str] = field(default_factory=_default_headers)
    decoder: Decoder = field(default_factory=JSONDecoder)
    basic_auth: BasicAuth | None = None
    prepare: PrepareHook = identity

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not callable(self.validate):
            raise ValueError("validate must be callable")
        if not callable(self.prepare):
            raise ValueError("prepare must be callable")

        # Freeze copied headers to avoid post-init mutation side effects.
        object.__setattr__(
            self,
            "default_headers",
            MappingProxyType(dict(self.default_headers or {})),
        )

    @property
    def authorization(self) -> str | None:
        return self.basic_auth.header_value if self.basic_auth else None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        validate: Validator,
        decoder: Decoder | None = None,
        prepare: PrepareHook = identity,
    ) -> ClientConfig:
        basic_auth = None
        if settings.basic_auth_username is not None:
            password = settings.basic_auth_password.get_secret_value() if settings.basic_auth_password else ""
            basic_auth = BasicAuth(settings.basic_auth_username, password)
        return cls(
            base_url=settings.base_url,
            validate=validate,
            default_headers=settings.default_headers,
            decoder=decoder or JSONDecoder(),
            basic_auth=basic_auth,
            prepare=prepare,
        )


__all__ = [
    "BasicAuth",
    "ClientConfig",
    "PrepareHook",
    "Settings",
    "Validator",
    "get_settings",
]

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    catalog-api settings, read from the environment or a local ``.env``.

    Keycloak is addressed through two base URLs when access control is on:
    the internal one fetches discovery and JWKS from inside the container
    network, the public one is what tokens carry in ``iss``.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="catalog-api", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    environment: str = Field(default="local", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    api_prefix: str = Field(default="/api/v1", validation_alias="API_PREFIX")

    default_page_size: int = Field(default=10, ge=1, validation_alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, ge=1, validation_alias="MAX_PAGE_SIZE")

    # CSV allowlist
    cors_allowed_origins: str = Field(default="http://localhost:5173", validation_alias="CORS_ALLOWED_ORIGINS")

    # --- Database ---
    database_url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")
    db_dialect: str = Field(default="postgresql+psycopg", validation_alias="DB_DIALECT")
    db_host: str = Field(default="catalog-db", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="catalog_db", validation_alias="DB_NAME")
    db_user: str = Field(default="catalog_app", validation_alias="DB_USER")
    db_password: Optional[str] = Field(default=None, validation_alias="DB_PASSWORD")
    db_auto_create: bool = Field(default=False, validation_alias="DB_AUTO_CREATE")

    # --- Access control ---
    auth_enabled: bool = Field(default=False, validation_alias="AUTH_ENABLED")
    oidc_realm: str = Field(default="catalog", validation_alias="KEYCLOAK_REALM")
    oidc_internal_base_url: str = Field(default="http://keycloak:8080", validation_alias="KEYCLOAK_INTERNAL_BASE_URL")
    oidc_public_base_url: str = Field(default="http://localhost:8080", validation_alias="KEYCLOAK_PUBLIC_BASE_URL")
    # Doubles as the token audience and the resource_access key holding the roles.
    oidc_audience: str = Field(default="catalog-api", validation_alias="KEYCLOAK_CLIENT_ID")
    oidc_leeway_seconds: int = Field(default=10, ge=0, validation_alias="OIDC_LEEWAY_SECONDS")
    oidc_algorithms: str = Field(default="RS256", validation_alias="OIDC_ALGORITHMS")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        return v if not v or v.startswith("/") else f"/{v}"

    @model_validator(mode="after")
    def _check_page_sizes(self) -> "Settings":
        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE")
        return self

    @property
    def cors_origins_list(self) -> list[str]:
        return _split_csv(self.cors_allowed_origins)

    @property
    def oidc_algorithms_list(self) -> list[str]:
        return _split_csv(self.oidc_algorithms)

    @property
    def oidc_issuer_expected(self) -> str:
        return f"{self.oidc_public_base_url.rstrip('/')}/realms/{self.oidc_realm}"

    @property
    def oidc_discovery_url(self) -> str:
        internal_issuer = f"{self.oidc_internal_base_url.rstrip('/')}/realms/{self.oidc_realm}"
        return f"{internal_issuer}/.well-known/openid-configuration"

    @property
    def database_url_resolved(self) -> str:
        """
        DATABASE_URL verbatim when set, otherwise a URL assembled from DB_*.

        The assembled URL escapes the password, so DB_PASSWORD may hold any character.
        """
        if self.database_url and self.database_url.strip():
            return self.database_url.strip()

        url = URL.create(
            drivername=self.db_dialect,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

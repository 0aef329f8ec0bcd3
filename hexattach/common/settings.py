# hexattach/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from hexattach.common.strings.splitters import csv_to_list


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)


class DBConfig(BaseModel):
    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "hexattach"
    user: str = "hexuser"
    password: str = "hexpass"
    schema_name: str = Field(default="hexattach", alias="DB_SCHEMA")
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 1800

    # Optional single URL (if set, it takes precedence)
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        if self.url:
            return self.url
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class HostAssociationOverride(BaseModel):
    """Per host type overrides; None means 'inherit the global flag'."""
    rehydrate_media: Optional[bool] = None
    detach_on_soft_delete: Optional[bool] = None


class EffectiveAssociationFlags(BaseModel):
    rehydrate_media: bool
    detach_on_soft_delete: bool


class AssociationConfig(BaseModel):
    # reload a host's media relation before reads once its own writes made it stale
    rehydrate_media: bool = True
    # cascade media deletion when a host is soft deleted (hard deletes always cascade)
    detach_on_soft_delete: bool = False
    host_overrides: Dict[str, HostAssociationOverride] = Field(default_factory=dict)
    # batch size for IN (...) lists when loading many hosts at once
    batch_size: int = Field(500, ge=1, le=10_000)

    @field_validator("rehydrate_media", "detach_on_soft_delete", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    def resolve(self, host_type: str) -> EffectiveAssociationFlags:
        override = self.host_overrides.get(host_type)
        rehydrate = self.rehydrate_media
        detach = self.detach_on_soft_delete
        if override is not None:
            if override.rehydrate_media is not None:
                rehydrate = override.rehydrate_media
            if override.detach_on_soft_delete is not None:
                detach = override.detach_on_soft_delete
        return EffectiveAssociationFlags(rehydrate_media=rehydrate, detach_on_soft_delete=detach)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "hexattach"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"
    tz: str = "UTC"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    associations: AssociationConfig = AssociationConfig()

    # -------- Alembic / migrations --------
    alembic_script_location: str = "hexattach/database/alembic"
    alembic_version_table_schema: str = "public"

    # -------- Testcontainers / CI toggles --------
    use_testcontainers: bool = True
    test_db_image: str = "postgres:15-alpine"
    test_db_wait_timeout_sec: int = 30

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Convenience: DB URL & schema =====
    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.db.effective_url

    @computed_field  # type: ignore[misc]
    @property
    def db_schema(self) -> str:
        return self.db.schema_name


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from hexattach.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically

"""
Configuration management for usersvc
"""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database configuration"""

    url: str = "sqlite+aiosqlite:///./usersvc.db"
    echo: bool = False
    pool_size: int = 10


class PaginationConfig(BaseModel):
    """Defaults applied to query options that are not supplied"""

    default_limit: int = Field(10, ge=1)
    default_offset: int = Field(0, ge=0)


class SecurityConfig(BaseModel):
    """Password hashing configuration"""

    password_iterations: int = Field(100_000, ge=1)


class Settings(BaseSettings):
    """Main settings class"""

    model_config = SettingsConfigDict(
        env_prefix="USERSVC_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    database: DatabaseConfig = DatabaseConfig()
    pagination: PaginationConfig = PaginationConfig()
    security: SecurityConfig = SecurityConfig()


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once"""
    return Settings()

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "TeamLink API"
    environment: str = "dev"
    log_level: str = "INFO"

    # ─────────── API ───────────
    api_prefix: str = "/api/v1"
    request_id_header: str = "X-Request-Id"
    cors_origins: List[str] = ["http://localhost:3001"]

    # ─────────── DATABASE ───────────
    database_url: str

    # ─────────── IDENTITY PROVIDER ───────────
    # HS* algorithms verify with jwt_secret_key, RS* with the realm public key.
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = None
    jwt_issuer: Optional[str] = None
    leader_role: str = "leader"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

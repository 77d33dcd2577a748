from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NHLAPI_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # NHL stats API
    base_url: str = "https://statsapi.web.nhl.com/api/v1"
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0

    # Batch fetching
    max_workers: int = Field(default=8, ge=1)

    # Name -> id lookup table (CSV with nameMd5,id columns)
    player_map_path: str | None = None

    log_level: str = "INFO"

    # -----------------------------
    # Required-value helpers
    # -----------------------------

    def require_player_map_path(self) -> str:
        if not self.player_map_path:
            raise RuntimeError(
                "NHLAPI_PLAYER_MAP_PATH is not set. Set it in the environment or .env file."
            )
        return self.player_map_path


settings = Settings()

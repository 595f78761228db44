from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Board
    grid_radius: int = 8
    tiles_per_player: int = 20

    # Layout (pixel radius of one hex cell)
    hex_size: float = 28.0

    # Suggested level for the hosting application's logging setup
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="HEXZOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()

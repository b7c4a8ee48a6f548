"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    iconsmith_env: str = "development"
    iconsmith_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Output files
    output_directory: str = "icons"
    icons_file_name: str = "icons.js"
    sprite_file_name: str = "sprite.svg"
    variants_file_name: str = "svg-variants.js"
    animations_file_name: str = "animations.js"

    # Module form
    manifest_name: str = "icons"
    default_view_box: str = "0 0 24 24"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

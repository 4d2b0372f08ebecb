from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Process configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Site configuration document (JSON or YAML)
    config_file: str = "config.json"

    # API (port comes from the site config)
    api_host: str = "0.0.0.0"

    # Collector
    health_check_timeout: float = 10.0  # seconds per endpoint GET
    disk_path: str = "/"
    cpu_per_core: bool = True  # False = single aggregate CPU value

    # Logging
    log_level: str = "INFO"


settings = Settings()

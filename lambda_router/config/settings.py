"""Router settings loaded from environment variables.

These only supply defaults; every consumer also accepts the value as an
explicit parameter.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Architect sandbox serves plain http; deployed stages are https
    arc_sandbox: bool = False

    # Passed through unchanged to the framework adapter
    runtime_mode: str = "production"

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


def default_data_dir() -> Path:
    data_home = os.getenv("XDG_DATA_HOME") or os.path.join(
        os.path.expanduser("~"), ".local", "share"
    )
    return Path(data_home) / "knowledge-base"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Storage
    DATA_DIR: Path = Field(default_factory=default_data_dir)

    # HTTP
    LISTEN_HOST: str = "0.0.0.0"
    LISTEN_PORT: int = 8080

    # Logging
    LOG_LEVEL: str = "INFO"

    # Folder tree rendering
    TREE_DIR_CLASS: str = "dir"
    TREE_POST_CLASS: str = "post"

    @property
    def listen_addr(self) -> str:
        return f"{self.LISTEN_HOST}:{self.LISTEN_PORT}"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()

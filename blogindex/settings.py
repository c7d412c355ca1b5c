from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def normalize_extensions(extensions) -> tuple[str, ...]:
    """Lowercase each extension and make sure it starts with a dot."""
    return tuple(
        ext.lower() if ext.startswith(".") else f".{ext.lower()}"
        for ext in (e.strip() for e in extensions)
        if ext
    )


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    CONTENT_DIR: str = "src/content/blog"
    CONTENT_EXTENSIONS: List[str] = [".md"]

    # Loading
    MAX_WORKERS: int = 1
    DUPLICATE_SLUG_POLICY: Literal["first_wins", "fatal"] = "first_wins"

    # Summaries
    WORDS_PER_MINUTE: int = 200

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def content_path(self) -> Path:
        return Path(self.CONTENT_DIR)

    @property
    def normalized_extensions(self) -> tuple[str, ...]:
        return normalize_extensions(self.CONTENT_EXTENSIONS)


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()

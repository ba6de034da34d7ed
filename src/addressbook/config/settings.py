from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, strip_whitespace

class Settings(BaseSettings):
    """
    Address-book settings, read from ADDRESSBOOK_* environment variables (and .env).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration (sqlite file under DATABASE_DIR)
    DATABASE_DIR: Path = Path("./Database")
    DATABASE_FILENAME: str = "sqlite.db"
    DATABASE_URL_OVERRIDE: str | None = None

    # Name of the reserved table that always exists and can never be dropped
    DEFAULT_TABLE: str = "default_table"

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Exports
    EXPORT_DIR: Path = Path("./Address Books")

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "text"
    LOG_TO_STDOUT: bool = False
    LOG_DIR: Path = Path("./logs")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the SQLAlchemy URL of the address-book database.

        `DATABASE_URL_OVERRIDE` wins when set (tests point it at `sqlite://` or a tmp file);
        otherwise the URL is built from `DATABASE_DIR` / `DATABASE_FILENAME`.

        Returns:
            str: The database connection URL.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        return f"sqlite:///{(Path(self.DATABASE_DIR) / self.DATABASE_FILENAME).as_posix()}"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """ADDRESSBOOK_LOG_LEVEL=debug is accepted as DEBUG."""
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        # JSON and Json both mean json
        return to_lowercase(v)

    @field_validator("DEFAULT_TABLE", mode="before")
    def strip_default_table(cls, v: str | None) -> str | None:
        return strip_whitespace(v)

    # --- ConfigDict settings ---
    model_config = ConfigDict(
        env_prefix="ADDRESSBOOK_",
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached with @lru_cache().
@lru_cache()
def get_settings() -> Settings:
    return Settings()

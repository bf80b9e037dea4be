# config/settings.py
import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


BASE_DIR: Path = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    PUBLIC_DIR: str = Field(
        default=str(BASE_DIR / "public"), validation_alias="PUBLIC_DIR"
    )

    # Identity provider (Hanko)
    HANKO_API_URL: str = Field(..., validation_alias="HANKO_API_URL")
    AUTH_COOKIE_NAME: str = Field(default="hanko", validation_alias="AUTH_COOKIE_NAME")

    # Object storage + CDN (Bunny)
    BUNNY_STORAGE_URL: str = Field(..., validation_alias="BUNNY_STORAGE_URL")
    BUNNY_API_KEY: str = Field(..., validation_alias="BUNNY_API_KEY")
    BUNNY_PULL_ZONE: str = Field(default="", validation_alias="BUNNY_PULL_ZONE")
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0, validation_alias="HTTP_TIMEOUT_SECONDS"
    )

    # Recursive listing
    LIST_CONCURRENCY: int = Field(default=8, validation_alias="LIST_CONCURRENCY")
    LIST_MAX_DEPTH: int = Field(default=32, validation_alias="LIST_MAX_DEPTH")
    LIST_DEADLINE_SECONDS: float = Field(
        default=30.0, validation_alias="LIST_DEADLINE_SECONDS"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )
    RATE_LIMIT_ENABLED: bool = Field(default=False, validation_alias="RATE_LIMIT_ENABLED")
    RATE_LIMIT_TIMES: int = Field(default=60, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    MAX_FILE_MB: int = Field(default=5, validation_alias="MAX_FILE_MB")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Logging knobs
    LOGGER_NAME: str = "public-monster"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @property
    def max_file_bytes(self) -> int:
        return self.MAX_FILE_MB * 1024 * 1024


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    db_path: Path
    host: str = "127.0.0.1"
    port: int = 5000
    timezone: str = "UTC"
    identity_header: str = "X-User-Id"
    default_page_limit: int = 10
    max_page_limit: int = 100
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {value}")
    return value


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()

    db_raw = os.getenv("DB_PATH", "data/tasknest.db").strip()
    identity_header = os.getenv("IDENTITY_HEADER", "X-User-Id").strip()
    if not identity_header:
        raise RuntimeError("IDENTITY_HEADER must not be empty")

    default_limit = _int_env("DEFAULT_PAGE_LIMIT", 10)
    max_limit = _int_env("MAX_PAGE_LIMIT", 100)
    if default_limit > max_limit:
        raise RuntimeError("DEFAULT_PAGE_LIMIT cannot exceed MAX_PAGE_LIMIT")

    # db_path may be relative; main resolves it
    return Settings(
        db_path=Path(db_raw),
        host=os.getenv("HOST", "127.0.0.1").strip(),
        port=_int_env("PORT", 5000),
        timezone=os.getenv("TZ", "UTC").strip() or "UTC",
        identity_header=identity_header,
        default_page_limit=default_limit,
        max_page_limit=max_limit,
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )

import os
from typing import List

# Basic settings helper to read environment configuration.


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_list(val: str | None, default: List[str]) -> List[str]:
    if not val:
        return list(default)
    return [item.strip() for item in val.split(",") if item.strip()]


class Settings:
    def __init__(self) -> None:
        self.UPLOADS_DIR: str = os.getenv("UPLOADS_DIR", "uploads")
        self.UPLOADS_URL_PREFIX: str = os.getenv("UPLOADS_URL_PREFIX", "/uploads").rstrip("/")
        self.SEED_BOOKS: bool = _as_bool(os.getenv("SEED_BOOKS"), True)
        self.CORS_ALLOW_ORIGINS: List[str] = _as_list(os.getenv("CORS_ALLOW_ORIGINS"), ["*"])
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.CATALOG_API_URL: str = os.getenv("CATALOG_API_URL", "http://127.0.0.1:8000").rstrip("/")
        self.CATALOG_API_TIMEOUT: float = float(os.getenv("CATALOG_API_TIMEOUT", "10"))


settings = Settings()

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_SESSION_FILE = str(Path.home() / ".jstore" / "session.json")


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


class Settings(BaseModel):
    api_url: str = Field(DEFAULT_API_URL, description="Base URL of the store backend")
    session_file: str = Field(DEFAULT_SESSION_FILE, description="Where the token and user are persisted")
    timeout: Optional[float] = Field(None, ge=0, description="Request timeout in seconds, None keeps the httpx default")
    page_size: int = Field(12, ge=1, description="Catalog page size")
    log_level: str = Field("WARNING")


def load_settings() -> Settings:
    return Settings(
        api_url=os.getenv("STORE_API_URL", DEFAULT_API_URL),
        session_file=os.getenv("STORE_SESSION_FILE", DEFAULT_SESSION_FILE),
        timeout=_optional_float(os.getenv("STORE_API_TIMEOUT")),
        page_size=int(os.getenv("STORE_PAGE_SIZE", "12")),
        log_level=os.getenv("STORE_LOG_LEVEL", "WARNING"),
    )


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

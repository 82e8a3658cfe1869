# config.py
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:5000/api/v1"
SESSION_KEY = "ironing_shop_user"


@dataclass
class Settings:
    api_url: str = DEFAULT_API_URL
    session_storage: str = "memory"  # "memory" or "file"
    session_dir: str = ".ironpress"
    request_timeout: float = 10.0
    log_level: str = "INFO"


def load_settings() -> Settings:
    load_dotenv()

    storage = os.getenv("SESSION_STORAGE", "memory").strip().lower()
    if storage not in ("file", "memory"):
        raise RuntimeError(f"SESSION_STORAGE must be 'file' or 'memory', got {storage!r}")

    return Settings(
        api_url=os.getenv("API_URL", DEFAULT_API_URL).rstrip("/"),
        session_storage=storage,
        session_dir=os.getenv("SESSION_DIR", ".ironpress"),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "10")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

"""Runtime configuration read from the environment.

Values are resolved once at import time; a local .env file is loaded first so
development settings do not need to be exported by hand.
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./agribooks.db")
SQL_ECHO = _env_bool("SQL_ECHO")

# Reminder engine
REMINDER_CHECK_INTERVAL_SECONDS = _env_int("REMINDER_CHECK_INTERVAL_SECONDS", 60 * 60)
REMINDER_SWEEP_CONCURRENCY = _env_int("REMINDER_SWEEP_CONCURRENCY", 8)
REMINDER_HOOK_WORKERS = _env_int("REMINDER_HOOK_WORKERS", 4)
REMINDER_HOOK_QUEUE_LIMIT = _env_int("REMINDER_HOOK_QUEUE_LIMIT", 1000)
REMINDER_COMPLETE_ON_TRIGGER = _env_bool("REMINDER_COMPLETE_ON_TRIGGER")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "json")  # json | text

# HTTP server and CLI
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = _env_int("API_PORT", 8000)
API_URL = os.getenv("AGRIBOOKS_API_URL", f"http://{API_HOST}:{API_PORT}")

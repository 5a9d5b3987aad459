import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DB_PATH = "tracker.db"
DEFAULT_LOG_LEVEL = "INFO"


def load_env() -> None:
    """Load .env from the working directory if present.
    Variables already set in the environment win.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def get_db_path(path: Optional[Path] = None) -> Path:
    if path is not None:
        return Path(path)
    load_env()
    value = (os.getenv("PARCEL_DB_PATH") or "").strip()
    return Path(value or DEFAULT_DB_PATH)


def get_log_level() -> str:
    load_env()
    return (os.getenv("PARCEL_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()


def get_log_dir() -> Optional[Path]:
    load_env()
    value = (os.getenv("PARCEL_LOG_DIR") or "").strip()
    return Path(value) if value else None

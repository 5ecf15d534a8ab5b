"""
Dashboard configuration from the environment (.env locally, secrets on Streamlit Cloud)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    db_path: str = "data/analytics.db"
    user_id: Optional[str] = None
    default_days: int = 30
    trend_window_days: int = 30
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default


def export_secrets(secrets: Mapping) -> None:
    """Copy Streamlit secrets into os.environ without overriding real env vars."""
    for key, value in secrets.items():
        os.environ.setdefault(key, str(value))


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_dotenv(env_file)
    return Settings(
        db_path=os.getenv('DASHBOARD_DB_PATH', Settings.db_path),
        user_id=os.getenv('DASHBOARD_USER_ID') or None,
        default_days=_int_env('DASHBOARD_DEFAULT_DAYS', Settings.default_days),
        trend_window_days=_int_env('DASHBOARD_TREND_WINDOW_DAYS', Settings.trend_window_days),
        log_level=os.getenv('LOG_LEVEL', Settings.log_level).upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

"""
Runtime configuration and logging setup for simple-contacts.

File: config.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from .database.common import LOCAL_DB_PATH

DEFAULT_DB_PATH = LOCAL_DB_PATH
DEFAULT_IMPORT_URL = "https://68e7cf9510e3f82fbf40d84d.mockapi.io/NguyenTanDat_22675131"
DEFAULT_LOG_DIR = Path("logs")

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(message)s'


@dataclass
class Settings:
    """Settings for the contact store, import source and logging."""

    db_path: Path = field(default_factory=lambda: DEFAULT_DB_PATH)
    import_url: str = DEFAULT_IMPORT_URL
    log_dir: Path = field(default_factory=lambda: DEFAULT_LOG_DIR)
    log_level: str = "INFO"

    def __post_init__(self):
        # Ensure paths are Path objects
        if isinstance(self.db_path, str):
            self.db_path = Path(self.db_path)
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls, env_file: Path = Path(".env")) -> "Settings":
        """
        Build settings from environment variables.

        Values from `env_file` (relative to the working directory) are loaded
        first but never override variables already set.

        Recognized variables: CONTACTS_DB_PATH, CONTACTS_IMPORT_URL,
        CONTACTS_LOG_DIR, CONTACTS_LOG_LEVEL.
        """
        load_dotenv(env_file)
        return cls(
            db_path=os.environ.get("CONTACTS_DB_PATH", str(DEFAULT_DB_PATH)),
            import_url=os.environ.get("CONTACTS_IMPORT_URL") or DEFAULT_IMPORT_URL,
            log_dir=os.environ.get("CONTACTS_LOG_DIR", str(DEFAULT_LOG_DIR)),
            log_level=os.environ.get("CONTACTS_LOG_LEVEL", "INFO"),
        )


def configure_logging(settings: Settings) -> None:
    """Log to a dated file under the log directory and to the console."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(settings.log_dir / f"simple_contacts_{datetime.now().strftime('%Y-%m-%d')}.log"),
            logging.StreamHandler()
        ]
    )

    # Suppress per-request logging from the HTTP libraries
    for logger_name in ["httpx", "httpcore"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


__all__ = [
    "DEFAULT_DB_PATH",
    "DEFAULT_IMPORT_URL",
    "Settings",
    "configure_logging",
]

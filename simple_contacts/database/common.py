"""
Common database constants and utilities

File: database/common.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

import time
from pathlib import Path

DATA_DIR = Path(__file__).parent.parent.parent / "data"
DB_NAME = "simple-contacts.db"
LOCAL_DB_PATH = DATA_DIR / DB_NAME

CONTACT_COLUMNS = "id, name, phone, email, favorite, created_at"


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


__all__ = [
    "CONTACT_COLUMNS",
    "DATA_DIR",
    "DB_NAME",
    "LOCAL_DB_PATH",
    "now_ms",
]

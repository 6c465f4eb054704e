"""
File: database/__init__.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

from .common import DB_NAME, LOCAL_DB_PATH, now_ms
from .contacts import (
    delete_contact,
    fetch_contacts,
    fetch_existing_phones,
    flip_favorite,
    insert_contact,
    set_favorite,
    update_contact,
)
from .create_tables import (
    SEED_CONTACTS,
    create_contacts_table,
    ensure_default_favorite,
    seed_initial_contacts,
)
from .store import ContactStore

__all__ = [
    "DB_NAME",
    "LOCAL_DB_PATH",
    "now_ms",
    "ContactStore",
    "SEED_CONTACTS",
    "create_contacts_table",
    "seed_initial_contacts",
    "ensure_default_favorite",
    "fetch_contacts",
    "insert_contact",
    "update_contact",
    "delete_contact",
    "set_favorite",
    "flip_favorite",
    "fetch_existing_phones",
]

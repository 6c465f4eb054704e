"""
Schema creation and first-run seeding for the contacts table.

File: database/create_tables.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

import logging
from typing import Optional

import aiosqlite

log = logging.getLogger(__name__)

# Inserted only when the table is found empty
SEED_CONTACTS = [
    {"name": "Alice Nguyen", "phone": "0901234567", "favorite": 1},
    {"name": "Bao Tran", "phone": "0987654321", "favorite": 0},
    {"name": "Cuong Le", "phone": "0912345678", "favorite": 0},
]


async def create_contacts_table(conn: aiosqlite.Connection) -> None:
    """Create the contacts table if it does not exist. Never drops anything."""
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS contacts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            phone TEXT,
            email TEXT,
            favorite INTEGER DEFAULT 0,
            created_at INTEGER
        )
    """)
    await conn.commit()


async def seed_initial_contacts(conn: aiosqlite.Connection, now: int) -> int:
    """
    Insert the sample contacts if the table is empty.

    Args:
        conn: Open database connection
        now: Base timestamp in ms; seed i gets created_at = now + i

    Returns:
        Number of rows inserted (0 if the table already had data)
    """
    async with conn.execute("SELECT COUNT(*) FROM contacts") as cursor:
        row = await cursor.fetchone()
        if row and row[0] > 0:
            return 0

    for index, contact in enumerate(SEED_CONTACTS):
        await conn.execute(
            "INSERT INTO contacts (name, phone, email, favorite, created_at) VALUES (?, ?, ?, ?, ?)",
            (contact["name"], contact["phone"], None, contact.get("favorite", 0), now + index),
        )
    await conn.commit()

    log.info(f"Seeded {len(SEED_CONTACTS)} sample contacts")
    return len(SEED_CONTACTS)


async def ensure_default_favorite(conn: aiosqlite.Connection) -> Optional[int]:
    """
    Promote the lowest-id contact to favorite if no favorite exists.

    Returns:
        Id of the promoted contact, or None if nothing changed
    """
    async with conn.execute("SELECT id FROM contacts WHERE favorite = 1 LIMIT 1") as cursor:
        if await cursor.fetchone():
            return None

    async with conn.execute("SELECT id FROM contacts ORDER BY id ASC LIMIT 1") as cursor:
        first = await cursor.fetchone()
    if not first:
        return None

    await conn.execute("UPDATE contacts SET favorite = 1 WHERE id = ?", (first[0],))
    await conn.commit()

    log.info(f"No favorite found, promoted contact {first[0]}")
    return first[0]

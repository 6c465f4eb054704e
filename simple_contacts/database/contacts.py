"""
Statements against the contacts table.

Every write is committed on its own; there is no multi-statement transaction.

File: database/contacts.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

import logging
from typing import Any, List, Sequence, Set

import aiosqlite

from ..errors import StoreWriteError
from ..models import Contact, ContactDraft
from .common import CONTACT_COLUMNS

log = logging.getLogger(__name__)


async def _write(conn: aiosqlite.Connection, sql: str, params: Sequence[Any]) -> aiosqlite.Cursor:
    """Execute and commit a single write statement."""
    try:
        cursor = await conn.execute(sql, params)
        await conn.commit()
        return cursor
    except (aiosqlite.Error, ValueError) as e:
        log.error(f"Write failed: {e}")
        raise StoreWriteError(f"Could not write contact: {e}") from e


async def fetch_contacts(conn: aiosqlite.Connection) -> List[Contact]:
    """
    Get every contact, favorites first, then by name (case-insensitive).

    Raises:
        StoreWriteError: If the query fails
    """
    contacts = []
    try:
        async with conn.execute(
            f"""
            SELECT {CONTACT_COLUMNS} FROM contacts
            ORDER BY favorite DESC, name COLLATE NOCASE ASC
            """
        ) as cursor:
            columns = [description[0] for description in cursor.description]
            async for row in cursor:
                contacts.append(Contact.from_db_dict(dict(zip(columns, row))))
    except (aiosqlite.Error, ValueError) as e:
        log.error(f"Error loading contacts: {e}")
        raise StoreWriteError(f"Could not load contacts: {e}") from e

    return contacts


async def insert_contact(
    conn: aiosqlite.Connection,
    draft: ContactDraft,
    created_at: int,
    favorite: bool = False,
) -> int:
    """
    Insert one contact.

    Returns:
        The new row id
    """
    cursor = await _write(
        conn,
        "INSERT INTO contacts (name, phone, email, favorite, created_at) VALUES (?, ?, ?, ?, ?)",
        (draft.name, draft.phone, draft.email, 1 if favorite else 0, created_at),
    )
    return cursor.lastrowid


async def update_contact(conn: aiosqlite.Connection, contact_id: int, draft: ContactDraft) -> int:
    """
    Rewrite name/phone/email of a contact. favorite and created_at are untouched.

    Returns:
        Number of rows changed (0 if the id does not exist)
    """
    cursor = await _write(
        conn,
        "UPDATE contacts SET name = ?, phone = ?, email = ? WHERE id = ?",
        (draft.name, draft.phone, draft.email, contact_id),
    )
    return cursor.rowcount


async def delete_contact(conn: aiosqlite.Connection, contact_id: int) -> int:
    """Hard-delete a contact. Returns the number of rows removed."""
    cursor = await _write(conn, "DELETE FROM contacts WHERE id = ?", (contact_id,))
    return cursor.rowcount


async def set_favorite(conn: aiosqlite.Connection, contact_id: int, favorite: bool) -> int:
    cursor = await _write(
        conn,
        "UPDATE contacts SET favorite = ? WHERE id = ?",
        (1 if favorite else 0, contact_id),
    )
    return cursor.rowcount


async def flip_favorite(conn: aiosqlite.Connection, contact_id: int) -> int:
    """Flip the favorite flag inside SQLite, based on the stored value."""
    cursor = await _write(
        conn,
        "UPDATE contacts SET favorite = CASE WHEN favorite = 1 THEN 0 ELSE 1 END WHERE id = ?",
        (contact_id,),
    )
    return cursor.rowcount


async def fetch_existing_phones(conn: aiosqlite.Connection) -> Set[str]:
    """Get the set of trimmed, non-empty phone numbers already stored."""
    phones = set()
    try:
        async with conn.execute("SELECT phone FROM contacts WHERE phone IS NOT NULL") as cursor:
            async for row in cursor:
                phone = str(row[0]).strip()
                if phone:
                    phones.add(phone)
    except (aiosqlite.Error, ValueError) as e:
        log.error(f"Error reading existing phones: {e}")
        raise StoreWriteError(f"Could not read existing phones: {e}") from e

    return phones

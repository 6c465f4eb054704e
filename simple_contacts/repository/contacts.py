"""
Contact repository: CRUD, favorites and remote import over the contact store.

Holds the last loaded snapshot plus loading/error flags for a front end to
render. Every mutation is followed by a silent refresh, and the refresh
outcome is reported separately from the mutation's own outcome.

File: repository/contacts.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

import logging
from typing import Awaitable, Callable, Dict, List, Optional, Tuple, Union

import aiosqlite

from ..config import DEFAULT_IMPORT_URL
from ..database import (
    ContactStore,
    delete_contact,
    fetch_contacts,
    fetch_existing_phones,
    flip_favorite,
    insert_contact,
    now_ms,
    set_favorite,
    update_contact,
)
from ..errors import ContactStoreError, ImportSourceError
from ..models import Contact, ContactDraft, ImportResult, MutationResult, validate_contact_form
from ..remote import RemoteContactSource
from .filtering import filter_contacts

log = logging.getLogger(__name__)

# (contact_id, rows_affected)
WriteOutcome = Tuple[Optional[int], int]


class ContactRepository:
    """
    Sole owner of the contacts table for the rest of the application.
    """

    def __init__(
        self,
        store: ContactStore,
        source: Optional[RemoteContactSource] = None,
        import_url: str = DEFAULT_IMPORT_URL,
        clock: Callable[[], int] = now_ms,
    ):
        """
        Args:
            store: Store whose connection this repository reads and writes
            source: Import source client (a default one is created if omitted)
            import_url: Endpoint used by `import_contacts` when no url is given
            clock: Millisecond clock for created_at values
        """
        self._store = store
        self._source = source or RemoteContactSource()
        self._clock = clock
        self.import_url = import_url

        # Snapshot and flags
        self.contacts: List[Contact] = []
        self.loading = False
        self.error: Optional[str] = None
        self.mutation_error: Optional[str] = None

        # Filter state (never touches the store)
        self.query = ""
        self.favorites_only = False

        # Import state
        self.import_loading = False
        self.import_error: Optional[str] = None
        self.imported_count: Optional[int] = None

    @property
    def filtered_contacts(self) -> List[Contact]:
        return filter_contacts(self.contacts, self.query, self.favorites_only)

    def set_query(self, query: str) -> None:
        self.query = query or ""

    def set_favorites_only(self, favorites_only: bool) -> None:
        self.favorites_only = bool(favorites_only)

    def toggle_favorites_only(self) -> None:
        self.favorites_only = not self.favorites_only

    # -------------------------------------------------
    # Reads
    # -------------------------------------------------

    async def refresh(self, silent: bool = False) -> bool:
        """
        Reload the snapshot from the store.

        Args:
            silent: Don't toggle `loading` (used after mutations)

        Returns:
            True if the snapshot was replaced, False if loading failed
            (the previous snapshot is kept and `error` is set)
        """
        if not silent:
            self.loading = True
        self.error = None
        try:
            conn = await self._store.connection()
            self.contacts = await fetch_contacts(conn)
            return True
        except ContactStoreError as e:
            log.error(f"Failed to load contacts: {e}")
            self.error = str(e)
            return False
        finally:
            if not silent:
                self.loading = False

    async def list_contacts(self) -> List[Contact]:
        """Reload and return all contacts, favorites first then by name."""
        await self.refresh()
        return list(self.contacts)

    # -------------------------------------------------
    # Mutations
    # -------------------------------------------------

    async def add(
        self,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> MutationResult:
        """Insert a new non-favorite contact created now."""
        field_errors = validate_contact_form(name, phone, email)
        if field_errors:
            return self._invalid(field_errors)

        draft = ContactDraft(name=name, phone=phone, email=email)
        created_at = self._clock()

        async def write(conn: aiosqlite.Connection) -> WriteOutcome:
            contact_id = await insert_contact(conn, draft, created_at)
            return contact_id, 1

        return await self._mutate("add contact", write)

    async def update(
        self,
        contact_id: int,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> MutationResult:
        """
        Rewrite name/phone/email of a contact.

        An unknown id is not an error: the result is ok with rows_affected == 0.
        """
        field_errors = validate_contact_form(name, phone, email)
        if field_errors:
            return self._invalid(field_errors)

        draft = ContactDraft(name=name, phone=phone, email=email)

        async def write(conn: aiosqlite.Connection) -> WriteOutcome:
            rows = await update_contact(conn, contact_id, draft)
            return contact_id, rows

        return await self._mutate("update contact", write)

    async def delete(self, contact_id: int) -> MutationResult:
        """Hard-delete a contact. No-op if it does not exist."""

        async def write(conn: aiosqlite.Connection) -> WriteOutcome:
            rows = await delete_contact(conn, contact_id)
            return contact_id, rows

        return await self._mutate("delete contact", write)

    async def toggle_favorite(self, contact: Contact, atomic: bool = False) -> MutationResult:
        """
        Flip a contact's favorite flag.

        By default the new value is computed from the caller's copy of the
        contact, so a stale copy can undo a newer change. With atomic=True the
        flip is evaluated against the stored value instead.
        """

        async def write(conn: aiosqlite.Connection) -> WriteOutcome:
            if atomic:
                rows = await flip_favorite(conn, contact.id)
            else:
                rows = await set_favorite(conn, contact.id, not contact.favorite)
            return contact.id, rows

        return await self._mutate("toggle favorite", write)

    async def import_contacts(self, url: Optional[str] = None) -> ImportResult:
        """
        Merge contacts from the remote source, skipping known phone numbers.

        Records without a phone, or whose phone is already stored (or was
        inserted earlier in the same run), are skipped. Only one import runs
        at a time; a call made while another is in flight returns a skipped
        result.
        """
        if self.import_loading:
            log.warning("Import already in progress, ignoring request")
            return ImportResult(ok=False, skipped=True)

        self.import_loading = True
        self.import_error = None
        self.imported_count = None

        fetched = 0
        inserted = 0
        try:
            try:
                records = await self._source.fetch(url or self.import_url)
                fetched = len(records)

                conn = await self._store.connection()
                known_phones = await fetch_existing_phones(conn)

                for record in records:
                    draft = record.to_draft()
                    phone = (draft.phone or "").strip()
                    if not phone or phone in known_phones:
                        continue
                    await insert_contact(conn, draft, self._clock())
                    known_phones.add(phone)
                    inserted += 1
            except (ImportSourceError, ContactStoreError) as e:
                log.error(f"Import failed after {inserted} inserts: {e}")
                self.import_error = str(e)
                result = ImportResult(
                    ok=False,
                    error=str(e),
                    fetched_count=fetched,
                    imported_count=inserted,
                )
                # Partial inserts stay committed; show them
                if inserted:
                    return await self._with_refresh(result)
                return result

            log.info(f"Imported {inserted} of {fetched} remote contacts")
            self.imported_count = inserted
            return await self._with_refresh(
                ImportResult(ok=True, fetched_count=fetched, imported_count=inserted)
            )
        finally:
            self.import_loading = False

    async def close(self) -> None:
        await self._store.close()

    # -------------------------------------------------
    # Helpers
    # -------------------------------------------------

    def _invalid(self, field_errors: Dict[str, str]) -> MutationResult:
        message = " ".join(field_errors.values())
        self.mutation_error = message
        return MutationResult(ok=False, error=message, field_errors=field_errors)

    async def _mutate(
        self,
        action: str,
        write: Callable[[aiosqlite.Connection], Awaitable[WriteOutcome]],
    ) -> MutationResult:
        """Run one write, then refresh. Write failures skip the refresh."""
        self.mutation_error = None
        try:
            conn = await self._store.connection()
            contact_id, rows = await write(conn)
        except ContactStoreError as e:
            log.error(f"Failed to {action}: {e}")
            self.mutation_error = str(e)
            return MutationResult(ok=False, error=str(e))

        log.debug(f"{action}: id={contact_id} rows={rows}")
        return await self._with_refresh(
            MutationResult(ok=True, contact_id=contact_id, rows_affected=max(rows, 0))
        )

    async def _with_refresh(
        self, result: Union[MutationResult, ImportResult]
    ) -> Union[MutationResult, ImportResult]:
        refreshed = await self.refresh(silent=True)
        result.refreshed = refreshed
        if not refreshed:
            result.refresh_error = self.error
        return result

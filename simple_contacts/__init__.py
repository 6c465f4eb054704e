"""
simple-contacts: a local-first contacts manager backed by SQLite.

- database: store bootstrapper (ContactStore) and table statements
- repository: ContactRepository (CRUD, favorites, import) and filtering
- remote: import source client
- models: pydantic records
"""

from .config import Settings, configure_logging
from .database import ContactStore
from .models import Contact, ContactDraft, ImportResult, MutationResult, RemoteContactRecord
from .remote import RemoteContactSource
from .repository import ContactRepository, filter_contacts

__all__ = [
    "Contact",
    "ContactDraft",
    "ContactRepository",
    "ContactStore",
    "ImportResult",
    "MutationResult",
    "RemoteContactRecord",
    "RemoteContactSource",
    "Settings",
    "configure_logging",
    "filter_contacts",
]

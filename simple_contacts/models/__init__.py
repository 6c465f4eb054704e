"""
Shared data models for simple-contacts.
"""

from .contact import Contact, ContactDraft, validate_contact_form
from .remote_record import NO_NAME, RemoteContactRecord
from .results import ImportResult, MutationResult

__all__ = [
    "Contact",
    "ContactDraft",
    "ImportResult",
    "MutationResult",
    "NO_NAME",
    "RemoteContactRecord",
    "validate_contact_form",
]
